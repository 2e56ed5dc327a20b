"""
Supabase client for the snapshot store.

Only SNAPSHOT_BACKEND=supabase needs a client. Snapshots are written by
the backend alone, so the client uses the service-role key and keeps no
auth session of its own.
"""

from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from .config import Settings, get_settings

REQUIRED_SETTINGS = {
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_SERVICE_ROLE_KEY": "supabase_service_role_key",
}


def missing_settings(settings: Settings) -> list[str]:
    """Names of the environment variables a Supabase client still needs."""
    return [env for env, field in REQUIRED_SETTINGS.items() if not getattr(settings, field)]


def create_snapshot_client(settings: Settings) -> Client:
    """
    Build a service-role client from settings.

    Raises:
        RuntimeError: If the URL or service-role key is missing
    """
    missing = missing_settings(settings)
    if missing:
        raise RuntimeError(
            f"Supabase configuration missing. Set {' and '.join(missing)} "
            f"(required with SNAPSHOT_BACKEND=supabase)."
        )
    options = ClientOptions(
        schema=settings.supabase_schema,
        postgrest_client_timeout=settings.supabase_timeout,
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=options,
    )


@lru_cache
def get_supabase_client() -> Client:
    """Process-wide client built from get_settings()."""
    return create_snapshot_client(get_settings())


def reset_client_cache() -> None:
    """Drop the cached client so the next call rebuilds it from settings."""
    get_supabase_client.cache_clear()
