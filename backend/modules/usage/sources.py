"""
Usage sources for the usage module.

This module implements the IUsageSource interface with two
implementations:
- StaticUsageSource: Serves injected records (tests, local development)
- AdminApiUsageSource: Fetches live usage from the upstream admin API
"""

import asyncio
import logging
import time
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from .models import UserUsageRecord
from .exceptions import (
    InvalidApiKeyError,
    UpstreamAuthError,
    UpstreamResponseError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

# Keys carrying this tag are private and never take part in cost sharing
NOSHARE_TAG = "noshare"


class StaticUsageSource:
    """
    Usage source backed by injected records.

    Tests inject fixed data; ``set_records`` simulates usage growing
    between two reads.
    """

    def __init__(
        self,
        records: Optional[list[Union[UserUsageRecord, dict[str, Any]]]] = None,
        key_ids: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the static usage source.

        Args:
            records: Current usage records (models or raw upstream dicts).
            key_ids: Mapping of API key -> user id for get_key_id.
        """
        self._records: list[UserUsageRecord] = []
        self._key_ids = dict(key_ids or {})
        self.set_records(records or [])

    def set_records(
        self,
        records: list[Union[UserUsageRecord, dict[str, Any]]],
    ) -> None:
        """Replace the live dataset."""
        self._records = [
            r if isinstance(r, UserUsageRecord) else UserUsageRecord.model_validate(r)
            for r in records
        ]

    async def get_current_usage(self) -> list[UserUsageRecord]:
        return list(self._records)

    async def get_key_id(self, api_key: str) -> str:
        key_id = self._key_ids.get(api_key)
        if not key_id:
            raise InvalidApiKeyError()
        return key_id


class AdminApiUsageSource:
    """
    Usage source that reads the upstream admin API.

    Logs in with admin credentials, caches the bearer token until shortly
    before it expires, lists all API keys and overlays their all-time
    batch stats. Keys tagged ``noshare`` are dropped.

    Only login is retried. Failures of the data requests propagate as
    UpstreamUnavailableError / UpstreamResponseError.
    """

    LOGIN_PATH = "/web/auth/login"
    API_KEYS_PATH = "/admin/api-keys"
    BATCH_STATS_PATH = "/admin/api-keys/batch-stats"
    KEY_ID_PATH = "/apiStats/api/get-key-id"

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        max_login_retries: int = 3,
        token_skew_seconds: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the admin API usage source.

        Args:
            base_url: Root URL of the upstream service.
            username: Admin username.
            password: Admin password.
            timeout: Per-request timeout in seconds.
            max_login_retries: Login attempts before giving up.
            token_skew_seconds: Refresh the token this long before it expires.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._timeout = timeout
        self._max_login_retries = max(1, max_login_retries)
        self._skew = token_skew_seconds
        self._transport = transport
        self._token: Optional[str] = None
        self._expires_at: float = 0.0

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AdminApiUsageSource":
        """
        Build a source from application settings.

        Raises:
            RuntimeError: If BASE_URL or admin credentials are missing
        """
        settings = settings or get_settings()
        if not settings.base_url or not settings.admin_username or not settings.admin_password:
            raise RuntimeError(
                "Upstream configuration missing. "
                "Set BASE_URL, ADMIN_USERNAME and ADMIN_PASSWORD environment variables."
            )
        return cls(
            settings.base_url,
            settings.admin_username,
            settings.admin_password,
            timeout=settings.upstream_timeout,
            max_login_retries=settings.upstream_login_retries,
            token_skew_seconds=settings.upstream_token_skew_seconds,
            transport=transport,
        )

    @property
    def has_valid_token(self) -> bool:
        """Whether the cached token can still be used."""
        return bool(self._token) and time.time() + self._skew < self._expires_at

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _login(self, client: httpx.AsyncClient) -> None:
        """Log in with exponential backoff (1s, 2s, 4s, ...)."""
        last_error = ""
        for attempt in range(1, self._max_login_retries + 1):
            try:
                response = await client.post(
                    self.LOGIN_PATH,
                    json={"username": self._username, "password": self._password},
                )
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict) or not data.get("success") or not data.get("token"):
                    raise ValueError("login response invalid")
                self._token = data["token"]
                # expiresIn is in milliseconds
                self._expires_at = time.time() + float(data.get("expiresIn", 0)) / 1000
                logger.info("Logged in to upstream admin API")
                return
            except (httpx.HTTPError, ValueError, TypeError) as e:
                last_error = str(e)
                if attempt < self._max_login_retries:
                    delay = 2 ** (attempt - 1)
                    logger.warning(
                        f"Upstream login attempt {attempt} failed ({e}), retrying in {delay}s"
                    )
                    await asyncio.sleep(delay)

        raise UpstreamAuthError(self._max_login_retries, last_error)

    async def _ensure_token(self, client: httpx.AsyncClient) -> str:
        if not self.has_valid_token:
            await self._login(client)
        return self._token  # type: ignore[return-value]

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request and return the decoded ``success`` envelope."""
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 401:
                # Token revoked or expired early; log in again next time
                self._token = None
            raise UpstreamUnavailableError(
                f"{method} {path} returned {status_code}",
                upstream_status=status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamResponseError(path, "response is not JSON") from e

        if not isinstance(data, dict) or not data.get("success"):
            raise UpstreamResponseError(path, "request was not successful")
        return data

    async def get_current_usage(self) -> list[UserUsageRecord]:
        """Fetch all shared keys with their all-time usage."""
        async with self._client() as client:
            token = await self._ensure_token(client)
            headers = {"Authorization": f"Bearer {token}"}

            listing = await self._request(
                client,
                "GET",
                self.API_KEYS_PATH,
                params={"timeRange": "all"},
                headers=headers,
            )
            payload = listing.get("data")
            items = payload.get("items") if isinstance(payload, dict) else None
            if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
                raise UpstreamResponseError(self.API_KEYS_PATH, "items is not a list of objects")

            shared = [item for item in items if NOSHARE_TAG not in (item.get("tags") or [])]
            key_ids = [item.get("id") for item in shared]

            stats = await self._request(
                client,
                "POST",
                self.BATCH_STATS_PATH,
                json={"keyIds": key_ids, "timeRange": "all"},
                headers=headers,
            )
            stats_by_key = stats.get("data") or {}
            if not isinstance(stats_by_key, dict):
                raise UpstreamResponseError(self.BATCH_STATS_PATH, "data is not an object")

        for item in shared:
            key_usage = stats_by_key.get(item.get("id"))
            if key_usage:
                usage = item.get("usage")
                if not isinstance(usage, dict):
                    usage = {}
                usage["total"] = key_usage
                item["usage"] = usage

        try:
            records = [UserUsageRecord.model_validate(item) for item in shared]
        except PydanticValidationError as e:
            raise UpstreamResponseError(self.API_KEYS_PATH, str(e)) from e

        logger.debug(f"Fetched live usage for {len(records)} users")
        return records

    async def get_key_id(self, api_key: str) -> str:
        """Resolve an API key to its id via the public stats endpoint."""
        async with self._client() as client:
            try:
                response = await client.post(self.KEY_ID_PATH, json={"apiKey": api_key})
            except httpx.HTTPError as e:
                raise UpstreamUnavailableError(f"POST {self.KEY_ID_PATH} failed: {e}") from e

        if response.status_code >= 500:
            raise UpstreamUnavailableError(
                f"POST {self.KEY_ID_PATH} returned {response.status_code}",
                upstream_status=response.status_code,
            )
        if response.is_error:
            raise InvalidApiKeyError()

        try:
            data = response.json()
        except ValueError:
            raise InvalidApiKeyError("Invalid API key or response format")

        key_id = None
        if isinstance(data, dict) and data.get("success") and isinstance(data.get("data"), dict):
            key_id = data["data"].get("id")
        if not key_id:
            raise InvalidApiKeyError("Invalid API key or response format")
        return str(key_id)
