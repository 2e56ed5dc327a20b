"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests replace any of these through ``app.dependency_overrides``.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.billing.interfaces import IBillingCalculator
    from modules.snapshots.interfaces import ISnapshotStore
    from modules.snapshots.service import SnapshotService
    from modules.usage.interfaces import IUsageSource


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._snapshot_store: "ISnapshotStore | None" = None
        self._usage_source: "IUsageSource | None" = None
        self._billing_calculator: "IBillingCalculator | None" = None
        self._snapshot_service: "SnapshotService | None" = None

    @property
    def snapshot_store(self) -> "ISnapshotStore":
        """Get the snapshot store selected by SNAPSHOT_BACKEND."""
        if self._snapshot_store is None:
            from shared.config import get_settings
            from modules.snapshots.store import InMemorySnapshotStore, SupabaseSnapshotStore

            if get_settings().snapshot_backend == "supabase":
                from shared.database import get_supabase_client
                self._snapshot_store = SupabaseSnapshotStore(get_supabase_client())
            else:
                self._snapshot_store = InMemorySnapshotStore()
        return self._snapshot_store

    @property
    def usage_source(self) -> "IUsageSource":
        """Get the upstream admin API usage source."""
        if self._usage_source is None:
            from modules.usage.sources import AdminApiUsageSource
            self._usage_source = AdminApiUsageSource.from_settings()
        return self._usage_source

    @property
    def billing(self) -> "IBillingCalculator":
        """Get the billing calculator instance."""
        if self._billing_calculator is None:
            from modules.billing.service import BillingCalculator
            self._billing_calculator = BillingCalculator(
                snapshot_store=self.snapshot_store,
                usage_source=self.usage_source,
            )
        return self._billing_calculator

    @property
    def snapshots(self) -> "SnapshotService":
        """Get the snapshot (period close) service."""
        if self._snapshot_service is None:
            from modules.snapshots.service import SnapshotService
            self._snapshot_service = SnapshotService(
                snapshot_store=self.snapshot_store,
                usage_source=self.usage_source,
            )
        return self._snapshot_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._snapshot_store = None
        self._usage_source = None
        self._billing_calculator = None
        self._snapshot_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_snapshot_store() -> "ISnapshotStore":
    """FastAPI dependency for the snapshot store."""
    return get_container().snapshot_store


def get_usage_source() -> "IUsageSource":
    """FastAPI dependency for the usage source."""
    return get_container().usage_source


def get_billing_calculator() -> "IBillingCalculator":
    """FastAPI dependency for the billing calculator."""
    return get_container().billing
