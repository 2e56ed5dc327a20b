"""
Billing module.

Derives billing periods from snapshots and splits each period's cost
across users.

Public API:
- IBillingCalculator: Interface for period queries
- BillingCalculator: Implementation
- derive_periods / compute_delta: Pure period and delta functions
- Period, PeriodSummary, UserRanking, UserDetail: Result models
- Billing exceptions: PeriodNotFoundError, UserNotInPeriodError
"""

from .interfaces import IBillingCalculator
from .models import (
    Period,
    PeriodSummary,
    PeriodTotals,
    PeriodListResponse,
    UserRanking,
    UserDetail,
    UserDetailRaw,
    DeltaResult,
)
from .exceptions import (
    BillingError,
    PeriodNotFoundError,
    UserNotInPeriodError,
)
from .periods import derive_periods, find_period
from .delta import compute_delta
from .service import BillingCalculator

__all__ = [
    # Interface
    "IBillingCalculator",
    # Models
    "Period",
    "PeriodSummary",
    "PeriodTotals",
    "PeriodListResponse",
    "UserRanking",
    "UserDetail",
    "UserDetailRaw",
    "DeltaResult",
    # Exceptions
    "BillingError",
    "PeriodNotFoundError",
    "UserNotInPeriodError",
    # Core
    "derive_periods",
    "find_period",
    "compute_delta",
    "BillingCalculator",
]
