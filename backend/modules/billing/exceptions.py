"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API route handlers to return appropriate HTTP responses.
"""

from shared.exceptions import CostshareError, NotFoundError


class BillingError(CostshareError):
    """Base exception for billing-related errors."""

    pass


class PeriodNotFoundError(NotFoundError):
    """
    Raised when no period has the requested index.

    Period indices shift when a snapshot is added, so a client holding an
    old index can hit this after a period close.
    """

    def __init__(self, period_index: int):
        super().__init__(
            f"Period {period_index} not found",
            code="PERIOD_NOT_FOUND",
            details={"period_index": period_index},
        )


class UserNotInPeriodError(NotFoundError):
    """Raised when the caller has no ranking entry in a period (deleted or not yet created)."""

    def __init__(self, user_id: str, period_index: int):
        super().__init__(
            "User not found in this period (possibly deleted)",
            code="USER_NOT_IN_PERIOD",
            details={"user_id": user_id, "period_index": period_index},
        )
