"""
Usage module data models.

These models are the ingestion boundary for upstream usage data. Every
record that reaches the billing module has passed through them, so missing
or null counters are already defaulted to 0.

Field aliases match the upstream wire names (camelCase). Unknown upstream
fields are kept so that a stored snapshot preserves the full record.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UsageTotals(BaseModel):
    """
    Cumulative (lifetime-to-date) usage counters for one API key.

    These are totals as of the moment they were fetched, not per-period
    values. Per-period values are derived by the billing module.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    cost: float = Field(default=0.0, description="Cumulative cost in USD")
    tokens: int = Field(default=0, description="Cumulative total tokens")
    input_tokens: int = Field(default=0, alias="inputTokens")
    output_tokens: int = Field(default=0, alias="outputTokens")
    cache_create_tokens: int = Field(default=0, alias="cacheCreateTokens")
    cache_read_tokens: int = Field(default=0, alias="cacheReadTokens")
    requests: int = Field(default=0, description="Cumulative request count")
    formatted_cost: Optional[str] = Field(default=None, alias="formattedCost")

    @field_validator("cost", mode="before")
    @classmethod
    def coerce_cost(cls, value: Any) -> float:
        """Default missing or unparseable cost to 0; keep everything else as given."""
        if value is None:
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator(
        "tokens",
        "input_tokens",
        "output_tokens",
        "cache_create_tokens",
        "cache_read_tokens",
        "requests",
        mode="before",
    )
    @classmethod
    def coerce_count(cls, value: Any) -> int:
        """Default missing, unparseable or non-finite counters to 0."""
        if value is None:
            return 0
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(number):
            return 0
        return int(number)


class UsageBreakdown(BaseModel):
    """Usage container. Only the all-time ``total`` bucket is used."""

    model_config = ConfigDict(extra="allow")

    total: UsageTotals = Field(default_factory=UsageTotals)

    @field_validator("total", mode="before")
    @classmethod
    def default_total(cls, value: Any) -> Any:
        return {} if value is None else value


class UserUsageRecord(BaseModel):
    """
    One user's (API key's) cumulative usage as reported upstream.

    Stored verbatim inside snapshots and used as both the start and end
    side of a billing period delta.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., description="Stable user (API key) identifier")
    name: str = Field(default="", description="Display name")
    usage: UsageBreakdown = Field(default_factory=UsageBreakdown)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("usage", mode="before")
    @classmethod
    def default_usage(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def totals(self) -> UsageTotals:
        """Shortcut for ``usage.total``."""
        return self.usage.total
