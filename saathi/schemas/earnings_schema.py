"""Earnings dataset records and the derived breakdown."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItem(BaseModel):
    """A single penalty or reward entry."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: float = 0.0


class EarningsRecord(BaseModel):
    """One driver's row in the earnings dataset. Loaded once, never mutated."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    driver_id: str = Field(min_length=1)
    gross_earnings: float = Field(default=0.0, ge=0)
    expenses: float = Field(default=0.0, ge=0)
    penalties: tuple[LineItem, ...] = ()
    rewards: tuple[LineItem, ...] = ()
    reason: str = ""

    @field_validator("gross_earnings", "expenses", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("penalties", "rewards", mode="before")
    @classmethod
    def _missing_items_are_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("reason", mode="before")
    @classmethod
    def _missing_reason_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class EarningsBreakdown(BaseModel):
    """Derived view of a record. Net may be negative."""
    gross: float
    expenses: float
    penalty: float
    rewards: float
    net: float


class EarningsSummary(BaseModel):
    """Lookup result: a breakdown when the driver is known, otherwise found=False."""
    found: bool
    breakdown: Optional[EarningsBreakdown] = None
    reason: str = ""
