"""
Bonus Configuration Models.

Pydantic models for the externally managed configuration the engine reads:
tiers, categories and the monthly forecast.  Tier and category fields are
deliberately loose so that the configuration guard can report every
violation in one ``ConfigurationError`` instead of failing on the first.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

__all__ = ["Category", "Forecast", "ReportingPeriod", "Tier"]


class Tier(BaseModel):
    """One bonus step: from ``min_quantity`` units, pay ``bonus_percentage``.

    ``bonus_percentage`` is a whole-number percent (``10`` means 10%).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    min_quantity: int
    bonus_percentage: Decimal

    @field_validator("min_quantity", "bonus_percentage", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @property
    def label(self) -> str:
        return f"{self.min_quantity}+ items"


class Category(BaseModel):
    """A bonus category as supplied by configuration storage."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    category_id: str
    category_name: str
    aggregation_mode: str
    # Entries that do not parse as a Tier stay raw so TierTable can report
    # them alongside the category's other problems.
    tiers: tuple[Union[Tier, dict[str, Any]], ...] = ()


class Forecast(BaseModel):
    """Monthly revenue forecast gating all payouts.

    ``threshold`` is a fraction of ``target_amount`` (0.9 -> 90%).
    ``month``/``year`` are optional and only cross-checked against the
    requested period when both sides are known.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_amount: Decimal = Field(gt=0)
    threshold: Decimal = Field(ge=0, le=1)
    month: Optional[int] = None
    year: Optional[int] = None


class ReportingPeriod(BaseModel):
    """Calendar month a calculation covers.

    Range checks happen in the orchestrator so they surface as
    ``InvalidRequest`` with every offending field listed.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    month: int
    year: int

    def __str__(self) -> str:
        return f"{self.month}/{self.year}"
