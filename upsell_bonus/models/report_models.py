"""
Calculation Output Models.

Pydantic models produced by a single calculation run: sales facts, scored
line items, per-category breakdowns, participant payouts and the final
report.  Nothing here is persisted by the engine itself.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from upsell_bonus.models.config_models import Tier
from upsell_bonus.utils.general import JsonSafeType, convert_to_json_safe

__all__ = [
    "CategoryBreakdown",
    "DataCompleteness",
    "LineItemResult",
    "NotQualifiedLineItem",
    "ParticipantPayout",
    "PayoutReport",
    "QualifiedLineItem",
    "Revenues",
    "SalesFact",
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Aggregation output
# ---------------------------------------------------------------------------

class SalesFact(_CamelModel):
    """Quantity and revenue counted against one tier lookup.

    Under PER_CATEGORY aggregation ``product_name`` is ``None`` and
    ``constituent_product_names`` lists every product that contributed.
    """

    product_name: Optional[str] = None
    quantity: int = Field(ge=0)
    revenue: Decimal = Decimal("0")
    matched_tier: Optional[Tier] = None
    constituent_product_names: Optional[list[str]] = None


# ---------------------------------------------------------------------------
# Scoring output
# ---------------------------------------------------------------------------

class _LineItemBase(_CamelModel):
    product_name: Optional[str] = None
    quantity: int
    revenue: Decimal
    constituent_product_names: Optional[list[str]] = None


class QualifiedLineItem(_LineItemBase):
    """A sales fact that reached a tier and earns a bonus."""

    qualified: Literal[True] = True
    tier_label: str
    bonus_percentage: Decimal
    bonus_amount: Decimal
    reason: None = None


class NotQualifiedLineItem(_LineItemBase):
    """A sales fact below every tier, kept to explain the zero bonus."""

    qualified: Literal[False] = False
    tier_label: None = None
    bonus_percentage: Decimal = Decimal("0")
    bonus_amount: Decimal = Decimal("0")
    reason: str


LineItemResult = Union[QualifiedLineItem, NotQualifiedLineItem]


class CategoryBreakdown(_CamelModel):
    category: str
    bonus: Decimal
    items: list[LineItemResult] = Field(default_factory=list)


class ParticipantPayout(_CamelModel):
    participant_id: str
    participant_name: str
    total_bonus: Decimal
    breakdown: list[CategoryBreakdown] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class Revenues(_CamelModel):
    """Revenue figures behind the forecast decision.

    ``bonus_eligible`` is the summed receipt revenue and is only known
    once the gate has passed and receipts were scored.
    """

    total: Decimal
    target: Decimal
    required: Decimal
    bonus_eligible: Optional[Decimal] = None


class DataCompleteness(_CamelModel):
    """How many days of the reporting month have receipts at all."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    days_with_data: int
    total_days: int
    missing_days: list[str] = Field(default_factory=list)
    completeness_percentage: int


class PayoutReport(_CamelModel):
    """Top-level result of one calculation invocation."""

    forecast_met: bool
    revenues: Revenues
    payouts: list[ParticipantPayout] = Field(default_factory=list)
    message: Optional[str] = None
    data_completeness: Optional[DataCompleteness] = None

    def to_json_dict(self) -> JsonSafeType:
        """camelCase, JSON-safe rendition for HTTP responses or persistence."""
        return convert_to_json_safe(self.model_dump(by_alias=True))
