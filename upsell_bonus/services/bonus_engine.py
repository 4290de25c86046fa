"""
Bonus Engine.

Scores tier-matched sales facts into auditable line items.  Every fact
yields exactly one line item: facts below every tier are kept with a
reason rather than dropped, because the audit trail must explain zero
bonuses as well as positive ones.

Percentages are whole-number percents: ``bonus = revenue * pct / 100``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Optional, Sequence

from upsell_bonus.logger import StructuredLogger
from upsell_bonus.models.report_models import (
    LineItemResult,
    NotQualifiedLineItem,
    QualifiedLineItem,
    SalesFact,
)
from upsell_bonus.utils.math_utils import apply_percentage

__all__ = ["BonusEngine", "CategoryScore", "below_threshold_reason"]


class CategoryScore(NamedTuple):
    total_bonus: Decimal
    items: list[LineItemResult]


def below_threshold_reason(quantity: int) -> str:
    return f"Below minimum threshold (sold {quantity})"


class BonusEngine:
    """Scores the sales facts of one category."""

    def __init__(self, category: str, logger: Optional[StructuredLogger] = None) -> None:
        if not category:
            raise ValueError("category is required")
        self.category: str = category
        self._logger: Optional[StructuredLogger] = logger

    def score(self, facts: Optional[Sequence[SalesFact]]) -> CategoryScore:
        """
        Convert *facts* into line items and the category bonus total.

        A fact qualifies only when its matched tier has a positive
        percentage; the whole fact revenue is then paid at that rate.

        Args:
            facts: Output of ``aggregate`` for this category; ``None`` or
                empty yields a zero score with no items.

        Returns:
            ``CategoryScore(total_bonus, items)`` with one item per fact,
            in input order.
        """
        if not facts:
            return CategoryScore(Decimal("0"), [])

        total_bonus: Decimal = Decimal("0")
        items: list[LineItemResult] = []

        for fact in facts:
            tier = fact.matched_tier
            if tier is None or tier.bonus_percentage <= 0:
                items.append(
                    NotQualifiedLineItem(
                        product_name=fact.product_name,
                        quantity=fact.quantity,
                        revenue=fact.revenue,
                        constituent_product_names=fact.constituent_product_names,
                        reason=below_threshold_reason(fact.quantity),
                    )
                )
                continue

            bonus_amount: Decimal = apply_percentage(fact.revenue, tier.bonus_percentage)
            total_bonus += bonus_amount
            items.append(
                QualifiedLineItem(
                    product_name=fact.product_name,
                    quantity=fact.quantity,
                    revenue=fact.revenue,
                    constituent_product_names=fact.constituent_product_names,
                    tier_label=tier.label,
                    bonus_percentage=tier.bonus_percentage,
                    bonus_amount=bonus_amount,
                )
            )

        if self._logger is not None:
            qualified = sum(1 for item in items if item.qualified)
            self._logger.debug(
                "Scored category %s: %d/%d items qualified, bonus %s",
                self.category,
                qualified,
                len(items),
                total_bonus,
            )

        return CategoryScore(total_bonus, items)
