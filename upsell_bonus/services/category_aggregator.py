"""
Category Aggregator.

Turns one participant's receipts in one category into sales facts and
tier-matches each fact.  Pure logic: receipts in, facts out, nothing
mutated.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, Union

from upsell_bonus.logger import StructuredLogger
from upsell_bonus.models.enums import AggregationMode
from upsell_bonus.models.receipt import Receipt
from upsell_bonus.models.report_models import SalesFact
from upsell_bonus.services.tier_table import TierTable
from upsell_bonus.utils.math_utils import sum_decimals

__all__ = ["aggregate"]


def _aggregate_per_category(
    receipts: Sequence[Receipt],
    tier_table: TierTable,
) -> list[SalesFact]:
    """One fact for the whole category: the tier is a cross-product volume."""
    quantity: int = len(receipts)
    constituents: list[str] = list(dict.fromkeys(r.product_name for r in receipts))

    return [
        SalesFact(
            product_name=None,
            quantity=quantity,
            revenue=sum_decimals(r.price for r in receipts),
            matched_tier=tier_table.resolve(quantity),
            constituent_product_names=constituents,
        )
    ]


def _aggregate_per_item(
    receipts: Sequence[Receipt],
    tier_table: TierTable,
) -> list[SalesFact]:
    """One fact per product: volumes are never pooled across products."""
    totals: dict[str, tuple[int, Decimal]] = {}
    for receipt in receipts:
        quantity, revenue = totals.get(receipt.product_name, (0, Decimal("0")))
        totals[receipt.product_name] = (quantity + 1, revenue + receipt.price)

    return [
        SalesFact(
            product_name=product_name,
            quantity=quantity,
            revenue=revenue,
            matched_tier=tier_table.resolve(quantity),
        )
        for product_name, (quantity, revenue) in totals.items()
    ]


def aggregate(
    receipts: Sequence[Receipt],
    mode: Union[AggregationMode, str],
    tier_table: TierTable,
    logger: Optional[StructuredLogger] = None,
) -> list[SalesFact]:
    """
    Group *receipts* into sales facts according to *mode*.

    Each receipt counts as one unit sold.  Facts keep the order in which
    products were first seen.

    Args:
        receipts: One participant's receipts for a single category.
        mode: ``PER_ITEM`` or ``PER_CATEGORY`` (legacy spellings accepted).
        tier_table: The category's validated tiers.
        logger: Optional ``StructuredLogger`` for debug tracing.

    Returns:
        ``PER_CATEGORY``: exactly one fact (zero-quantity when *receipts*
        is empty).  ``PER_ITEM``: one fact per distinct product name
        (empty when *receipts* is empty).

    Raises:
        ConfigurationError: If *mode* is not a supported aggregation mode.
    """
    resolved: AggregationMode = AggregationMode.parse(mode)

    if resolved is AggregationMode.PER_CATEGORY:
        facts = _aggregate_per_category(receipts, tier_table)
    elif resolved is AggregationMode.PER_ITEM:
        facts = _aggregate_per_item(receipts, tier_table)
    else:  # pragma: no cover - every AggregationMode member is handled above
        raise AssertionError(f"Unhandled aggregation mode: {resolved!r}")

    if logger is not None:
        logger.debug(
            "Aggregated %d receipts into %d sales facts (%s, category %s)",
            len(receipts),
            len(facts),
            resolved.value,
            tier_table.category,
        )
    return facts
