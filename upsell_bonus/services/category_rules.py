"""
Category Rules.

Configuration guard run before any calculation: resolves every category's
aggregation mode and tier table from one configuration snapshot, failing
the whole calculation if any category is unusable.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from upsell_bonus.exceptions import ConfigurationError
from upsell_bonus.models.config_models import Category
from upsell_bonus.models.enums import AggregationMode
from upsell_bonus.services.tier_table import TierTable

__all__ = ["CategoryRules", "build_category_rules"]


class CategoryRules(NamedTuple):
    category_id: str
    name: str
    mode: AggregationMode
    tier_table: TierTable


def build_category_rules(categories: Iterable[Category]) -> dict[str, CategoryRules]:
    """
    Validate every category and return its resolved rules keyed by id.

    Repeated ids or names, categories without tiers, invalid tiers and
    unsupported aggregation modes are all collected before failing, so one
    error lists every category an operator has to fix.

    Raises:
        ConfigurationError: If any category is misconfigured.
    """
    rules: dict[str, CategoryRules] = {}
    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    missing_tiers: list[str] = []
    problems: list[str] = []

    for category in categories:
        if category.category_id in seen_ids:
            problems.append(
                f"category id '{category.category_id}' is configured more than once"
            )
            continue
        seen_ids.add(category.category_id)

        if category.category_name in seen_names:
            problems.append(
                f"category name '{category.category_name}' is configured more than once"
            )
            continue
        seen_names.add(category.category_name)

        if not category.tiers:
            missing_tiers.append(category.category_name)
            continue

        try:
            mode = AggregationMode.parse(category.aggregation_mode)
        except ConfigurationError as exc:
            problems.append(f"category '{category.category_name}': {exc}")
            continue

        try:
            tier_table = TierTable(category.tiers, category=category.category_name)
        except ConfigurationError as exc:
            problems.extend(exc.details)
            continue

        rules[category.category_id] = CategoryRules(
            category_id=category.category_id,
            name=category.category_name,
            mode=mode,
            tier_table=tier_table,
        )

    if missing_tiers:
        problems.insert(
            0,
            "The following categories have no tier rules configured: "
            + ", ".join(missing_tiers),
        )

    if problems:
        raise ConfigurationError(
            "Cannot calculate bonuses: category configuration is invalid",
            problems,
        )

    return rules
