"""Tests for the configuration guard run before every calculation."""

import pytest

from upsell_bonus.exceptions import ConfigurationError
from upsell_bonus.models import AggregationMode, Category
from upsell_bonus.services.category_rules import build_category_rules


def test_valid_categories_resolve(categories):
    rules = build_category_rules(categories)

    assert list(rules) == ["steaks", "cocktails", "wine"]
    assert rules["steaks"].mode is AggregationMode.PER_ITEM
    assert rules["cocktails"].mode is AggregationMode.PER_CATEGORY
    assert rules["wine"].tier_table.resolve(16).min_quantity == 15


def test_every_category_without_tiers_is_named(categories):
    bare = [
        Category(category_id="desserts", category_name="Desserts", aggregation_mode="PER_ITEM"),
        Category(category_id="sides", category_name="Sides", aggregation_mode="PER_ITEM"),
    ]

    with pytest.raises(ConfigurationError) as exc_info:
        build_category_rules(categories + bare)

    assert exc_info.value.details[0] == (
        "The following categories have no tier rules configured: Desserts, Sides"
    )


def test_problems_across_categories_are_collected(steaks):
    broken_mode = steaks.model_copy(
        update={"category_id": "x", "category_name": "Broken Mode", "aggregation_mode": "PER_WEEK"}
    )
    broken_tiers = Category.model_validate(
        {
            "categoryId": "y",
            "categoryName": "Broken Tiers",
            "aggregationMode": "PER_CATEGORY",
            "tiers": [
                {"minQuantity": 5, "bonusPercentage": 10},
                {"minQuantity": 10, "bonusPercentage": 10},
            ],
        }
    )

    with pytest.raises(ConfigurationError) as exc_info:
        build_category_rules([steaks, broken_mode, broken_tiers])

    message = str(exc_info.value)
    assert "Broken Mode" in message
    assert "PER_WEEK" in message
    assert "Broken Tiers" in message
    assert "High-End Steaks" not in message


def test_duplicate_category_id_rejected(steaks):
    with pytest.raises(ConfigurationError) as exc_info:
        build_category_rules([steaks, steaks])

    assert "configured more than once" in exc_info.value.details[0]


def test_duplicate_category_name_rejected(steaks, cocktails):
    renamed = cocktails.model_copy(update={"category_name": steaks.category_name})

    with pytest.raises(ConfigurationError) as exc_info:
        build_category_rules([steaks, renamed])

    assert exc_info.value.details == [
        f"category name '{steaks.category_name}' is configured more than once"
    ]
