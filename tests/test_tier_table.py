"""Tests for tier validation and highest-qualifying-tier resolution."""

from decimal import Decimal

import pytest

from upsell_bonus.exceptions import ConfigurationError
from upsell_bonus.models import Tier
from upsell_bonus.services.tier_table import TierTable


@pytest.fixture
def table():
    return TierTable(
        [
            {"minQuantity": 15, "bonusPercentage": 15},
            {"minQuantity": 5, "bonusPercentage": 5},
            {"minQuantity": 10, "bonusPercentage": 10},
        ],
        category="Cocktails",
    )


def test_tiers_are_stored_ascending(table):
    assert [t.min_quantity for t in table.tiers] == [5, 10, 15]
    assert len(table) == 3


def test_resolve_returns_highest_reached_tier_without_blending(table):
    tier = table.resolve(12)

    assert tier.min_quantity == 10
    assert tier.bonus_percentage == Decimal("10")


@pytest.mark.parametrize("quantity,expected", [(5, 5), (9, 5), (10, 10), (15, 15), (400, 15)])
def test_resolve_boundaries(table, quantity, expected):
    assert table.resolve(quantity).min_quantity == expected


@pytest.mark.parametrize("quantity", [-3, 0, 4])
def test_resolve_below_every_minimum_is_none(table, quantity):
    assert table.resolve(quantity) is None


def test_resolution_is_monotonic(table):
    resolved = [table.resolve(q) for q in range(0, 40)]
    percentages = [t.bonus_percentage for t in resolved if t is not None]

    assert percentages == sorted(percentages)
    assert all(t is None for t in resolved[:5])


def test_zero_minimum_tier_matches_zero_quantity():
    table = TierTable([Tier(min_quantity=0, bonus_percentage=Decimal("1"))])

    assert table.resolve(0).min_quantity == 0
    assert table.resolve(-1) is None


def test_accepts_snake_case_mappings_and_tier_models():
    table = TierTable(
        [
            {"min_quantity": 3, "bonus_percentage": "2.5"},
            Tier(min_quantity=6, bonus_percentage=Decimal("7")),
        ]
    )

    assert table.resolve(4).bonus_percentage == Decimal("2.5")
    assert table.resolve(6).bonus_percentage == Decimal("7")


def test_empty_tiers_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([], category="Wine")

    assert "non-empty" in str(exc_info.value)
    assert "Wine" in str(exc_info.value)


def test_duplicate_min_quantity_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([
            {"minQuantity": 5, "bonusPercentage": 5},
            {"minQuantity": 5, "bonusPercentage": 10},
        ])

    assert any("minQuantity 5 is used by 2 tiers" in d for d in exc_info.value.details)


def test_duplicate_percentage_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([
            {"minQuantity": 5, "bonusPercentage": 10},
            {"minQuantity": 8, "bonusPercentage": 10},
        ])

    assert any("bonusPercentage 10 is used by 2 tiers" in d for d in exc_info.value.details)


def test_non_monotonic_progression_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([
            {"minQuantity": 5, "bonusPercentage": 10},
            {"minQuantity": 10, "bonusPercentage": 5},
        ])

    assert any("must pay more" in d for d in exc_info.value.details)


@pytest.mark.parametrize("percentage", [0, -1, "100.5", 150])
def test_percentage_outside_range_rejected(percentage):
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([{"minQuantity": 1, "bonusPercentage": percentage}])

    assert "bonusPercentage must be in (0, 100]" in exc_info.value.details[0]


def test_full_hundred_percent_is_allowed():
    table = TierTable([{"minQuantity": 1, "bonusPercentage": 100}])

    assert table.resolve(1).bonus_percentage == Decimal("100")


def test_every_problem_is_listed_not_just_the_first():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable(
            [
                {"minQuantity": -1, "bonusPercentage": 5},
                {"minQuantity": "lots", "bonusPercentage": 10},
                {"minQuantity": 4, "bonusPercentage": 0},
            ],
            category="Desserts",
        )

    details = exc_info.value.details
    assert len(details) == 3
    assert all(d.startswith("category 'Desserts': ") for d in details)
    assert any("tier[0]: minQuantity must be >= 0" in d for d in details)
    assert any("tier[1]: minQuantity" in d for d in details)
    assert any("tier[2]: bonusPercentage" in d for d in details)


def test_non_mapping_entry_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([(5, 10)])

    assert "expected a tier mapping" in exc_info.value.details[0]


@pytest.mark.parametrize("field", ["minQuantity", "bonusPercentage"])
def test_boolean_values_rejected(field):
    entry = {"minQuantity": 5, "bonusPercentage": 10}
    entry[field] = True

    with pytest.raises(ConfigurationError) as exc_info:
        TierTable([entry], category="Steaks")

    assert exc_info.value.details[0].startswith(f"category 'Steaks': tier[0]: {field}")
