"""Shared fixtures: a restaurant with steaks, cocktails and wine on upsell."""

import io
from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from upsell_bonus.config import AppConfig
from upsell_bonus.logger import StructuredLogger
from upsell_bonus.models import Category, Forecast, Receipt, ReportingPeriod, Tier
from upsell_bonus.services.payout_orchestrator import PayoutOrchestrator

PRICES = {
    "Ribeye Steak": Decimal("45"),
    "Wagyu Steak": Decimal("85"),
    "Filet Mignon": Decimal("55"),
    "Martini": Decimal("14"),
    "Mojito": Decimal("12"),
    "Old Fashioned": Decimal("15"),
    "Margarita": Decimal("13"),
    "Manhattan": Decimal("14"),
    "Merlot": Decimal("30"),
    "Pinot Noir": Decimal("38"),
}

CATEGORY_OF = {
    "Ribeye Steak": "steaks",
    "Wagyu Steak": "steaks",
    "Filet Mignon": "steaks",
    "Martini": "cocktails",
    "Mojito": "cocktails",
    "Old Fashioned": "cocktails",
    "Margarita": "cocktails",
    "Manhattan": "cocktails",
    "Merlot": "wine",
    "Pinot Noir": "wine",
}

CATEGORY_NAMES = {
    "steaks": "High-End Steaks",
    "cocktails": "Cocktails",
    "wine": "Wine",
}


def tiers(*steps):
    return tuple(Tier(min_quantity=q, bonus_percentage=Decimal(str(p))) for q, p in steps)


@pytest.fixture
def steaks():
    return Category(
        category_id="steaks",
        category_name="High-End Steaks",
        aggregation_mode="PER_ITEM",
        tiers=tiers((3, 5), (5, 10), (8, 15)),
    )


@pytest.fixture
def cocktails():
    return Category(
        category_id="cocktails",
        category_name="Cocktails",
        aggregation_mode="PER_CATEGORY",
        tiers=tiers((10, 5), (20, 10), (30, 15)),
    )


@pytest.fixture
def wine():
    return Category(
        category_id="wine",
        category_name="Wine",
        aggregation_mode="PER_CATEGORY",
        tiers=tiers((8, 5), (15, 12), (25, 18)),
    )


@pytest.fixture
def categories(steaks, cocktails, wine):
    return [steaks, cocktails, wine]


@pytest.fixture
def forecast():
    return Forecast(target_amount=Decimal("50000"), threshold=Decimal("0.9"), month=1, year=2026)


@pytest.fixture
def period():
    return ReportingPeriod(month=1, year=2026)


@pytest.fixture
def make_receipts():
    """Build ``quantity`` receipts of one product for one participant."""
    day_counter = count()

    def _make(participant, product, quantity, day=None, price=None):
        return [
            Receipt(
                participant_id=participant.lower(),
                participant_name=participant,
                product_id=product.lower().replace(" ", "-"),
                product_name=product,
                category_id=CATEGORY_OF[product],
                category_name=CATEGORY_NAMES[CATEGORY_OF[product]],
                price=PRICES[product] if price is None else Decimal(str(price)),
                date=date(2026, 1, day if day is not None else next(day_counter) % 28 + 1),
            )
            for _ in range(quantity)
        ]

    return _make


@pytest.fixture
def app_config():
    return AppConfig(LOG_FILE="", MIN_PERIOD_YEAR=2000, MAX_PERIOD_YEAR=2100)


@pytest.fixture
def test_logger():
    return StructuredLogger(name="tests.upsell_bonus", stream=io.StringIO())


@pytest.fixture
def orchestrator(test_logger, app_config):
    return PayoutOrchestrator(logger=test_logger, config=app_config)
