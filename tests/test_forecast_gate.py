"""Tests for the forecast threshold gate."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from upsell_bonus.models import Forecast
from upsell_bonus.services.forecast_gate import check_forecast


@pytest.fixture
def forecast():
    return Forecast(target_amount=Decimal("50000"), threshold=Decimal("0.9"))


def test_revenue_below_required_fails_gate(forecast):
    result = check_forecast(forecast, Decimal("44999"))

    assert result.met is False
    assert result.required_revenue == Decimal("45000")


def test_revenue_exactly_at_required_passes_gate(forecast):
    assert check_forecast(forecast, Decimal("45000")).met is True


def test_zero_threshold_always_passes():
    forecast = Forecast(target_amount=Decimal("1000"), threshold=Decimal("0"))

    assert check_forecast(forecast, Decimal("0")).met is True


def test_camel_case_input_is_accepted():
    forecast = Forecast.model_validate({"targetAmount": 20000, "threshold": "0.8"})

    assert check_forecast(forecast, Decimal("16000")).met is True
    assert check_forecast(forecast, Decimal("15999.99")).met is False


@pytest.mark.parametrize(
    "payload",
    [
        {"targetAmount": 0, "threshold": "0.5"},
        {"targetAmount": 1000, "threshold": "1.5"},
        {"targetAmount": 1000, "threshold": "-0.1"},
    ],
)
def test_forecast_shape_is_validated(payload):
    with pytest.raises(ValidationError):
        Forecast.model_validate(payload)
