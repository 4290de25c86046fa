"""
Forecast Gate.

Payouts happen only when actual revenue reaches the configured share of the
monthly forecast.  This is a hard gate for the whole period, not a
per-participant discount.
"""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple

from upsell_bonus.models.config_models import Forecast

__all__ = ["ForecastGateResult", "check_forecast"]


class ForecastGateResult(NamedTuple):
    required_revenue: Decimal
    met: bool


def check_forecast(forecast: Forecast, total_revenue: Decimal) -> ForecastGateResult:
    """Compare *total_revenue* with ``target_amount * threshold``.

    ``threshold`` is a fraction (0.9 means 90% of target).  Reaching the
    required revenue exactly passes the gate.
    """
    required_revenue: Decimal = forecast.target_amount * forecast.threshold
    return ForecastGateResult(required_revenue, total_revenue >= required_revenue)
