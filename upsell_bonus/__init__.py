"""
Upsell Bonus Engine.

Calculates tiered, category-based sales bonuses from a period's receipts,
gated by the monthly revenue forecast, and explains every payout (and
every missed one) line by line.

Typical use::

    from upsell_bonus.services import create_services

    orchestrator = create_services()["payout_orchestrator"]
    report = orchestrator.calculate(receipts, categories, forecast, total_revenue)
    payload = report.to_json_dict()
"""

from upsell_bonus.exceptions import (
    BonusCalculationError,
    ConfigurationError,
    InvalidRequest,
    NotFound,
)

__version__ = "1.0.0"

__all__ = [
    "BonusCalculationError",
    "ConfigurationError",
    "InvalidRequest",
    "NotFound",
    "__version__",
]
