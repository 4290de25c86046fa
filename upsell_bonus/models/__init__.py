"""
Data Models Package.

Re-exports all Pydantic models for short imports:
    from upsell_bonus.models import Tier, Category, Receipt, Forecast
    from upsell_bonus.models import SalesFact, LineItemResult, PayoutReport
"""

from upsell_bonus.models.enums import AggregationMode
from upsell_bonus.models.config_models import Category, Forecast, ReportingPeriod, Tier
from upsell_bonus.models.receipt import Receipt
from upsell_bonus.models.report_models import (
    CategoryBreakdown,
    DataCompleteness,
    LineItemResult,
    NotQualifiedLineItem,
    ParticipantPayout,
    PayoutReport,
    QualifiedLineItem,
    Revenues,
    SalesFact,
)

__all__ = [
    "AggregationMode",
    "Category",
    "CategoryBreakdown",
    "DataCompleteness",
    "Forecast",
    "LineItemResult",
    "NotQualifiedLineItem",
    "ParticipantPayout",
    "PayoutReport",
    "QualifiedLineItem",
    "Receipt",
    "ReportingPeriod",
    "Revenues",
    "SalesFact",
    "Tier",
]
