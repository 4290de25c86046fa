"""
Data Completeness.

Reports which days of the reporting month actually have receipts, so a
payout computed from a partially imported month is visible as such.
"""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Optional, Sequence

from upsell_bonus.logger import StructuredLogger
from upsell_bonus.models.config_models import ReportingPeriod
from upsell_bonus.models.receipt import Receipt
from upsell_bonus.models.report_models import DataCompleteness
from upsell_bonus.utils.math_utils import percent_of_whole

__all__ = ["calculate_data_completeness"]


def calculate_data_completeness(
    receipts: Sequence[Receipt],
    period: ReportingPeriod,
    logger: Optional[StructuredLogger] = None,
) -> DataCompleteness:
    """Summarise receipt coverage for *period*.

    Receipts dated outside the month are ignored (and counted in a
    warning when *logger* is given).
    """
    total_days: int = calendar.monthrange(period.year, period.month)[1]

    days_with_data: set[dt.date] = set()
    outside: int = 0
    for receipt in receipts:
        day = receipt.sale_day
        if day.year == period.year and day.month == period.month:
            days_with_data.add(day)
        else:
            outside += 1

    if outside and logger is not None:
        logger.warning(
            "%d receipts fall outside %s and were not counted for completeness",
            outside,
            period,
        )

    ordered = sorted(days_with_data)
    missing_days: list[str] = [
        dt.date(period.year, period.month, day).isoformat()
        for day in range(1, total_days + 1)
        if dt.date(period.year, period.month, day) not in days_with_data
    ]

    return DataCompleteness(
        start_date=ordered[0].isoformat() if ordered else None,
        end_date=ordered[-1].isoformat() if ordered else None,
        days_with_data=len(ordered),
        total_days=total_days,
        missing_days=missing_days,
        completeness_percentage=percent_of_whole(len(ordered), total_days),
    )
