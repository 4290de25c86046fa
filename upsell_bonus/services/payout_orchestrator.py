"""
Payout Orchestrator.

Runs a complete bonus calculation for one period from data already loaded
into memory:

    1. Request validation (InvalidRequest / NotFound)
    2. Configuration guard over every category (ConfigurationError)
    3. Forecast gate (hard stop, all-zero report when missed)
    4. Grouping by participant, then by category
    5. Aggregation -> scoring per participant per category
    6. Totals, stable sort by bonus, report packaging

No database handle is reachable from here: receipts, categories and the
forecast are injected as plain data, so the calculation is a deterministic
function of its inputs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from upsell_bonus.config import AppConfig, get_config
from upsell_bonus.exceptions import ConfigurationError, InvalidRequest, NotFound
from upsell_bonus.logger import StructuredLogger
from upsell_bonus.models.config_models import Category, Forecast, ReportingPeriod
from upsell_bonus.models.receipt import Receipt
from upsell_bonus.models.report_models import (
    CategoryBreakdown,
    ParticipantPayout,
    PayoutReport,
    Revenues,
)
from upsell_bonus.services.base_service import BaseService
from upsell_bonus.services.bonus_engine import BonusEngine
from upsell_bonus.services.category_aggregator import aggregate
from upsell_bonus.services.category_rules import CategoryRules, build_category_rules
from upsell_bonus.services.data_completeness import calculate_data_completeness
from upsell_bonus.services.forecast_gate import check_forecast
from upsell_bonus.utils.audit import log_audit_event
from upsell_bonus.utils.math_utils import sum_decimals, to_decimal

__all__ = ["NO_SALES_MESSAGE", "PayoutOrchestrator"]

NO_SALES_MESSAGE: str = "No sales found for this period."

# participant id -> category id -> receipts, both in encounter order
_GroupedReceipts = dict[str, dict[str, list[Receipt]]]


class PayoutOrchestrator(BaseService):
    """
    Service that turns a period's receipts into the final payout report.

    Stateless between calls: the same instance may serve concurrent
    calculations for different periods or tenants.
    """

    def __init__(
        self,
        logger: StructuredLogger,
        config: Optional[AppConfig] = None,
    ) -> None:
        super().__init__(logger)
        self._config: AppConfig = config or get_config()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(
        self,
        receipts: Iterable[Union[Receipt, Mapping[str, object]]],
        categories: Iterable[Union[Category, Mapping[str, object]]],
        forecast: Optional[Union[Forecast, Mapping[str, object]]],
        total_revenue: Union[Decimal, int, float, str, None],
        period: Optional[ReportingPeriod] = None,
    ) -> PayoutReport:
        """
        Calculate every participant's bonus for the period.

        Args:
            receipts: The period's receipts (models or camelCase mappings).
            categories: Category configuration snapshot with tiers.
            forecast: The period's forecast; ``None`` when none exists.
            total_revenue: Actual revenue for the period, supplied by the
                caller (it may include sales outside the bonus categories).
            period: Optional month/year, used for validation messages,
                forecast cross-checks and data completeness.

        Returns:
            A ``PayoutReport``.  ``forecast_met=False`` with no payouts
            when the gate fails; ``message`` set when there were no sales.

        Raises:
            InvalidRequest: Revenue missing/negative or period out of range.
            NotFound: No forecast for the period.
            ConfigurationError: Any category unusable, or a receipt in an
                unconfigured category.
        """
        if forecast is not None and not isinstance(forecast, Forecast):
            forecast = Forecast.model_validate(forecast)

        revenue: Decimal = self._validate_request(total_revenue, period, forecast)
        resolved_forecast: Forecast = self._require_forecast(forecast, period)

        receipt_list: list[Receipt] = [
            r if isinstance(r, Receipt) else Receipt.model_validate(r)
            for r in receipts
        ]
        rules: dict[str, CategoryRules] = self._resolve_categories(categories)
        self._check_receipt_categories(receipt_list, rules)

        gate = check_forecast(resolved_forecast, revenue)
        revenues = Revenues(
            total=revenue,
            target=resolved_forecast.target_amount,
            required=gate.required_revenue,
        )
        period_label: str = str(period) if period is not None else "unspecified period"

        if not gate.met:
            self._logger.info(
                "Forecast not met for %s: revenue %s < required %s",
                period_label,
                revenue,
                gate.required_revenue,
            )
            report = PayoutReport(forecast_met=False, revenues=revenues, payouts=[])
            self._audit(report, period_label)
            return report

        if not receipt_list:
            self._logger.info("No sales found for %s", period_label)
            report = PayoutReport(
                forecast_met=True,
                revenues=revenues,
                payouts=[],
                message=NO_SALES_MESSAGE,
            )
            self._audit(report, period_label)
            return report

        grouped, names = self._group_receipts(receipt_list)
        payouts: list[ParticipantPayout] = [
            self._score_participant(pid, names[pid], by_category, rules)
            for pid, by_category in grouped.items()
        ]
        # sorted() is stable, so equal totals keep encounter order.
        payouts = sorted(payouts, key=lambda p: p.total_bonus, reverse=True)

        revenues = revenues.model_copy(
            update={"bonus_eligible": sum_decimals(r.price for r in receipt_list)}
        )
        completeness = (
            calculate_data_completeness(receipt_list, period, logger=self._logger)
            if period is not None
            else None
        )

        self._logger.info(
            "Calculated payouts for %s: %d participants, %d receipts",
            period_label,
            len(payouts),
            len(receipt_list),
        )
        report = PayoutReport(
            forecast_met=True,
            revenues=revenues,
            payouts=payouts,
            data_completeness=completeness,
        )
        self._audit(report, period_label)
        return report

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_request(
        self,
        total_revenue: Union[Decimal, int, float, str, None],
        period: Optional[ReportingPeriod],
        forecast: Optional[Forecast],
    ) -> Decimal:
        errors: list[str] = []
        period_label: str = str(period) if period is not None else "the requested period"

        revenue: Optional[Decimal] = to_decimal(total_revenue)
        if total_revenue is None:
            errors.append(f"No total revenue provided for {period_label}")
        elif revenue is None:
            errors.append(f"totalRevenue must be a finite number, got {total_revenue!r}")
        elif revenue < 0:
            errors.append(f"totalRevenue must be non-negative, got {revenue}")

        if period is not None:
            if not 1 <= period.month <= 12:
                errors.append(f"month must be between 1 and 12, got {period.month}")
            min_year = self._config.MIN_PERIOD_YEAR
            max_year = self._config.MAX_PERIOD_YEAR
            if not min_year <= period.year <= max_year:
                errors.append(
                    f"year must be between {min_year} and {max_year}, got {period.year}"
                )
            if forecast is not None:
                if forecast.month is not None and forecast.month != period.month:
                    errors.append(
                        f"forecast month {forecast.month} does not match requested month {period.month}"
                    )
                if forecast.year is not None and forecast.year != period.year:
                    errors.append(
                        f"forecast year {forecast.year} does not match requested year {period.year}"
                    )

        if errors:
            raise InvalidRequest("Invalid bonus calculation request", errors)

        assert revenue is not None
        return revenue

    @staticmethod
    def _require_forecast(
        forecast: Optional[Forecast],
        period: Optional[ReportingPeriod],
    ) -> Forecast:
        if forecast is None:
            target = str(period) if period is not None else "the requested period"
            raise NotFound(f"Forecast not found for {target}")
        return forecast

    @staticmethod
    def _resolve_categories(
        categories: Iterable[Union[Category, Mapping[str, object]]],
    ) -> dict[str, CategoryRules]:
        category_list: list[Category] = []
        problems: list[str] = []
        for index, entry in enumerate(categories):
            if isinstance(entry, Category):
                category_list.append(entry)
                continue
            try:
                category_list.append(Category.model_validate(entry))
            except ValidationError as exc:
                label = _category_label(entry, index)
                for error in exc.errors():
                    field = ".".join(str(part) for part in error["loc"]) or "category"
                    problems.append(f"{label}: {field} {error['msg']}")

        try:
            rules = build_category_rules(category_list)
        except ConfigurationError as exc:
            raise ConfigurationError(exc.message, problems + exc.details) from exc

        if problems:
            raise ConfigurationError(
                "Cannot calculate bonuses: category configuration is invalid",
                problems,
            )
        return rules

    @staticmethod
    def _check_receipt_categories(
        receipts: list[Receipt],
        rules: dict[str, CategoryRules],
    ) -> None:
        unknown: dict[str, Optional[str]] = {}
        for receipt in receipts:
            if receipt.category_id not in rules and receipt.category_id not in unknown:
                unknown[receipt.category_id] = receipt.category_name
        if unknown:
            raise ConfigurationError(
                "Receipts reference categories missing from the configuration",
                [
                    f"category id '{cid}'" + (f" ({name})" if name else "")
                    for cid, name in unknown.items()
                ],
            )

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    @staticmethod
    def _group_receipts(
        receipts: list[Receipt],
    ) -> tuple[_GroupedReceipts, dict[str, str]]:
        grouped: _GroupedReceipts = {}
        names: dict[str, str] = {}
        for receipt in receipts:
            pid = receipt.participant_id
            grouped.setdefault(pid, {}).setdefault(receipt.category_id, []).append(receipt)
            if pid not in names or names[pid] == pid:
                names[pid] = receipt.participant_name or pid
        return grouped, names

    def _score_participant(
        self,
        participant_id: str,
        participant_name: str,
        receipts_by_category: dict[str, list[Receipt]],
        rules: dict[str, CategoryRules],
    ) -> ParticipantPayout:
        breakdown: list[CategoryBreakdown] = []
        for category_id, category_receipts in receipts_by_category.items():
            rule = rules[category_id]
            facts = aggregate(
                category_receipts, rule.mode, rule.tier_table, logger=self._logger
            )
            score = BonusEngine(rule.name, logger=self._logger).score(facts)
            breakdown.append(
                CategoryBreakdown(
                    category=rule.name,
                    bonus=score.total_bonus,
                    items=score.items,
                )
            )

        return ParticipantPayout(
            participant_id=participant_id,
            participant_name=participant_name,
            total_bonus=sum_decimals(b.bonus for b in breakdown),
            breakdown=breakdown,
        )

    def _audit(self, report: PayoutReport, period_label: str) -> None:
        log_audit_event(
            logger=self._logger,
            action="CALCULATE",
            entity_type="PayoutReport",
            entity_id=period_label,
            user_id=self._config.AUDIT_ACTOR,
            details={
                "forecast_met": report.forecast_met,
                "participants": len(report.payouts),
                "total_payout": float(sum_decimals(p.total_bonus for p in report.payouts)),
                "no_sales": report.message is not None,
            },
        )


def _category_label(entry: object, index: int) -> str:
    if isinstance(entry, Mapping):
        name = entry.get("categoryName") or entry.get("category_name")
        if name:
            return f"category '{name}'"
        cid = entry.get("categoryId") or entry.get("category_id")
        if cid:
            return f"category id '{cid}'"
    return f"category[{index}]"
