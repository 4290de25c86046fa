"""
Tier Table.

Holds one category's ordered bonus tiers and resolves the highest tier a
quantity reaches.  A participant who reaches a tier earns that tier's
percentage on the *entire* counted revenue: never a blend across tiers,
never partial credit.
"""

from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import Iterable, Iterator, Mapping, Optional, Union

from pydantic import ValidationError

from upsell_bonus.exceptions import ConfigurationError
from upsell_bonus.models.config_models import Tier

__all__ = ["TierInput", "TierTable"]

TierInput = Union[Tier, Mapping[str, object]]

_MAX_PERCENTAGE: Decimal = Decimal("100")


class TierTable:
    """Validated, ascending-by-``min_quantity`` collection of tiers.

    Construction fails with ``ConfigurationError`` listing every problem
    found: an empty collection, malformed entries, negative thresholds,
    percentages outside ``(0, 100]``, duplicate thresholds or percentages,
    and any non-increasing percentage progression.
    """

    def __init__(self, tiers: Iterable[TierInput], category: Optional[str] = None) -> None:
        self._category: Optional[str] = category
        self._tiers: tuple[Tier, ...] = self._validate_and_normalize(list(tiers or []))

    # -- Public API -----------------------------------------------------------

    @property
    def tiers(self) -> tuple[Tier, ...]:
        return self._tiers

    @property
    def category(self) -> Optional[str]:
        return self._category

    def resolve(self, quantity: int) -> Optional[Tier]:
        """Return the tier with the largest ``min_quantity <= quantity``.

        Returns ``None`` when *quantity* is below every tier's minimum
        (negative quantities never match).
        """
        if quantity < 0:
            return None

        applicable: Optional[Tier] = None
        for tier in self._tiers:
            if tier.min_quantity > quantity:
                break
            applicable = tier
        return applicable

    def __iter__(self) -> Iterator[Tier]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def __repr__(self) -> str:
        steps = ", ".join(
            f"{t.min_quantity}->{t.bonus_percentage}%" for t in self._tiers
        )
        return f"TierTable({self._category!r}: [{steps}])"

    # -- Validation -----------------------------------------------------------

    def _validate_and_normalize(self, entries: list[TierInput]) -> tuple[Tier, ...]:
        prefix = f"category '{self._category}': " if self._category else ""

        if not entries:
            raise ConfigurationError(
                "Invalid tier configuration",
                [f"{prefix}tiers must be a non-empty collection"],
            )

        problems: list[str] = []
        valid: list[Tier] = []

        for index, entry in enumerate(entries):
            tier = self._coerce(entry, index, prefix, problems)
            if tier is None:
                continue

            entry_ok = True
            if tier.min_quantity < 0:
                problems.append(
                    f"{prefix}tier[{index}]: minQuantity must be >= 0, got {tier.min_quantity}"
                )
                entry_ok = False
            if not (Decimal("0") < tier.bonus_percentage <= _MAX_PERCENTAGE):
                problems.append(
                    f"{prefix}tier[{index}]: bonusPercentage must be in (0, 100], "
                    f"got {tier.bonus_percentage}"
                )
                entry_ok = False
            if entry_ok:
                valid.append(tier)

        quantity_counts = Counter(t.min_quantity for t in valid)
        for quantity, count in sorted(quantity_counts.items()):
            if count > 1:
                problems.append(
                    f"{prefix}minQuantity {quantity} is used by {count} tiers"
                )

        percentage_counts = Counter(t.bonus_percentage for t in valid)
        for percentage, count in sorted(percentage_counts.items()):
            if count > 1:
                problems.append(
                    f"{prefix}bonusPercentage {percentage} is used by {count} tiers"
                )

        ordered = sorted(valid, key=lambda t: t.min_quantity)
        for lower, higher in zip(ordered, ordered[1:]):
            if lower.min_quantity == higher.min_quantity:
                continue  # already reported as a duplicate
            if higher.bonus_percentage <= lower.bonus_percentage:
                problems.append(
                    f"{prefix}tier at minQuantity {higher.min_quantity} "
                    f"({higher.bonus_percentage}%) must pay more than tier at "
                    f"minQuantity {lower.min_quantity} ({lower.bonus_percentage}%)"
                )

        if problems:
            raise ConfigurationError("Invalid tier configuration", problems)

        return tuple(ordered)

    @staticmethod
    def _coerce(
        entry: TierInput,
        index: int,
        prefix: str,
        problems: list[str],
    ) -> Optional[Tier]:
        if isinstance(entry, Tier):
            return entry
        if not isinstance(entry, Mapping):
            problems.append(
                f"{prefix}tier[{index}]: expected a tier mapping, got {type(entry).__name__}"
            )
            return None
        try:
            return Tier.model_validate(entry)
        except ValidationError as exc:
            for error in exc.errors():
                field = ".".join(str(part) for part in error["loc"]) or "tier"
                problems.append(f"{prefix}tier[{index}]: {field} {error['msg']}")
            return None
