"""
Shared Enumerations for Bonus Models.

StrEnum values compare equal to their string equivalents,
so configuration loaded as plain strings keeps working.
"""

from __future__ import annotations

from enum import StrEnum

from upsell_bonus.exceptions import ConfigurationError


class AggregationMode(StrEnum):
    """How a category's receipts are counted against its tiers.

    ``PER_ITEM`` matches tiers per product ("sell 5 Wagyu steaks");
    ``PER_CATEGORY`` matches tiers on the whole category volume
    ("sell 20 cocktails of any kind").
    """

    PER_ITEM = "PER_ITEM"
    PER_CATEGORY = "PER_CATEGORY"

    @classmethod
    def parse(cls, value: object) -> "AggregationMode":
        """Resolve *value* to a mode, accepting the legacy ``"PER ITEM"`` spelling.

        Raises:
            ConfigurationError: If *value* names no supported mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
            try:
                return cls(normalized)
            except ValueError:
                pass
        supported = ", ".join(mode.value for mode in cls)
        raise ConfigurationError(
            f"Unsupported aggregation mode {value!r}",
            [f"supported modes: {supported}"],
        )
