"""
Bonus Calculation Errors.

Every error carries a human-readable ``message`` plus a ``details`` list
naming each offending category, tier or request field, so an operator can
fix the input without consulting the logs.
"""

from __future__ import annotations

from typing import Iterable, Optional

__all__ = [
    "BonusCalculationError",
    "ConfigurationError",
    "InvalidRequest",
    "NotFound",
]


class BonusCalculationError(Exception):
    """Base class for all errors raised by the bonus engine."""

    def __init__(self, message: str, details: Optional[Iterable[str]] = None) -> None:
        self.message: str = message
        self.details: list[str] = list(details or [])
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message}: {'; '.join(self.details)}"


class ConfigurationError(BonusCalculationError):
    """Malformed or incomplete category / tier configuration."""


class InvalidRequest(BonusCalculationError):
    """Caller-supplied calculation parameters are missing or out of range."""


class NotFound(BonusCalculationError):
    """A required record (e.g. the period's forecast) does not exist."""
