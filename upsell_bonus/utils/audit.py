"""
Structured Audit Logging Utility.

Provides a Pydantic-validated model and a single function for consistent
audit trail entries: every completed payout calculation is logged as one
structured JSON object.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from upsell_bonus.logger import StructuredLogger

__all__ = ["AuditEvent", "log_audit_event"]

# Scalar values permitted inside ``details``; nested structures belong
# in the report itself, not in the audit line.
DetailValue = Union[str, int, float, bool, None]


class AuditEvent(BaseModel):
    """Schema-validated representation of a single audit trail entry."""

    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    user_id: str
    details: dict[str, DetailValue] = Field(default_factory=dict)


def log_audit_event(
    logger: StructuredLogger,
    action: str,
    entity_type: str,
    entity_id: str,
    user_id: str,
    details: Optional[dict[str, DetailValue]] = None,
) -> AuditEvent:
    """Log a structured JSON audit event and return it.

    Args:
        logger: The logger instance to write to.
        action: What happened (e.g. ``"CALCULATE"``).
        entity_type: Type of entity produced (e.g. ``"PayoutReport"``).
        entity_id: Identifier of the entity (e.g. the period ``"1/2026"``).
        user_id: Who triggered the action.
        details: Optional flat context (counts, totals, flags).
    """
    event = AuditEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        details=details or {},
    )
    logger.info("AUDIT: %s", json.dumps(event.model_dump(), default=str))
    return event
