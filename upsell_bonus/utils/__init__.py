"""Shared utility functions and models for the upsell bonus engine.

Convenience re-exports so consumers can import directly from
``upsell_bonus.utils`` while full module imports remain supported.
"""

from upsell_bonus.utils.audit import AuditEvent, log_audit_event
from upsell_bonus.utils.general import convert_to_json_safe
from upsell_bonus.utils.math_utils import (
    apply_percentage,
    percent_of_whole,
    sum_decimals,
    to_decimal,
)

__all__ = [
    "AuditEvent",
    "apply_percentage",
    "convert_to_json_safe",
    "log_audit_event",
    "percent_of_whole",
    "sum_decimals",
    "to_decimal",
]
