"""JSON helpers for report payloads."""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Union

__all__ = ["JsonSafeType", "convert_to_json_safe"]

JsonSafeType = Union[
    None,
    str,
    int,
    bool,
    float,
    Dict[str, "JsonSafeType"],
    List["JsonSafeType"],
]


def convert_to_json_safe(data: Any) -> JsonSafeType:
    """Recursively convert a ``model_dump()`` result to JSON-native types.

    Decimals become floats, dates and datetimes ISO strings, tuples lists.
    Non-finite numbers become ``None``.
    """
    if data is None or isinstance(data, (str, int)):
        return data

    if isinstance(data, float):
        return data if math.isfinite(data) else None

    if isinstance(data, Decimal):
        return float(data) if data.is_finite() else None

    # datetime is a date subclass, so this covers both.
    if isinstance(data, date):
        return data.isoformat()

    if isinstance(data, dict):
        return {key: convert_to_json_safe(value) for key, value in data.items()}

    if isinstance(data, (list, tuple)):
        return [convert_to_json_safe(item) for item in data]

    return str(data)
