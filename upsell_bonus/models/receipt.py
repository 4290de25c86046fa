"""
Receipt Model.

One historical, immutable sale as supplied by the persistence layer,
already filtered to the reporting period.  Read-only to the engine.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Receipt(BaseModel):
    """A single sold unit attributed to a participant."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    participant_id: str
    participant_name: Optional[str] = None
    product_id: str
    product_name: str
    category_id: str
    category_name: Optional[str] = None
    price: Decimal = Field(ge=0)
    date: Union[dt.datetime, dt.date]

    @property
    def sale_day(self) -> dt.date:
        """Calendar day of the sale (time component dropped)."""
        # datetime is a subclass of date, so check it first.
        if isinstance(self.date, dt.datetime):
            return self.date.date()
        return self.date
