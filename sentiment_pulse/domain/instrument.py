"""Instrument model — a tracked security that sentiment is recorded against.

Instruments are owned by the catalogue side of the system.  The sentiment
core only reads them: to order resolver output by symbol and to tell a
missing instrument apart from one that simply has no observations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Instrument(BaseModel):
    """A tracked instrument as stored."""

    id: int
    symbol: str
    name: str
    current_price: float
    price_change_24h: float
    market_cap: Optional[float] = None
    volume_24h: Optional[float] = None
    last_updated: datetime
    created_at: datetime

    model_config = {"frozen": True}


class CreateInstrumentInput(BaseModel):
    """Payload accepted when registering a new instrument."""

    symbol: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1)
    current_price: float = Field(..., gt=0.0)
    price_change_24h: float
    market_cap: Optional[float] = Field(default=None, gt=0.0)
    volume_24h: Optional[float] = Field(default=None, ge=0.0)


class InstrumentChanges(BaseModel):
    """Partial update body.  Only fields explicitly set are applied."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=10)
    name: Optional[str] = Field(default=None, min_length=1)
    current_price: Optional[float] = Field(default=None, gt=0.0)
    price_change_24h: Optional[float] = None
    market_cap: Optional[float] = Field(default=None, gt=0.0)
    volume_24h: Optional[float] = Field(default=None, ge=0.0)

    def changes(self) -> dict:
        """Fields the caller actually supplied.

        ``market_cap`` and ``volume_24h`` may be cleared with an explicit
        null; the remaining fields ignore null.
        """
        supplied = self.model_dump(exclude_unset=True, exclude={"id"})
        return {
            k: v for k, v in supplied.items()
            if v is not None or k in _NULLABLE_FIELDS
        }


_NULLABLE_FIELDS = frozenset({"market_cap", "volume_24h"})


class UpdateInstrumentInput(InstrumentChanges):
    """Partial update addressed to one instrument."""

    id: int
