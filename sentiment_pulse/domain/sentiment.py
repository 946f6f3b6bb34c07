"""Query inputs and derived result shapes for the sentiment read paths.

Nothing here is persisted.  DailyAggregate and InstrumentWithSentiment
exist only as query results and are recomputed on every call.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from sentiment_pulse.domain.enums import SentimentCategory
from sentiment_pulse.domain.instrument import Instrument

MIN_DAYS = 1
MAX_DAYS = 365
DEFAULT_DAYS = 30
MIN_LIMIT = 1
MAX_LIMIT = 1000
DEFAULT_LIMIT = 100


class SentimentQuery(BaseModel):
    """Window and cap for per-instrument history queries."""

    instrument_id: int
    days: int = Field(default=DEFAULT_DAYS, ge=MIN_DAYS, le=MAX_DAYS, description="Trailing window in days")
    limit: int = Field(default=DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT, description="Maximum number of results")

    model_config = {"frozen": True}


class DailyAggregate(BaseModel):
    """All observations of one instrument that fall on one UTC calendar day."""

    date: date
    mean_score: float = Field(..., ge=-1.0, le=1.0)
    category: SentimentCategory
    mean_confidence: float = Field(..., ge=0.0, le=1.0)
    count: int = Field(..., ge=1)

    model_config = {"frozen": True}

    @field_serializer("date")
    def _iso_date(self, v: date) -> str:
        return v.isoformat()


class HistoricalSentiment(BaseModel):
    """Daily buckets for one instrument, oldest first."""

    instrument_id: int
    buckets: list[DailyAggregate] = Field(default_factory=list)


class InstrumentWithSentiment(Instrument):
    """An instrument together with its current (latest) sentiment, if any."""

    current_score: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    current_category: Optional[SentimentCategory] = None

    @property
    def has_sentiment(self) -> bool:
        return self.current_score is not None
