"""Observation model — one immutable sentiment data point for an instrument.

An Observation is a *claim about sentiment* made by some upstream source
(a news scorer, a social-media classifier, an analyst).  The category is
accepted as supplied: it is never derived from, or checked against, the
score.  Once recorded, an Observation is never updated.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from sentiment_pulse.domain.enums import SentimentCategory
from sentiment_pulse.foundation.clock import ensure_utc


class ObservationInput(BaseModel):
    """Ingestion payload.  Validated at the boundary so the store and the
    query components never re-check field constraints.
    """

    instrument_id: int = Field(..., description="Id of an existing instrument")
    score: float = Field(
        ...,
        ge=-1.0,
        le=1.0,
        description="Normalised sentiment score (-1 = most negative, 1 = most positive)",
    )
    category: SentimentCategory = Field(..., description="Controlled sentiment label")
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Source's confidence in its own classification",
    )
    source: str = Field(..., min_length=1, max_length=256, description="Provenance of the observation")
    note: Optional[str] = Field(default=None, description="Free-text annotation, e.g. a headline")


class Observation(BaseModel):
    """A recorded observation.  ``id``, ``recorded_at`` and ``created_at``
    are assigned by the store at ingestion time.
    """

    id: int
    instrument_id: int
    score: float = Field(..., ge=-1.0, le=1.0)
    category: SentimentCategory
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: str
    note: Optional[str] = None
    recorded_at: datetime
    created_at: datetime

    model_config = {"frozen": True}

    @field_validator("recorded_at", "created_at")
    @classmethod
    def timestamps_are_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def recency_key(self) -> tuple[datetime, int]:
        """Sort key for "latest" ordering: timestamp first, id breaks ties."""
        return (self.recorded_at, self.id)
