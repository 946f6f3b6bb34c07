"""Shared helpers for calendar-day bucketing of observations.

Pure functions.  No clock access: callers pass ``now`` explicitly so every
result is reproducible for a fixed instant.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sentiment_pulse.domain.enums import SentimentCategory

DEFAULT_PRECISION = 3


def window_start(now: datetime, days: int) -> datetime:
    """Inclusive lower bound of a trailing window of *days* ending at *now*."""
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")
    return now - timedelta(days=days)


def calendar_day(ts: datetime) -> date:
    """UTC calendar day a timestamp falls on.  Naive values are taken as UTC."""
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(timezone.utc).date()


def round_metric(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """Round the exact binary value half away from zero.

    0.0625 -> 0.063 and -0.0625 -> -0.063; -0.0 is normalised to 0.0.
    """
    quantum = Decimal(10) ** -precision
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0


def mode_category(categories: Iterable[SentimentCategory]) -> SentimentCategory:
    """Most frequent category.

    Ties go to the category declared first in SentimentCategory (the most
    negative), so ``[positive, very_negative]`` resolves to
    ``very_negative`` and ``[very_positive, neutral]`` to ``neutral``.
    """
    counts = Counter(categories)
    if not counts:
        raise ValueError("mode of empty sequence")
    return min(counts, key=lambda c: (-counts[c], c.rank))
