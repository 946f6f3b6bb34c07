"""Controlled enumerations for the sentiment-pulse domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


class SentimentCategory(str, Enum):
    """Categorical sentiment label attached to an observation.

    Members are declared from most negative to most positive; ``rank``
    exposes that ordering as an integer in [-2, 2].
    """

    VERY_NEGATIVE = "very_negative"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    VERY_POSITIVE = "very_positive"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS: dict[SentimentCategory, int] = {
    SentimentCategory.VERY_NEGATIVE: -2,
    SentimentCategory.NEGATIVE: -1,
    SentimentCategory.NEUTRAL: 0,
    SentimentCategory.POSITIVE: 1,
    SentimentCategory.VERY_POSITIVE: 2,
}
