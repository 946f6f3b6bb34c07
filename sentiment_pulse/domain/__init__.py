from sentiment_pulse.domain.enums import SentimentCategory
from sentiment_pulse.domain.instrument import Instrument
from sentiment_pulse.domain.observation import Observation, ObservationInput
from sentiment_pulse.domain.sentiment import (
    DailyAggregate,
    HistoricalSentiment,
    InstrumentWithSentiment,
    SentimentQuery,
)

__all__ = [
    "SentimentCategory",
    "Instrument",
    "Observation",
    "ObservationInput",
    "DailyAggregate",
    "HistoricalSentiment",
    "InstrumentWithSentiment",
    "SentimentQuery",
]
