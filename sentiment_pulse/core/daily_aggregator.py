"""Daily Aggregator — historical sentiment trend for one instrument.

Every call recomputes from raw observations:

    1. cutoff = now - days
    2. keep observations with recorded_at >= cutoff
    3. partition by UTC calendar day of recorded_at
    4. per day: mean score, mean confidence, mode category, count
    5. sort ascending by day
    6. keep the first ``limit`` days (the oldest ones)

Days without observations are omitted, never zero-filled.  The aggregator
holds no state between calls.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from statistics import mean

from sentiment_pulse.core.bucketing import (
    DEFAULT_PRECISION,
    calendar_day,
    mode_category,
    round_metric,
    window_start,
)
from sentiment_pulse.domain.observation import Observation
from sentiment_pulse.domain.sentiment import DailyAggregate, HistoricalSentiment, SentimentQuery
from sentiment_pulse.foundation.clock import Clock, ensure_utc, utc_now
from sentiment_pulse.store.errors import InstrumentNotFoundError
from sentiment_pulse.store.observation_store import ObservationSource

logger = logging.getLogger(__name__)


class DailyAggregator:
    """Groups an instrument's observations into per-day buckets.

    Args:
        source: Store to read instruments and observations from.
        clock: Optional source of "now".  Pin it in tests; results shift
            across day boundaries otherwise.
        precision: Decimal places for the mean score and mean confidence.
    """

    def __init__(
        self,
        source: ObservationSource,
        clock: Clock | None = None,
        precision: int = DEFAULT_PRECISION,
    ) -> None:
        self._source = source
        self._clock = clock
        self._precision = precision

    async def aggregate(self, query: SentimentQuery) -> HistoricalSentiment:
        """Compute daily buckets for ``query.instrument_id``.

        Raises:
            InstrumentNotFoundError: If the instrument does not exist.  An
                existing instrument with no observations in range yields an
                empty ``buckets`` list instead.
        """
        if await self._source.get_instrument(query.instrument_id) is None:
            raise InstrumentNotFoundError(query.instrument_id)

        now = ensure_utc(self._clock() if self._clock is not None else utc_now())
        cutoff = window_start(now, query.days)
        rows = await self._source.observations_for(query.instrument_id, since=cutoff)

        buckets = self.bucketize(rows)[: query.limit]
        logger.debug(
            "Aggregated %d observation(s) for instrument %d into %d bucket(s) (days=%d, limit=%d)",
            len(rows),
            query.instrument_id,
            len(buckets),
            query.days,
            query.limit,
        )
        return HistoricalSentiment(instrument_id=query.instrument_id, buckets=buckets)

    def bucketize(self, observations: list[Observation]) -> list[DailyAggregate]:
        """Partition *observations* by calendar day, oldest day first.

        No window filtering happens here; callers pass the rows they want
        bucketed.
        """
        by_day: dict[date, list[Observation]] = defaultdict(list)
        for obs in observations:
            by_day[calendar_day(obs.recorded_at)].append(obs)

        return [self._summarise(day, by_day[day]) for day in sorted(by_day)]

    def _summarise(self, day: date, rows: list[Observation]) -> DailyAggregate:
        return DailyAggregate(
            date=day,
            mean_score=round_metric(mean(o.score for o in rows), self._precision),
            category=mode_category(o.category for o in rows),
            mean_confidence=round_metric(mean(o.confidence for o in rows), self._precision),
            count=len(rows),
        )
