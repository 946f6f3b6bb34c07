"""Raw observation feed for one instrument, newest first."""

from __future__ import annotations

from sentiment_pulse.core.bucketing import window_start
from sentiment_pulse.domain.observation import Observation
from sentiment_pulse.domain.sentiment import SentimentQuery
from sentiment_pulse.foundation.clock import Clock, ensure_utc, utc_now
from sentiment_pulse.store.errors import InstrumentNotFoundError
from sentiment_pulse.store.observation_store import ObservationSource


async def recent_observations(
    source: ObservationSource,
    query: SentimentQuery,
    clock: Clock | None = None,
) -> list[Observation]:
    """Observations within the trailing window, ordered by ``recorded_at``
    descending (higher id first on equal timestamps), capped at ``limit``.

    Raises:
        InstrumentNotFoundError: If the instrument does not exist.
    """
    if await source.get_instrument(query.instrument_id) is None:
        raise InstrumentNotFoundError(query.instrument_id)

    now = ensure_utc(clock() if clock is not None else utc_now())
    rows = await source.observations_for(
        query.instrument_id, since=window_start(now, query.days)
    )
    rows.sort(key=lambda o: o.recency_key, reverse=True)
    return rows[: query.limit]
