"""Latest-State Resolver — current sentiment for every tracked instrument.

"Latest" is a groupwise maximum over ``(recorded_at, id)``.  Insertion
order and id alone are never trusted: under concurrent writers an
observation with a higher id may carry an earlier timestamp.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sentiment_pulse.domain.observation import Observation
from sentiment_pulse.domain.sentiment import InstrumentWithSentiment
from sentiment_pulse.store.observation_store import ObservationSource

logger = logging.getLogger(__name__)


def latest_by_instrument(observations: Iterable[Observation]) -> dict[int, Observation]:
    """Single pass tracking the running maximum per instrument."""
    latest: dict[int, Observation] = {}
    for obs in observations:
        current = latest.get(obs.instrument_id)
        if current is None or obs.recency_key > current.recency_key:
            latest[obs.instrument_id] = obs
    return latest


class LatestStateResolver:
    """Attaches each instrument's most recent observation as its current
    sentiment.  Instruments without observations are still returned, with
    ``current_score`` and ``current_category`` set to None.
    """

    def __init__(self, source: ObservationSource) -> None:
        self._source = source

    async def resolve(self) -> list[InstrumentWithSentiment]:
        instruments = await self._source.list_instruments()
        latest = latest_by_instrument(await self._source.all_observations())

        resolved: list[InstrumentWithSentiment] = []
        for instrument in instruments:
            obs = latest.get(instrument.id)
            resolved.append(
                InstrumentWithSentiment(
                    **instrument.model_dump(),
                    current_score=obs.score if obs is not None else None,
                    current_category=obs.category if obs is not None else None,
                )
            )

        logger.debug(
            "Resolved current sentiment for %d instrument(s), %d with data",
            len(resolved),
            sum(1 for r in resolved if r.has_sentiment),
        )
        return resolved
