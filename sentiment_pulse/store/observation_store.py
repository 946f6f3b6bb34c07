"""In-memory, append-only Observation store with async-safe access.

Design notes:
    - An asyncio.Lock guards all reads and mutations so concurrent request
      handlers never observe a half-applied change.
    - Observations are append-only.  They are never updated, and removed
      only when their instrument is deleted (cascade).
    - Readers receive snapshot copies.  The query components compute over
      those copies outside the lock, so a long aggregation never blocks
      ingestion.
    - The store does NOT decide what sentiment means.  Bucketing and
      "latest" resolution live in sentiment_pulse.core.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Protocol

from sentiment_pulse.domain.instrument import (
    CreateInstrumentInput,
    Instrument,
    UpdateInstrumentInput,
)
from sentiment_pulse.domain.observation import Observation, ObservationInput
from sentiment_pulse.foundation.clock import utc_now
from sentiment_pulse.foundation.identifiers import IdSequence
from sentiment_pulse.store.errors import DuplicateSymbolError, InstrumentNotFoundError

logger = logging.getLogger(__name__)


class ObservationSource(Protocol):
    """Read-only view of the store that the query components depend on."""

    async def get_instrument(self, instrument_id: int) -> Instrument | None:
        ...

    async def list_instruments(self) -> list[Instrument]:
        ...

    async def observations_for(
        self, instrument_id: int, since: datetime | None = None
    ) -> list[Observation]:
        ...

    async def all_observations(self) -> list[Observation]:
        ...


class StoreSummary:
    """Record counts for health and diagnostics endpoints."""

    __slots__ = ("instrument_count", "observation_count", "instruments_with_data")

    def __init__(
        self,
        instrument_count: int = 0,
        observation_count: int = 0,
        instruments_with_data: int = 0,
    ) -> None:
        self.instrument_count = instrument_count
        self.observation_count = observation_count
        self.instruments_with_data = instruments_with_data

    def to_dict(self) -> dict:
        return {
            "instrument_count": self.instrument_count,
            "observation_count": self.observation_count,
            "instruments_with_data": self.instruments_with_data,
        }


class ObservationStore:
    """Async-safe, in-memory store of instruments and their observations."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._instruments: dict[int, Instrument] = {}
        self._observations: dict[int, list[Observation]] = {}
        self._instrument_ids = IdSequence()
        self._observation_ids = IdSequence()

    # ── Instruments ──────────────────────────────────────────────────────

    async def add_instrument(self, data: CreateInstrumentInput) -> Instrument:
        """Register a new instrument.  Symbols are unique."""
        async with self._lock:
            self._check_symbol_free(data.symbol)
            now = utc_now()
            instrument = Instrument(
                id=self._instrument_ids.next_id(),
                last_updated=now,
                created_at=now,
                **data.model_dump(),
            )
            self._instruments[instrument.id] = instrument
            self._observations[instrument.id] = []
            logger.info("Created instrument %d (%s)", instrument.id, instrument.symbol)
            return instrument

    async def update_instrument(self, data: UpdateInstrumentInput) -> Instrument | None:
        """Apply a partial update.  Returns None if the instrument is unknown."""
        async with self._lock:
            current = self._instruments.get(data.id)
            if current is None:
                return None
            changes = data.changes()
            new_symbol = changes.get("symbol")
            if new_symbol is not None and new_symbol != current.symbol:
                self._check_symbol_free(new_symbol)
            changes["last_updated"] = utc_now()
            updated = current.model_copy(update=changes)
            self._instruments[updated.id] = updated
            logger.info("Updated instrument %d: %s", updated.id, sorted(changes))
            return updated

    async def get_instrument(self, instrument_id: int) -> Instrument | None:
        async with self._lock:
            return self._instruments.get(instrument_id)

    async def list_instruments(self) -> list[Instrument]:
        """All instruments ordered by symbol."""
        async with self._lock:
            return sorted(self._instruments.values(), key=lambda i: i.symbol)

    async def delete_instrument(self, instrument_id: int) -> bool:
        """Remove an instrument together with all of its observations."""
        async with self._lock:
            if self._instruments.pop(instrument_id, None) is None:
                return False
            dropped = self._observations.pop(instrument_id, [])
            logger.info(
                "Deleted instrument %d (cascaded %d observation(s))",
                instrument_id,
                len(dropped),
            )
            return True

    # ── Observations ─────────────────────────────────────────────────────

    async def record(self, data: ObservationInput) -> Observation:
        """Append an observation, assigning id and timestamps.

        Raises:
            InstrumentNotFoundError: If ``data.instrument_id`` is unknown.
                Nothing is written in that case.
        """
        async with self._lock:
            if data.instrument_id not in self._instruments:
                raise InstrumentNotFoundError(data.instrument_id)
            now = utc_now()
            observation = Observation(
                id=self._observation_ids.next_id(),
                recorded_at=now,
                created_at=now,
                **data.model_dump(),
            )
            self._observations[data.instrument_id].append(observation)
            logger.debug(
                "Recorded observation %d for instrument %d (%s, score=%.3f)",
                observation.id,
                observation.instrument_id,
                observation.category.value,
                observation.score,
            )
            return observation

    async def observations_for(
        self, instrument_id: int, since: datetime | None = None
    ) -> list[Observation]:
        """Snapshot of one instrument's observations, optionally filtered to
        ``recorded_at >= since``.  No ordering is guaranteed.
        """
        async with self._lock:
            rows = self._observations.get(instrument_id, [])
            if since is None:
                return list(rows)
            return [o for o in rows if o.recorded_at >= since]

    async def all_observations(self) -> list[Observation]:
        """Snapshot of every stored observation.  No ordering is guaranteed."""
        async with self._lock:
            return [o for rows in self._observations.values() for o in rows]

    async def summary(self) -> StoreSummary:
        async with self._lock:
            return StoreSummary(
                instrument_count=len(self._instruments),
                observation_count=sum(len(rows) for rows in self._observations.values()),
                instruments_with_data=sum(1 for rows in self._observations.values() if rows),
            )

    # ── Internals ────────────────────────────────────────────────────────

    def _check_symbol_free(self, symbol: str) -> None:
        """Must be called while holding self._lock."""
        if any(i.symbol == symbol for i in self._instruments.values()):
            raise DuplicateSymbolError(symbol)
