"""REST endpoints for tracked instruments and their current sentiment.

Paths:
    POST   /api/instruments
    GET    /api/instruments
    GET    /api/instruments/sentiment
    GET    /api/instruments/{id}
    PATCH  /api/instruments/{id}
    DELETE /api/instruments/{id}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response

from sentiment_pulse.core.latest_state import LatestStateResolver
from sentiment_pulse.domain.instrument import (
    CreateInstrumentInput,
    Instrument,
    InstrumentChanges,
    UpdateInstrumentInput,
)
from sentiment_pulse.domain.sentiment import InstrumentWithSentiment
from sentiment_pulse.store.errors import DuplicateSymbolError
from sentiment_pulse.store.observation_store import ObservationStore

logger = logging.getLogger(__name__)


def create_instrument_router(
    store: ObservationStore,
    resolver: LatestStateResolver,
) -> APIRouter:
    """Factory that wires the instrument endpoints to store + resolver."""

    router = APIRouter(prefix="/api/instruments", tags=["instruments"])

    @router.post("", status_code=201)
    async def create_instrument(body: CreateInstrumentInput) -> Instrument:
        try:
            return await store.add_instrument(body)
        except DuplicateSymbolError as exc:
            logger.warning("Rejected instrument: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @router.get("")
    async def list_instruments() -> list[Instrument]:
        return await store.list_instruments()

    # Declared before /{instrument_id} so "sentiment" is not parsed as an id.
    @router.get("/sentiment")
    async def instruments_with_sentiment() -> list[InstrumentWithSentiment]:
        """Every instrument with its latest observation's score and category."""
        return await resolver.resolve()

    @router.get("/{instrument_id}")
    async def get_instrument(instrument_id: int) -> Instrument:
        instrument = await store.get_instrument(instrument_id)
        if instrument is None:
            raise HTTPException(status_code=404, detail=f"Instrument {instrument_id} not found")
        return instrument

    @router.patch("/{instrument_id}")
    async def update_instrument(instrument_id: int, body: InstrumentChanges) -> Instrument:
        update = UpdateInstrumentInput(id=instrument_id, **body.model_dump(exclude_unset=True))
        try:
            updated = await store.update_instrument(update)
        except DuplicateSymbolError as exc:
            logger.warning("Rejected instrument update: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        if updated is None:
            raise HTTPException(status_code=404, detail=f"Instrument {instrument_id} not found")
        return updated

    @router.delete("/{instrument_id}", status_code=204)
    async def delete_instrument(instrument_id: int) -> Response:
        if not await store.delete_instrument(instrument_id):
            raise HTTPException(status_code=404, detail=f"Instrument {instrument_id} not found")
        return Response(status_code=204)

    return router
