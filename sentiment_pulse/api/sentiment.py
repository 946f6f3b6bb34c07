"""REST endpoints for sentiment ingestion and per-instrument history.

Paths:
    POST /api/sentiment
    GET  /api/instruments/{id}/sentiment           raw observations, newest first
    GET  /api/instruments/{id}/sentiment/history   daily buckets, oldest first

Query bounds (days 1..365, limit 1..1000) are enforced here so violations
never reach the aggregator.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from sentiment_pulse.core.daily_aggregator import DailyAggregator
from sentiment_pulse.core.observation_feed import recent_observations
from sentiment_pulse.domain.observation import Observation, ObservationInput
from sentiment_pulse.domain.sentiment import (
    DEFAULT_DAYS,
    DEFAULT_LIMIT,
    MAX_DAYS,
    MAX_LIMIT,
    MIN_DAYS,
    MIN_LIMIT,
    HistoricalSentiment,
    SentimentQuery,
)
from sentiment_pulse.foundation.clock import Clock
from sentiment_pulse.store.errors import InstrumentNotFoundError
from sentiment_pulse.store.observation_store import ObservationStore

logger = logging.getLogger(__name__)


def create_sentiment_router(
    store: ObservationStore,
    aggregator: DailyAggregator,
    default_days: int = DEFAULT_DAYS,
    default_limit: int = DEFAULT_LIMIT,
    clock: Clock | None = None,
) -> APIRouter:
    """Factory that wires the sentiment endpoints to store + aggregator.

    Args:
        store: Where observations are recorded and read from.
        aggregator: Daily Aggregator serving the history endpoint.
        default_days: Window used when the caller omits ``days``.
        default_limit: Cap used when the caller omits ``limit``.
        clock: Optional fixed clock for the raw observation feed.
    """

    router = APIRouter(prefix="/api", tags=["sentiment"])

    @router.post("/sentiment", status_code=201)
    async def record_sentiment(body: ObservationInput) -> Observation:
        try:
            return await store.record(body)
        except InstrumentNotFoundError as exc:
            logger.warning("Rejected observation: %s", exc)
            raise HTTPException(
                status_code=422,
                detail=f"Referenced instrument not found: {exc.instrument_id}",
            ) from exc

    @router.get("/instruments/{instrument_id}/sentiment")
    async def instrument_sentiment(
        instrument_id: int,
        days: int = Query(default_days, ge=MIN_DAYS, le=MAX_DAYS),
        limit: int = Query(default_limit, ge=MIN_LIMIT, le=MAX_LIMIT),
    ) -> list[Observation]:
        query = SentimentQuery(instrument_id=instrument_id, days=days, limit=limit)
        try:
            return await recent_observations(store, query, clock=clock)
        except InstrumentNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.get("/instruments/{instrument_id}/sentiment/history")
    async def instrument_sentiment_history(
        instrument_id: int,
        days: int = Query(default_days, ge=MIN_DAYS, le=MAX_DAYS),
        limit: int = Query(default_limit, ge=MIN_LIMIT, le=MAX_LIMIT),
    ) -> HistoricalSentiment:
        query = SentimentQuery(instrument_id=instrument_id, days=days, limit=limit)
        try:
            return await aggregator.aggregate(query)
        except InstrumentNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    return router
