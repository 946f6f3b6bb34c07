"""sentiment-pulse — current and historical sentiment for tracked instruments.

This is the application entry point.  It wires the ObservationStore,
DailyAggregator, LatestStateResolver, and REST endpoints together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sentiment_pulse.api.instruments import create_instrument_router
from sentiment_pulse.api.sentiment import create_sentiment_router
from sentiment_pulse.config import settings
from sentiment_pulse.core.daily_aggregator import DailyAggregator
from sentiment_pulse.core.latest_state import LatestStateResolver
from sentiment_pulse.foundation.clock import Clock, utc_now
from sentiment_pulse.store.observation_store import ObservationStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)


def create_app(
    store: ObservationStore | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Build the FastAPI app around *store* (a fresh one if omitted)."""

    store = store or ObservationStore()

    # ── Query components ─────────────────────────────────────────────────

    aggregator = DailyAggregator(store, clock=clock, precision=settings.score_precision)
    resolver = LatestStateResolver(store)

    # ── App ──────────────────────────────────────────────────────────────

    app = FastAPI(
        title=settings.app_name,
        description="Current and historical sentiment for tracked instruments",
        version="0.1.0",
        debug=settings.debug,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ───────────────────────────────────────────────────────────

    app.include_router(create_instrument_router(store, resolver))
    app.include_router(create_sentiment_router(
        store,
        aggregator,
        default_days=settings.default_days,
        default_limit=settings.default_limit,
        clock=clock,
    ))

    # ── Health ───────────────────────────────────────────────────────────

    @app.get("/health")
    async def health() -> dict:
        summary = await store.summary()
        return {
            "status": "ok",
            "timestamp": (clock or utc_now)().isoformat(),
            **summary.to_dict(),
        }

    return app


app = create_app()
