"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "sentiment-pulse"
    debug: bool = False
    log_level: str = "INFO"

    # History query defaults (bounds are fixed by SentimentQuery)
    default_days: int = 30
    default_limit: int = 100

    # Aggregation
    score_precision: int = 3

    # HTTP
    cors_origins: list[str] = ["*"]

    model_config = {"env_prefix": "SENTIMENT_PULSE_"}


settings = Settings()
