"""Errors raised by the observation store and the query components."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for store-level failures that callers are expected to handle."""


class InstrumentNotFoundError(StoreError):
    """Raised when an operation references an instrument that does not exist.

    On ingestion this is a referential-integrity failure (nothing is
    written).  On queries it means "no such instrument", which is distinct
    from an instrument that exists but has no observations.
    """

    def __init__(self, instrument_id: int) -> None:
        self.instrument_id = instrument_id
        super().__init__(f"Instrument {instrument_id} not found")


class DuplicateSymbolError(StoreError):
    """Raised when an instrument symbol is already taken."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Instrument symbol '{symbol}' already exists")
