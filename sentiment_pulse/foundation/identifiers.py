"""Monotonic integer ID generation for stored records."""

from __future__ import annotations

import itertools


class IdSequence:
    """Hands out increasing integer ids starting at 1.  Ids are never reused,
    even after the record they identified is deleted.
    """

    __slots__ = ("_counter",)

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)
