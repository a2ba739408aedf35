"""Clocks — production and fixed implementations of core Clock protocol."""

from datetime import datetime, timedelta, timezone


class SystemClock:
    """Reads the wall clock in UTC."""

    def utc_now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Returns a settable instant. Used by tests and replay scripts."""

    def __init__(self, now: datetime):
        self._now = now

    def utc_now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **delta: float) -> datetime:
        self._now = self._now + timedelta(**delta)
        return self._now
