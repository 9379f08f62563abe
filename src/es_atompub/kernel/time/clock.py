"""Kernel time – Clock protocol, implementations and RFC 3339 formatting."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed


def format_rfc3339(moment: datetime, *, fractional: bool = True) -> str:
    """Render *moment* as RFC 3339.

    With ``fractional`` the sub-second part is kept with trailing zeros
    trimmed and dropped entirely when zero (``2017-01-02T15:04:05.5Z``).
    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)

    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if fractional and moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")

    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"

    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


__all__ = ["Clock", "FrozenClock", "SystemClock", "format_rfc3339"]
