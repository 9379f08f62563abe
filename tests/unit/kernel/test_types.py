"""Unit tests for kernel types – Option, Result, RFC 3339 formatting."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from es_atompub.kernel.errors import NotFoundError, StoreError
from es_atompub.kernel.time import format_rfc3339
from es_atompub.kernel.types import Err, Nothing, Ok, Some, option_of


class TestOption:
    def test_option_of_none(self) -> None:
        assert option_of(None) == Nothing()

    def test_option_of_value(self) -> None:
        assert option_of("feed-1") == Some("feed-1")

    def test_empty_string_is_some(self) -> None:
        assert option_of("").is_some()

    def test_unwrap_or(self) -> None:
        assert Nothing().unwrap_or("recent") == "recent"
        assert Some("a").unwrap_or("recent") == "a"

    def test_unwrap_nothing_raises(self) -> None:
        with pytest.raises(ValueError):
            Nothing().unwrap()

    def test_iteration(self) -> None:
        assert list(Some("x")) == ["x"]
        assert list(Nothing()) == []


class TestResult:
    def test_ok_unwrap(self) -> None:
        assert Ok(3).unwrap() == 3
        assert Ok(3).is_ok()

    def test_err_unwrap_raises_error(self) -> None:
        with pytest.raises(NotFoundError):
            Err(NotFoundError("event", "a:1")).unwrap()

    def test_err_unwrap_or(self) -> None:
        assert Err(StoreError("q")).unwrap_or(0) == 0


class TestFormatRfc3339:
    def test_whole_seconds(self) -> None:
        assert format_rfc3339(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)) == "2024-01-02T03:04:05Z"

    def test_trailing_zeros_trimmed(self) -> None:
        assert format_rfc3339(datetime(2024, 1, 2, 3, 4, 5, 120000, tzinfo=UTC)) == "2024-01-02T03:04:05.12Z"

    def test_fraction_dropped_when_not_wanted(self) -> None:
        moment = datetime(2024, 1, 2, 3, 4, 5, 120000, tzinfo=UTC)
        assert format_rfc3339(moment, fractional=False) == "2024-01-02T03:04:05Z"

    def test_offset(self) -> None:
        tz = timezone(-timedelta(hours=5, minutes=30))
        assert format_rfc3339(datetime(2024, 1, 2, 3, 4, 5, tzinfo=tz)) == "2024-01-02T03:04:05-05:30"

    def test_naive_is_utc(self) -> None:
        assert format_rfc3339(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"
