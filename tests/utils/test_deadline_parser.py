"""Tests for deadline parsing."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from deadline_cli.models import TaskValidationError
from deadline_cli.utils.deadline_parser import parse_deadline
from tests.conftest import T0


class TestIso:
    def test_utc_with_z(self):
        assert parse_deadline("2025-03-01T18:00:00Z", T0) == datetime(
            2025, 3, 1, 18, 0, tzinfo=UTC
        )

    def test_offset_is_converted(self):
        result = parse_deadline("2025-03-01T20:00:00+02:00", T0)
        assert result == datetime(2025, 3, 1, 18, 0, tzinfo=UTC)
        assert result.utcoffset() == timedelta(0)

    def test_naive_is_local_time(self):
        result = parse_deadline("2025-03-01T18:00:00", T0)
        expected = datetime(2025, 3, 1, 18, 0).astimezone().astimezone(UTC)
        assert result == expected


class TestRelative:
    @pytest.mark.parametrize(
        ("text", "delta"),
        [
            ("in 90 minutes", timedelta(minutes=90)),
            ("in 45m", timedelta(minutes=45)),
            ("in 1 min", timedelta(minutes=1)),
            ("in 2 hours", timedelta(hours=2)),
            ("in 3h", timedelta(hours=3)),
            ("IN 1 Day", timedelta(days=1)),
            ("in 2 days", timedelta(days=2)),
        ],
    )
    def test_relative_phrases(self, text, delta):
        assert parse_deadline(text, T0) == T0 + delta

    def test_relative_uses_given_now(self):
        later = T0 + timedelta(days=10)
        assert parse_deadline("in 1 hour", later) == later + timedelta(hours=1)

    def test_natural_language_is_aware_and_in_future(self):
        result = parse_deadline("tomorrow at 5pm", T0)
        assert result.tzinfo is not None
        assert result > T0


class TestInvalid:
    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty(self, text):
        with pytest.raises(TaskValidationError, match="deadline"):
            parse_deadline(text, T0)

    def test_gibberish(self):
        with pytest.raises(TaskValidationError, match="could not understand"):
            parse_deadline("qwzx plorb", T0)

    @pytest.mark.parametrize("text", ["in 99999999999 days", "in 9999999 days"])
    def test_relative_out_of_range(self, text):
        with pytest.raises(TaskValidationError, match="too far away"):
            parse_deadline(text, T0)


def test_fixed_offset_now_is_accepted():
    now = datetime(2025, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert parse_deadline("in 30 minutes", now) == now + timedelta(minutes=30)
