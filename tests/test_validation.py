from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from askit.errors import (
    ApplicationIdMismatchError,
    ApplicationIdNotConfiguredError,
    RequestApplicationIdMissingError,
    TimestampParseError,
    TimestampToleranceError,
)
from askit.validation import parse_timestamp, verify_application_id, verify_timestamp

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


def test_application_id_cases() -> None:
    verify_application_id("skill-1", "skill-1")

    with pytest.raises(ApplicationIdNotConfiguredError):
        verify_application_id("", "skill-1")
    with pytest.raises(RequestApplicationIdMissingError):
        verify_application_id("skill-1", "")
    with pytest.raises(ApplicationIdMismatchError) as excinfo:
        verify_application_id("skill-1", "skill-2")

    assert (excinfo.value.expected, excinfo.value.actual) == ("skill-1", "skill-2")


def test_configured_id_checked_before_request_id() -> None:
    with pytest.raises(ApplicationIdNotConfiguredError):
        verify_application_id("", "")


def test_application_id_is_exact_match() -> None:
    with pytest.raises(ApplicationIdMismatchError):
        verify_application_id("Skill-1", "skill-1")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-10-19T12:00:00Z", NOW),
        ("2026-10-19t12:00:00z", NOW),
        ("2026-10-19T14:00:00+02:00", NOW),
        ("2026-10-19T12:00:00.250Z", NOW + timedelta(milliseconds=250)),
    ],
)
def test_parse_timestamp(raw, expected) -> None:
    assert parse_timestamp(raw) == expected


def test_parse_timestamp_keeps_offset() -> None:
    parsed = parse_timestamp("2026-10-19T07:00:00-05:00")

    assert parsed.utcoffset() == timezone(timedelta(hours=-5)).utcoffset(None)


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "2026-10-19", "2026-10-19 12:00:00Z", "2026-10-19T12:00Z", "2026-10-19T25:00:00Z", "1760875200"],
)
def test_parse_timestamp_rejects(raw) -> None:
    with pytest.raises(TimestampParseError) as excinfo:
        parse_timestamp(raw)

    assert excinfo.value.raw == raw


def test_tolerance_boundary_is_inclusive() -> None:
    assert verify_timestamp("2026-10-19T12:02:30Z", tolerance=150, now=NOW) == NOW + timedelta(seconds=150)

    with pytest.raises(TimestampToleranceError) as excinfo:
        verify_timestamp("2026-10-19T12:02:31Z", tolerance=150, now=NOW)

    assert excinfo.value.now == NOW
    assert "150 seconds" in str(excinfo.value)


def test_zero_tolerance() -> None:
    verify_timestamp("2026-10-19T12:00:00Z", tolerance=0, now=NOW)

    with pytest.raises(TimestampToleranceError):
        verify_timestamp("2026-10-19T11:59:59Z", tolerance=0, now=NOW)
