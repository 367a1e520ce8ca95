"""Envelope verification: application identity and timestamp freshness."""

from __future__ import annotations

import re
from datetime import datetime

from askit.errors import (
    ApplicationIdMismatchError,
    ApplicationIdNotConfiguredError,
    RequestApplicationIdMissingError,
    TimestampParseError,
    TimestampToleranceError,
)

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})$",
)


def verify_application_id(expected: str, actual: str) -> None:
    """Check that the request came from the configured application.

    Args:
        expected: Application id the dispatcher is configured with.
        actual: Application id carried by the request session.

    Raises:
        ApplicationIdNotConfiguredError: if ``expected`` is empty.
        RequestApplicationIdMissingError: if ``actual`` is empty.
        ApplicationIdMismatchError: if the two differ.
    """

    if not expected:
        raise ApplicationIdNotConfiguredError()
    if not actual:
        raise RequestApplicationIdMissingError()
    if expected != actual:
        raise ApplicationIdMismatchError(expected, actual)


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC3339 timestamp into an aware datetime."""

    if not isinstance(raw, str) or not _RFC3339.match(raw):
        raise TimestampParseError(str(raw))
    normalized = raw.upper()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise TimestampParseError(raw) from exc


def verify_timestamp(raw: str, *, tolerance: int, now: datetime) -> datetime:
    """Check that ``raw`` is within ``tolerance`` seconds of ``now``.

    A delta exactly equal to the tolerance is accepted.
    """

    timestamp = parse_timestamp(raw)
    delta = abs((now - timestamp).total_seconds())
    if delta > tolerance:
        raise TimestampToleranceError(timestamp, now, tolerance)
    return timestamp
