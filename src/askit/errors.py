"""Application-level exception types for askit."""

from __future__ import annotations

from datetime import datetime


class AskitError(Exception):
    """Base exception for askit."""


class ConfigurationError(AskitError):
    """Raised when a handler or dispatcher cannot be configured."""


class RequestEnvelopeNilError(AskitError):
    """Raised when the envelope, its session or its request is missing."""

    def __init__(self, missing: str = "envelope") -> None:
        super().__init__(f"request {missing} was nil")
        self.missing = missing


class MalformedEnvelopeError(AskitError):
    """Raised when an inbound payload does not match the envelope schema."""


class RequestVerificationError(AskitError):
    """Base exception for envelope verification failures."""


class ApplicationIdError(RequestVerificationError):
    """Base exception for application identity failures."""


class ApplicationIdNotConfiguredError(ApplicationIdError):
    """Raised when the dispatcher has no application id configured."""

    def __init__(self) -> None:
        super().__init__("application ID was set to an empty string")


class RequestApplicationIdMissingError(ApplicationIdError):
    """Raised when the request carries no application id."""

    def __init__(self) -> None:
        super().__init__("request application ID was set to an empty string")


class ApplicationIdMismatchError(ApplicationIdError):
    """Raised when the request application id differs from the configured one."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__("request application ID does not match expected application ID")
        self.expected = expected
        self.actual = actual


class TimestampParseError(RequestVerificationError):
    """Raised when the request timestamp is not valid RFC3339."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"unable to parse request timestamp {raw!r}")
        self.raw = raw


class TimestampToleranceError(RequestVerificationError):
    """Raised when the request timestamp is too far from the current time."""

    def __init__(self, timestamp: datetime, now: datetime, tolerance: int) -> None:
        super().__init__(
            f"request timestamp {timestamp.isoformat()} was off the current time "
            f"{now.isoformat()} by more than {tolerance} seconds"
        )
        self.timestamp = timestamp
        self.now = now
        self.tolerance = tolerance


class SlotNotFoundError(AskitError, LookupError):
    """Raised when a named slot is not present on the intent."""

    def __init__(self, slot_name: str) -> None:
        super().__init__(f"slot {slot_name!r} not found")
        self.slot_name = slot_name


class AsyncHookError(AskitError):
    """Raised when a lifecycle hook implementation returns an awaitable."""


class ResponseBuildError(AskitError):
    """Raised when the response envelope cannot be built from the session state."""
