from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from askit.config import SkillSettings
from askit.dispatcher import RequestDispatcher
from askit.handler import RequestHandler
from askit.models import Context, Request, Session
from askit.response import Response

APP_ID = "amzn1.ask.skill.test"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)
FIXED_TIMESTAMP = "2026-10-19T12:00:00Z"


class RecordingHandler(RequestHandler):
    """Records every lifecycle call and optionally fails or mutates the response."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}
        self.end_session: bool | None = None
        self.seen_attributes: list[dict[str, Any] | None] = []

    def _record(self, name: str, session: Session, response: Response) -> None:
        self.calls.append(name)
        self.seen_attributes.append(session.attributes)
        if name in self.fail_on:
            raise self.fail_on[name]
        if self.end_session is not None and name != "on_session_started":
            response.set_end_session(self.end_session)

    def on_session_started(self, request: Request, session: Session, context: Context, response: Response) -> None:
        self._record("on_session_started", session, response)

    def on_launch(self, request: Request, session: Session, context: Context, response: Response) -> None:
        self._record("on_launch", session, response)

    def on_intent(self, request: Request, session: Session, context: Context, response: Response) -> None:
        self._record("on_intent", session, response)

    def on_session_ended(self, request: Request, session: Session, context: Context, response: Response) -> None:
        self._record("on_session_ended", session, response)


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASKIT_LOG_LEVEL", "ERROR")


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def settings() -> SkillSettings:
    return SkillSettings(application_id=APP_ID, _env_file=None)


@pytest.fixture
def dispatcher(handler: RecordingHandler, settings: SkillSettings) -> RequestDispatcher:
    return RequestDispatcher(handler, settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    def _make(
        request_type: str = "LaunchRequest",
        *,
        new: bool = False,
        app_id: str = APP_ID,
        timestamp: str = FIXED_TIMESTAMP,
        attributes: dict[str, Any] | None = None,
        intent: dict[str, Any] | None = None,
        locale: str = "en-US",
    ) -> dict[str, Any]:
        session: dict[str, Any] = {
            "new": new,
            "sessionId": "amzn1.echo-api.session.1",
            "application": {"applicationId": app_id},
            "user": {"userId": "amzn1.ask.account.user", "accessToken": "token-1"},
        }
        if attributes is not None:
            session["attributes"] = attributes
        request: dict[str, Any] = {
            "locale": locale,
            "timestamp": timestamp,
            "type": request_type,
            "requestId": "amzn1.echo-api.request.1",
        }
        if intent is not None:
            request["intent"] = intent
        return {
            "version": "1.0",
            "session": session,
            "request": request,
            "context": {
                "AudioPlayer": {"token": "track-1", "offsetInMilliseconds": 1200, "playerActivity": "PLAYING"},
                "Display": {"token": "display-1"},
                "System": {
                    "application": {"applicationId": app_id},
                    "user": {"userId": "amzn1.ask.account.user"},
                    "device": {
                        "deviceId": "device-1",
                        "supportedInterfaces": {
                            "AudioPlayer": {},
                            "Display": {"templateVersion": "1.0", "markupVersion": "1.0"},
                        },
                    },
                    "apiEndpoint": "https://api.amazonalexa.com",
                    "apiAccessToken": "api-token",
                },
            },
        }

    return _make
