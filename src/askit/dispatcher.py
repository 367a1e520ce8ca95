"""Request dispatcher: verify one envelope, run lifecycle hooks, build the response."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeAlias, cast

import pluggy
from loguru import logger
from pydantic import ValidationError

from askit.config import SkillSettings, get_settings
from askit.constants import RequestType
from askit.errors import RequestEnvelopeNilError, RequestVerificationError, ResponseBuildError
from askit.handler import HandlerPlugin, RequestHandler
from askit.hook_runtime import HookRuntime
from askit.hookspecs import ASKIT_HOOK_NAMESPACE, SkillHookSpecs
from askit.models import Request, RequestEnvelope, Session, parse_envelope
from askit.response import Response, ResponseEnvelope
from askit.validation import verify_application_id, verify_timestamp

Clock: TypeAlias = Callable[[], datetime]

HANDLER_PLUGIN_NAME = "handler"

_HOOK_BY_REQUEST_TYPE = {
    RequestType.LAUNCH.value: "on_launch",
    RequestType.INTENT.value: "on_intent",
    RequestType.SESSION_ENDED.value: "on_session_ended",
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RequestDispatcher:
    """Validate inbound envelopes and route them to one skill's lifecycle hooks.

    The session object of each envelope is treated as an in/out value: its
    attribute mapping is initialized in place when missing and callbacks may
    mutate it. Callers must serialize requests that share a session.
    """

    def __init__(
        self,
        handler: RequestHandler,
        settings: SkillSettings | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.handler = handler
        self._timestamp_tolerance = self.settings.timestamp_tolerance
        self._clock = clock or _utc_now
        self._plugin_manager = pluggy.PluginManager(ASKIT_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(SkillHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)
        self._plugin_manager.register(HandlerPlugin(handler), name=HANDLER_PLUGIN_NAME)

    @property
    def timestamp_tolerance(self) -> int:
        return self._timestamp_tolerance

    def set_timestamp_tolerance(self, seconds: int) -> None:
        """Set the maximum seconds allowed between the request timestamp and now."""

        if seconds < 0:
            raise ValueError("timestamp tolerance must be non-negative")
        self._timestamp_tolerance = seconds

    def register(self, plugin: object, name: str | None = None) -> str | None:
        """Register an extra plugin implementing lifecycle or observer hooks."""

        return self._plugin_manager.register(plugin, name=name)

    def hook_report(self) -> dict[str, list[str]]:
        return self._hook_runtime.hook_report()

    def verify_request(self, envelope: RequestEnvelope | None) -> None:
        """Run the envelope, identity and timestamp checks without dispatching."""

        session, request = _require_parts(envelope)
        if self.settings.ignore_application_id:
            logger.debug("dispatch.application_id_check_skipped")
        else:
            verify_application_id(self.settings.application_id, session.application.application_id)

        if self.settings.ignore_timestamp:
            logger.info("dispatch.timestamp_check_skipped")
        else:
            verify_timestamp(request.timestamp, tolerance=self._timestamp_tolerance, now=self._clock())

    def process_request(self, envelope: RequestEnvelope | None) -> ResponseEnvelope:
        """Process one request envelope and return the response envelope.

        Raises:
            RequestEnvelopeNilError: if the envelope, session or request is missing.
            RequestVerificationError: if the identity or timestamp check fails.
            ResponseBuildError: if the session attributes cannot be sent back as JSON.
            Exception: whatever a lifecycle hook raised, unchanged.
        """

        try:
            session, request = _require_parts(envelope)
        except RequestEnvelopeNilError as exc:
            self._hook_runtime.notify_error(stage="envelope", error=exc, envelope=envelope)
            raise
        envelope = cast(RequestEnvelope, envelope)

        with logger.contextualize(request_id=request.request_id, session_id=session.session_id):
            logger.debug("dispatch.request type={} new_session={}", request.type, session.is_new)
            try:
                self.verify_request(envelope)
            except RequestVerificationError as exc:
                logger.warning("dispatch.rejected type={} reason={}", request.type, exc)
                self._hook_runtime.notify_error(stage="verify", error=exc, envelope=envelope)
                raise

            if session.attributes is None:
                session.attributes = {}

            response = Response()
            if session.is_new:
                self._run_lifecycle("on_session_started", envelope, response)

            hook_name = _HOOK_BY_REQUEST_TYPE.get(request.type)
            if hook_name is None:
                logger.debug("dispatch.unhandled type={}", request.type)
                self._hook_runtime.call_observers(
                    "on_unhandled_request",
                    request=request,
                    session=session,
                    response=response,
                )
            else:
                self._run_lifecycle(hook_name, envelope, response)

            attributes = session.attributes or {}
            logger.debug("dispatch.session_attributes keys={}", sorted(attributes, key=str))
            try:
                return ResponseEnvelope(session_attributes=dict(attributes), response=response)
            except ValidationError as exc:
                error = ResponseBuildError(
                    f"session attributes are not JSON serializable: {exc.error_count()} validation error(s)"
                )
                logger.warning("dispatch.response_failed type={} reason={}", request.type, error)
                self._hook_runtime.notify_error(stage="response", error=error, envelope=envelope)
                raise error from exc

    def process_payload(self, payload: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
        """Parse a raw request payload, process it and return the wire response."""

        return self.process_request(parse_envelope(payload)).to_dict()

    def _run_lifecycle(self, hook_name: str, envelope: RequestEnvelope, response: Response) -> None:
        try:
            self._hook_runtime.call_lifecycle(
                hook_name,
                request=envelope.request,
                session=envelope.session,
                context=envelope.context,
                response=response,
            )
        except Exception as exc:
            logger.warning("dispatch.hook_failed hook={} error={}", hook_name, exc)
            self._hook_runtime.notify_error(stage=hook_name, error=exc, envelope=envelope)
            raise


def _require_parts(envelope: RequestEnvelope | None) -> tuple[Session, Request]:
    if envelope is None:
        raise RequestEnvelopeNilError("envelope")
    if envelope.session is None:
        raise RequestEnvelopeNilError("session")
    if envelope.request is None:
        raise RequestEnvelopeNilError("request")
    return envelope.session, envelope.request
