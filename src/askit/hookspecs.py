"""Pluggy hook namespace and lifecycle hook specifications."""

from __future__ import annotations

import pluggy

from askit.models import Context, Request, RequestEnvelope, Session
from askit.response import Response

ASKIT_HOOK_NAMESPACE = "askit"
hookspec = pluggy.HookspecMarker(ASKIT_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(ASKIT_HOOK_NAMESPACE)

LIFECYCLE_HOOKS = ("on_session_started", "on_launch", "on_intent", "on_session_ended")


class SkillHookSpecs:
    """Hook contract for skill handlers and observers."""

    @hookspec
    def on_session_started(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Handle the first request of a new session, before the type-specific hook."""

    @hookspec
    def on_launch(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Handle a LaunchRequest."""

    @hookspec
    def on_intent(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Handle an IntentRequest."""

    @hookspec
    def on_session_ended(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Handle a SessionEndedRequest."""

    @hookspec
    def on_unhandled_request(self, request: Request, session: Session, response: Response) -> None:
        """Observe a request whose type has no lifecycle hook."""

    @hookspec
    def on_error(self, stage: str, error: Exception, envelope: RequestEnvelope | None) -> None:
        """Observe failures from verification or any lifecycle hook."""
