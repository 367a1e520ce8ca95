"""The request handler contract implemented by each skill."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from askit.hookspecs import hookimpl
from askit.models import Context, Request, Session
from askit.response import Response


class RequestHandler(ABC):
    """Lifecycle callbacks for one skill.

    Every method receives the request, the mutable session, the read-only
    context and the mutable response. Raising from any of them aborts the
    request and the exception reaches the caller of the dispatcher.
    """

    @abstractmethod
    def on_session_started(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Called once for the first request of a new session."""

    @abstractmethod
    def on_launch(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Called when the user opens the skill without an intent."""

    @abstractmethod
    def on_intent(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Called for every intent request."""

    @abstractmethod
    def on_session_ended(self, request: Request, session: Session, context: Context, response: Response) -> None:
        """Called when the platform closes the session."""


class HandlerPlugin:
    """Expose a ``RequestHandler`` to the plugin manager as hook implementations."""

    def __init__(self, handler: RequestHandler) -> None:
        self.handler = handler

    @hookimpl
    def on_session_started(self, request: Request, session: Session, context: Context, response: Response) -> Any:
        return self.handler.on_session_started(request, session, context, response)

    @hookimpl
    def on_launch(self, request: Request, session: Session, context: Context, response: Response) -> Any:
        return self.handler.on_launch(request, session, context, response)

    @hookimpl
    def on_intent(self, request: Request, session: Session, context: Context, response: Response) -> Any:
        return self.handler.on_intent(request, session, context, response)

    @hookimpl
    def on_session_ended(self, request: Request, session: Session, context: Context, response: Response) -> Any:
        return self.handler.on_session_ended(request, session, context, response)
