"""Builtin echo handler: speaks back what it was asked."""

from __future__ import annotations

from askit.constants import BuiltinIntent
from askit.handler import RequestHandler
from askit.models import Context, Request, Session
from askit.response import Response

TURN_ATTRIBUTE = "turn"


def read_turn(session: Session) -> int:
    raw = (session.attributes or {}).get(TURN_ATTRIBUTE, 0)
    return raw if isinstance(raw, int) else 0


class EchoHandler(RequestHandler):
    def on_session_started(self, request: Request, session: Session, context: Context, response: Response) -> None:
        _ = (request, context, response)
        if session.attributes is not None:
            session.attributes[TURN_ATTRIBUTE] = 0

    def on_launch(self, request: Request, session: Session, context: Context, response: Response) -> None:
        _ = (request, context)
        _count_turn(session)
        response.set_output_speech("Echo is ready. Say something.")
        response.set_reprompt_text("Say something and I will repeat it.")
        response.set_end_session(False)

    def on_intent(self, request: Request, session: Session, context: Context, response: Response) -> None:
        _ = context
        turn = _count_turn(session)
        intent = request.intent
        name = intent.name if intent is not None else ""
        if name in (BuiltinIntent.STOP.value, BuiltinIntent.CANCEL.value):
            response.set_output_speech("Goodbye.")
            return

        slots = intent.slots if intent is not None else {}
        spoken = ", ".join(f"{slot_name} {slot.value}" for slot_name, slot in sorted(slots.items()) if slot.value)
        text = f"{name} {spoken}".strip()
        response.set_output_speech(text)
        response.set_simple_card(name, f"turn={turn} {text}")
        response.set_end_session(False)

    def on_session_ended(self, request: Request, session: Session, context: Context, response: Response) -> None:
        _ = (request, session, context, response)


def _count_turn(session: Session) -> int:
    turn = read_turn(session) + 1
    if session.attributes is not None:
        session.attributes[TURN_ATTRIBUTE] = turn
    return turn


handler = EchoHandler()
