"""askit - request dispatch and response building for voice skill backends."""

from .constants import (
    SDK_VERSION,
    AudioPlayerDirectiveType,
    BuiltinIntent,
    CardType,
    ConfirmationStatus,
    DialogDirectiveType,
    Locale,
    OutputSpeechType,
    PlayBehavior,
    PlayerActivity,
    RequestType,
    is_english,
)
from .dispatcher import RequestDispatcher
from .handler import RequestHandler
from .hookspecs import hookimpl
from .models import Context, Intent, IntentSlot, Request, RequestEnvelope, Session, parse_envelope
from .response import Response, ResponseEnvelope

__version__ = "0.1.0"

__all__ = [
    "SDK_VERSION",
    "AudioPlayerDirectiveType",
    "BuiltinIntent",
    "CardType",
    "ConfirmationStatus",
    "Context",
    "DialogDirectiveType",
    "Intent",
    "IntentSlot",
    "Locale",
    "OutputSpeechType",
    "PlayBehavior",
    "PlayerActivity",
    "Request",
    "RequestDispatcher",
    "RequestEnvelope",
    "RequestHandler",
    "RequestType",
    "Response",
    "ResponseEnvelope",
    "Session",
    "hookimpl",
    "is_english",
    "parse_envelope",
]
