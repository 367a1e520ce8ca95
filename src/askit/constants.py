"""Fixed wire values shared by request and response models."""

from __future__ import annotations

from enum import Enum

SDK_VERSION = "1.0"
DEFAULT_TIMESTAMP_TOLERANCE = 150


class RequestType(str, Enum):
    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SESSION_ENDED = "SessionEndedRequest"


class BuiltinIntent(str, Enum):
    HELP = "AMAZON.HelpIntent"
    CANCEL = "AMAZON.CancelIntent"
    STOP = "AMAZON.StopIntent"
    PAUSE = "AMAZON.PauseIntent"
    START_OVER = "AMAZON.StartOverIntent"
    REPEAT = "AMAZON.RepeatIntent"


class ConfirmationStatus(str, Enum):
    """Status of a dialog or slot confirmation."""

    CONFIRMED = "CONFIRMED"
    DENIED = "DENIED"
    NONE = "NONE"


class CardType(str, Enum):
    SIMPLE = "Simple"
    STANDARD = "Standard"
    LINK_ACCOUNT = "LinkAccount"
    ASK_FOR_PERMISSIONS_CONSENT = "AskForPermissionsConsent"


class OutputSpeechType(str, Enum):
    PLAIN_TEXT = "PlainText"
    SSML = "SSML"


class PlayBehavior(str, Enum):
    """How new speech or audio interacts with what is already queued."""

    ENQUEUE = "ENQUEUE"
    REPLACE_ALL = "REPLACE_ALL"
    REPLACE_ENQUEUED = "REPLACE_ENQUEUED"


class PlayerActivity(str, Enum):
    IDLE = "IDLE"
    PAUSED = "PAUSED"
    PLAYING = "PLAYING"
    BUFFER_UNDERRUN = "BUFFER_UNDERRUN"
    FINISHED = "FINISHED"
    STOPPED = "STOPPED"


class AudioPlayerDirectiveType(str, Enum):
    PLAY = "AudioPlayer.Play"
    STOP = "AudioPlayer.Stop"
    CLEAR_QUEUE = "AudioPlayer.ClearQueue"


class DialogDirectiveType(str, Enum):
    DELEGATE = "Dialog.Delegate"
    ELICIT_SLOT = "Dialog.ElicitSlot"
    CONFIRM_SLOT = "Dialog.ConfirmSlot"
    CONFIRM_INTENT = "Dialog.ConfirmIntent"


class Locale(str, Enum):
    ITALIAN = "it-IT"
    GERMAN = "de-DE"
    AUSTRALIAN_ENGLISH = "en-AU"
    CANADIAN_ENGLISH = "en-CA"
    BRITISH_ENGLISH = "en-GB"
    INDIAN_ENGLISH = "en-IN"
    AMERICAN_ENGLISH = "en-US"
    JAPANESE = "ja-JP"


def is_english(locale: str | Locale) -> bool:
    """Return True for any English-family locale code."""

    value = locale.value if isinstance(locale, Locale) else str(locale)
    return value.startswith("en-")
