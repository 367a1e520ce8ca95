"""Outbound response models and the builders callbacks use to fill them."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import Discriminator, Field, Tag

from askit.constants import (
    SDK_VERSION,
    AudioPlayerDirectiveType,
    CardType,
    DialogDirectiveType,
    OutputSpeechType,
    PlayBehavior,
)
from askit.models import Attributes, Intent, WireModel

DIRECTIVE_FAMILIES = ("AudioPlayer", "Dialog")


class OutputSpeech(WireModel):
    type: OutputSpeechType
    text: str | None = None
    ssml: str | None = None
    play_behavior: PlayBehavior | None = None


class Image(WireModel):
    small_image_url: str | None = None
    large_image_url: str | None = None


class Card(WireModel):
    type: CardType
    title: str | None = None
    content: str | None = None
    text: str | None = None
    image: Image | None = None


class Reprompt(WireModel):
    output_speech: OutputSpeech | None = None


class Stream(WireModel):
    token: str = ""
    url: str = ""
    offset_in_milliseconds: int = 0


class AudioItem(WireModel):
    stream: Stream = Field(default_factory=Stream)


class AudioPlayerDirective(WireModel):
    type: str
    play_behavior: PlayBehavior | None = None
    audio_item: AudioItem | None = None


class DialogDirective(WireModel):
    type: str
    slot_to_elicit: str | None = None
    slot_to_confirm: str | None = None
    updated_intent: Intent | None = None


def _directive_family(value: Any) -> str | None:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if not isinstance(kind, str):
        return None
    family = kind.split(".", 1)[0]
    if family in DIRECTIVE_FAMILIES:
        return family
    return None


def _wire_value(kind: str | Enum) -> str:
    return kind.value if isinstance(kind, Enum) else kind


Directive = Annotated[
    Annotated[AudioPlayerDirective, Tag("AudioPlayer")] | Annotated[DialogDirective, Tag("Dialog")],
    Discriminator(_directive_family),
]


class Response(WireModel):
    """Mutable response body handed to every lifecycle callback."""

    output_speech: OutputSpeech | None = None
    card: Card | None = None
    reprompt: Reprompt | None = None
    directives: list[Directive] = Field(default_factory=list)
    should_end_session: bool = True

    # Empty strings are stored as None so they are omitted on the wire.

    def set_output_speech(self, text: str) -> None:
        self.output_speech = OutputSpeech(type=OutputSpeechType.PLAIN_TEXT, text=text or None)

    def set_output_ssml(self, ssml: str) -> None:
        self.output_speech = OutputSpeech(type=OutputSpeechType.SSML, ssml=ssml or None)

    def set_simple_card(self, title: str, content: str) -> None:
        self.card = Card(type=CardType.SIMPLE, title=title or None, content=content or None)

    def set_standard_card(self, title: str, text: str, small_image_url: str, large_image_url: str) -> None:
        self.card = Card(
            type=CardType.STANDARD,
            title=title or None,
            text=text or None,
            image=Image(small_image_url=small_image_url or None, large_image_url=large_image_url or None),
        )

    def set_link_account_card(self) -> None:
        self.card = Card(type=CardType.LINK_ACCOUNT)

    def set_reprompt_text(self, text: str) -> None:
        if self.reprompt is None:
            self.reprompt = Reprompt()
        self.reprompt.output_speech = OutputSpeech(type=OutputSpeechType.PLAIN_TEXT, text=text or None)

    def set_reprompt_ssml(self, ssml: str) -> None:
        if self.reprompt is None:
            self.reprompt = Reprompt()
        self.reprompt.output_speech = OutputSpeech(type=OutputSpeechType.SSML, ssml=ssml or None)

    def set_end_session(self, flag: bool) -> Response:
        """Set whether the device should close the session; returns self for chaining."""

        self.should_end_session = flag
        return self

    def add_audio_player(
        self,
        player_type: str | AudioPlayerDirectiveType,
        play_behavior: str | PlayBehavior | None,
        stream_token: str,
        url: str,
        offset_in_milliseconds: int,
    ) -> None:
        directive = AudioPlayerDirective(
            type=_wire_value(player_type),
            play_behavior=play_behavior or None,
            audio_item=AudioItem(stream=Stream(token=stream_token, url=url, offset_in_milliseconds=offset_in_milliseconds)),
        )
        self.directives.append(directive)

    def add_dialog_directive(
        self,
        dialog_type: str | DialogDirectiveType,
        slot_to_elicit: str | None = None,
        slot_to_confirm: str | None = None,
        intent: Intent | None = None,
    ) -> None:
        directive = DialogDirective(
            type=_wire_value(dialog_type),
            slot_to_elicit=slot_to_elicit or None,
            slot_to_confirm=slot_to_confirm or None,
            updated_intent=intent,
        )
        self.directives.append(directive)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if not data.get("directives"):
            data.pop("directives", None)
        return data


class ResponseEnvelope(WireModel):
    """Top-level outbound message."""

    version: str = SDK_VERSION
    session_attributes: Attributes = Field(default_factory=dict)
    response: Response = Field(default_factory=Response)

    def to_dict(self) -> dict[str, Any]:
        # exclude_none would drop attributes whose value is None.
        data = self.model_dump(mode="json", by_alias=True, include={"version", "session_attributes"})
        if not data["sessionAttributes"]:
            del data["sessionAttributes"]
        data["response"] = self.response.to_dict()
        return data
