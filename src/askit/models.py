"""Inbound request envelope models and their convenience accessors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from askit.constants import ConfirmationStatus, PlayerActivity, RequestType
from askit.errors import MalformedEnvelopeError, RequestEnvelopeNilError, SlotNotFoundError

Attributes: TypeAlias = dict[str, JsonValue]


def _null_as_empty(value: Any, empty: Any) -> Any:
    return empty if value is None else value


class WireModel(BaseModel):
    """Base for every model that crosses the wire with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FrozenWireModel(WireModel):
    model_config = ConfigDict(frozen=True)


class Application(WireModel):
    application_id: str = ""


class User(WireModel):
    user_id: str = ""
    access_token: str | None = None


class Session(WireModel):
    """Conversational session, shared with the caller as an in/out value."""

    is_new: bool = Field(default=False, alias="new")
    session_id: str = ""
    application: Application = Field(default_factory=Application)
    attributes: Attributes | None = None
    user: User = Field(default_factory=User)

    @field_validator("application", "user", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class AudioPlayerState(FrozenWireModel):
    token: str = ""
    offset_in_milliseconds: int = 0
    player_activity: PlayerActivity | None = None


class DisplayState(FrozenWireModel):
    token: str = ""


class DisplayInterface(FrozenWireModel):
    template_version: str = ""
    markup_version: str = ""


class SupportedInterfaces(FrozenWireModel):
    audio_player: dict[str, Any] | None = Field(default=None, alias="AudioPlayer")
    display: DisplayInterface | None = Field(default=None, alias="Display")


class Device(FrozenWireModel):
    device_id: str = ""
    supported_interfaces: SupportedInterfaces = Field(default_factory=SupportedInterfaces)

    @field_validator("supported_interfaces", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class SystemState(FrozenWireModel):
    application: Application = Field(default_factory=Application)
    user: User = Field(default_factory=User)
    device: Device = Field(default_factory=Device)
    api_endpoint: str = ""
    api_access_token: str = ""

    @field_validator("application", "user", "device", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class Context(FrozenWireModel):
    """Device and platform snapshot taken when the request was sent."""

    audio_player: AudioPlayerState = Field(default_factory=AudioPlayerState, alias="AudioPlayer")
    display: DisplayState = Field(default_factory=DisplayState, alias="Display")
    system: SystemState = Field(default_factory=SystemState, alias="System")

    @field_validator("audio_player", "display", "system", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class ResolutionStatus(FrozenWireModel):
    code: str = ""


class ResolutionValue(FrozenWireModel):
    name: str = ""
    id: str = ""


class ResolutionPerAuthority(FrozenWireModel):
    """Candidate values for one slot from a single resolution authority.

    Each entry in ``values`` maps a key (``"value"`` on the wire) to one
    matched entity; synonyms usually produce more than one entry.
    """

    authority: str = ""
    status: ResolutionStatus = Field(default_factory=ResolutionStatus)
    values: list[dict[str, ResolutionValue]] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: Any) -> Any:
        return _null_as_empty(value, {})

    @field_validator("values", mode="before")
    @classmethod
    def _null_values(cls, value: Any) -> Any:
        return _null_as_empty(value, [])


class Resolutions(FrozenWireModel):
    resolutions_per_authority: list[ResolutionPerAuthority] = Field(default_factory=list)

    @field_validator("resolutions_per_authority", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, [])


class IntentSlot(FrozenWireModel):
    name: str = ""
    confirmation_status: ConfirmationStatus | None = None
    value: str = ""
    resolutions: Resolutions | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, "")


class Intent(FrozenWireModel):
    name: str = ""
    confirmation_status: ConfirmationStatus | None = None
    slots: dict[str, IntentSlot] = Field(default_factory=dict)

    @field_validator("slots", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class Request(FrozenWireModel):
    """The event itself: launch, intent or session end."""

    locale: str | None = None
    timestamp: str = ""
    type: str = ""
    request_id: str = ""
    dialog_state: str | None = None
    intent: Intent | None = None
    name: str = ""
    reason: str | None = None


class RequestEnvelope(WireModel):
    """Top-level inbound message."""

    version: str = ""
    session: Session | None = None
    request: Request | None = None
    context: Context = Field(default_factory=Context)

    @field_validator("context", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return _null_as_empty(value, {})

    def get_session_id(self) -> str:
        return self._require_session().session_id

    def get_user_id(self) -> str:
        return self._require_session().user.user_id

    def get_request_type(self) -> str:
        return self._require_request().type

    def get_intent_name(self) -> str:
        """Return the intent name, or the request type for non-intent requests."""

        request = self._require_request()
        if request.type != RequestType.INTENT.value:
            return request.type
        if request.intent is None:
            return ""
        return request.intent.name

    def get_slot(self, slot_name: str) -> IntentSlot:
        intent = self._require_request().intent
        if intent is None or slot_name not in intent.slots:
            raise SlotNotFoundError(slot_name)
        return intent.slots[slot_name]

    def get_slot_value(self, slot_name: str) -> str:
        """Return the raw value of one slot.

        Raises:
            SlotNotFoundError: if the intent has no slot with that name.
        """

        return self.get_slot(slot_name).value

    def all_slots(self) -> dict[str, IntentSlot]:
        intent = self._require_request().intent
        if intent is None:
            return {}
        return dict(intent.slots)

    def get_locale(self) -> str:
        return self._require_request().locale or ""

    def _require_session(self) -> Session:
        if self.session is None:
            raise RequestEnvelopeNilError("session")
        return self.session

    def _require_request(self) -> Request:
        if self.request is None:
            raise RequestEnvelopeNilError("request")
        return self.request


def parse_envelope(payload: str | bytes | Mapping[str, Any]) -> RequestEnvelope:
    """Build a ``RequestEnvelope`` from raw JSON text or an already-decoded mapping."""

    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return RequestEnvelope.model_validate_json(payload)
        return RequestEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise MalformedEnvelopeError(f"invalid request envelope: {exc.error_count()} validation error(s)") from exc
