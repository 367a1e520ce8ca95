from __future__ import annotations

import pytest

from askit.constants import (
    AudioPlayerDirectiveType,
    BuiltinIntent,
    CardType,
    ConfirmationStatus,
    Locale,
    PlayerActivity,
    RequestType,
    is_english,
)


@pytest.mark.parametrize("locale", ["en-US", "en-GB", "en-IN", Locale.AUSTRALIAN_ENGLISH, Locale.CANADIAN_ENGLISH])
def test_english_locales(locale) -> None:
    assert is_english(locale)


@pytest.mark.parametrize("locale", ["de-DE", "it-IT", Locale.JAPANESE, "en", "EN-US", ""])
def test_non_english_locales(locale) -> None:
    assert not is_english(locale)


def test_wire_values() -> None:
    assert [item.value for item in RequestType] == ["LaunchRequest", "IntentRequest", "SessionEndedRequest"]
    assert all(item.value.startswith("AMAZON.") for item in BuiltinIntent)
    assert {item.value for item in ConfirmationStatus} == {"CONFIRMED", "DENIED", "NONE"}
    assert CardType.ASK_FOR_PERMISSIONS_CONSENT.value == "AskForPermissionsConsent"
    assert PlayerActivity("BUFFER_UNDERRUN") is PlayerActivity.BUFFER_UNDERRUN
    assert AudioPlayerDirectiveType.PLAY.value == "AudioPlayer.Play"
    assert sorted(item.value for item in Locale) == [
        "de-DE",
        "en-AU",
        "en-CA",
        "en-GB",
        "en-IN",
        "en-US",
        "it-IT",
        "ja-JP",
    ]
