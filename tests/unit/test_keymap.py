# pylint: disable=missing-module-docstring,missing-function-docstring
import string

import pytest

from orchestrator.enums.action import Action
from orchestrator.keymap import classify_key
from orchestrator.stimuli import (
    STIMULUS_KEYS,
    StimulusFamily,
    StimulusMode,
    StimulusVariant,
    Subject,
    stimulus_payload,
)


@pytest.mark.parametrize(
    "token, action",
    [
        ("0", Action.QUIT),
        ("l", Action.DISCUSS),
        ("L", Action.DISCUSS),
        ("m", Action.LIST_TRANSCRIPT),
        ("y", Action.CONFIRM_YES),
        ("N", Action.CONFIRM_NO),
        ("x", Action.UNKNOWN),
        ("5", Action.UNKNOWN),
        (" ", Action.UNKNOWN),
        ("\n", Action.UNKNOWN),
    ],
)
def test_control_keys(token: str, action: Action) -> None:
    assert classify_key(token).action is action


def test_classifier_is_total_over_printable_characters():
    for token in string.printable:
        classified = classify_key(token)

        assert isinstance(classified.action, Action)
        assert (classified.stimulus is not None) == (
            classified.action is Action.INJECT_STIMULUS
        )


def test_stimulus_table_has_twelve_distinct_variants():
    assert sorted(STIMULUS_KEYS) == sorted("1234qwerasdf")
    assert len(set(STIMULUS_KEYS.values())) == 12


@pytest.mark.parametrize(
    "token, family, subject",
    [
        ("1", StimulusFamily.QUESTIONING, Subject.DOCTOR),
        ("4", StimulusFamily.QUESTIONING, Subject.PILOT),
        ("q", StimulusFamily.PAUSED, Subject.DOCTOR),
        ("E", StimulusFamily.PAUSED, Subject.CHILD),
        ("s", StimulusFamily.MOCKING, Subject.PREGNANT),
        ("f", StimulusFamily.MOCKING, Subject.PILOT),
    ],
)
def test_stimulus_keys(token: str, family: StimulusFamily, subject: Subject) -> None:
    classified = classify_key(token)

    assert classified.action is Action.INJECT_STIMULUS
    assert classified.stimulus == StimulusVariant(family=family, subject=subject)


def test_text_payload_uses_phrase_for_both_speech_and_history():
    variant = StimulusVariant(family=StimulusFamily.MOCKING, subject=Subject.CHILD)

    payload = stimulus_payload(variant, mode=StimulusMode.TEXT, audio_base_url="unused")

    assert payload.text == payload.annotation == "Hahaha, the child?"
    assert payload.audio_url is None


def test_audio_payload_points_at_clip_and_annotates_marker():
    variant = StimulusVariant(family=StimulusFamily.PAUSED, subject=Subject.PILOT)

    payload = stimulus_payload(
        variant,
        mode=StimulusMode.AUDIO,
        audio_base_url="http://localhost:8000/",
    )

    assert payload.audio_url == "http://localhost:8000/pause_pilot.wav"
    assert payload.annotation == "[stimulus: paused-pilot]"
    assert payload.text is None
