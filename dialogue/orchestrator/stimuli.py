"""
Stimulus table.

Static mapping from each of the twelve stimulus variants (three families
crossed with the four dilemma subjects) to a canned payload and the
transcript annotation recorded for it.

Rules:
- Pure data + lookup. No IO.
- Delivering a stimulus never consults the language model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StimulusFamily(str, Enum):
    QUESTIONING = "questioning"
    PAUSED = "paused"
    MOCKING = "mocking"


class Subject(str, Enum):
    DOCTOR = "doctor"
    PREGNANT = "pregnant"
    CHILD = "child"
    PILOT = "pilot"


class StimulusMode(str, Enum):
    """
    TEXT:
        Speak the canned phrase through TTS; annotate with the phrase.

    AUDIO:
        Play a pre-recorded clip; annotate with a bracketed marker.
    """

    TEXT = "text"
    AUDIO = "audio"


@dataclass(frozen=True)
class StimulusVariant:
    family: StimulusFamily
    subject: Subject

    @property
    def name(self) -> str:
        return f"{self.family.value}-{self.subject.value}"


@dataclass(frozen=True)
class StimulusPayload:
    """
    What to deliver and what to record.

    Exactly one of text / audio_url is set.
    """
    variant: StimulusVariant
    annotation: str
    text: str | None = None
    audio_url: str | None = None


# =============================================================================
# Table
# =============================================================================

_SUBJECT_LABELS: dict[Subject, str] = {
    Subject.DOCTOR: "Doctor",
    Subject.PREGNANT: "pregnant lady",
    Subject.CHILD: "child",
    Subject.PILOT: "pilot",
}

_PHRASE_TEMPLATES: dict[StimulusFamily, str] = {
    StimulusFamily.QUESTIONING: "Hmm, the {label}?",
    StimulusFamily.PAUSED: "........ The {label}?",
    StimulusFamily.MOCKING: "Hahaha, the {label}?",
}

_AUDIO_PREFIXES: dict[StimulusFamily, str] = {
    StimulusFamily.QUESTIONING: "hmm",
    StimulusFamily.PAUSED: "pause",
    StimulusFamily.MOCKING: "laugh",
}

# Keyboard rows: 1-4 questioning, q-r paused, a-f mocking.
# Column order within a row is the subject order below.
_SUBJECT_ORDER: tuple[Subject, ...] = (
    Subject.DOCTOR,
    Subject.PREGNANT,
    Subject.CHILD,
    Subject.PILOT,
)

_KEY_ROWS: dict[StimulusFamily, str] = {
    StimulusFamily.QUESTIONING: "1234",
    StimulusFamily.PAUSED: "qwer",
    StimulusFamily.MOCKING: "asdf",
}

STIMULUS_KEYS: dict[str, StimulusVariant] = {
    key: StimulusVariant(family=family, subject=subject)
    for family, row in _KEY_ROWS.items()
    for key, subject in zip(row, _SUBJECT_ORDER)
}


# =============================================================================
# Lookup
# =============================================================================

def stimulus_phrase(variant: StimulusVariant) -> str:
    label = _SUBJECT_LABELS[variant.subject]
    return _PHRASE_TEMPLATES[variant.family].format(label=label)


def stimulus_audio_file(variant: StimulusVariant) -> str:
    return f"{_AUDIO_PREFIXES[variant.family]}_{variant.subject.value}.wav"


def stimulus_payload(
    variant: StimulusVariant,
    *,
    mode: StimulusMode,
    audio_base_url: str,
) -> StimulusPayload:
    """Resolve a variant into the payload for the given delivery mode."""
    if mode is StimulusMode.TEXT:
        phrase = stimulus_phrase(variant)
        return StimulusPayload(variant=variant, annotation=phrase, text=phrase)

    return StimulusPayload(
        variant=variant,
        annotation=f"[stimulus: {variant.name}]",
        audio_url=f"{audio_base_url.rstrip('/')}/{stimulus_audio_file(variant)}",
    )
