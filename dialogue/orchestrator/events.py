"""
Event definitions for the dialogue reducer.

Rules:
- Events describe facts that have occurred.
- Events carry data only (no behavior).
- All reducer decisions are based on these events.
- No clocks, no timers, no async, no side effects.

Input events carry the race_id of the race that produced them so the
reducer can drop stale completions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Event Type Enumeration
# =============================================================================

class EventType(str, Enum):
    """
    Canonical event types understood by the reducer.

    Every (state, event_type) pair must be explicitly handled
    or explicitly ignored by the reducer.
    """

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    SESSION_STARTED = "SESSION_STARTED"
    FRONT_END_CONFIGURED = "FRONT_END_CONFIGURED"

    # ------------------------------------------------------------------
    # Speech output
    # ------------------------------------------------------------------
    SPEECH_DELIVERED = "SPEECH_DELIVERED"

    # ------------------------------------------------------------------
    # Input race
    # ------------------------------------------------------------------
    UTTERANCE_HEARD = "UTTERANCE_HEARD"
    KEY_PRESSED = "KEY_PRESSED"
    INPUT_FAILED = "INPUT_FAILED"

    # ------------------------------------------------------------------
    # LLM
    # ------------------------------------------------------------------
    LLM_REPLIED = "LLM_REPLIED"
    LLM_FAILED = "LLM_FAILED"


# =============================================================================
# Base Events
# =============================================================================

@dataclass(frozen=True)
class Event:
    """
    Base event type.

    All events must specify:
    - event_type: discriminant
    - ts_ms: timestamp provided by the source (or fake in tests)
    """

    event_type: EventType
    ts_ms: int


@dataclass(frozen=True)
class InputEvent(Event):
    """
    Base class for events produced by a listen race.

    The reducer MUST ignore input events whose race_id does not match
    the currently active race.
    """

    race_id: int


# =============================================================================
# Session lifecycle
# =============================================================================

@dataclass(frozen=True)
class SessionStarted(Event):
    """Runtime started the session."""
    session_id: str


@dataclass(frozen=True)
class FrontEndConfigured(Event):
    """
    Voice and attention setup finished.

    Either step may have failed; setup failures never block progress.
    """
    voice_ok: bool
    attend_ok: bool
    reason: str | None = None


# =============================================================================
# Speech output
# =============================================================================

@dataclass(frozen=True)
class SpeechDelivered(Event):
    """
    A Speak command finished, including its post-utterance pause.

    ok=False means delivery failed; turn-taking proceeds regardless.
    """
    ok: bool = True
    reason: str | None = None


# =============================================================================
# Input race
# =============================================================================

@dataclass(frozen=True)
class UtteranceHeard(InputEvent):
    """The recogniser won the race with a raw utterance."""
    text: str


@dataclass(frozen=True)
class KeyPressed(InputEvent):
    """The key source won the race (or answered a confirmation prompt)."""
    key: str


@dataclass(frozen=True)
class InputFailed(InputEvent):
    """The winning producer of a race failed."""
    reason: str


# =============================================================================
# LLM
# =============================================================================

@dataclass(frozen=True)
class LLMReplied(Event):
    """The language model returned a reply."""
    text: str


@dataclass(frozen=True)
class LLMFailed(Event):
    """The language model call failed."""
    reason: str
