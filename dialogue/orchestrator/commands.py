"""
Side-effect command definitions for the dialogue orchestrator.

Rules:
- Commands are declarative requests for side effects.
- Commands are emitted by the reducer and executed by the runtime.
- No behavior, no async, no I/O, no clocks.
- Reducer logic remains pure and deterministic.
Invariant:
    - All concrete Command subclasses MUST be frozen dataclasses.
    - Commands are immutable value objects emitted by the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from context.conversation import History

# =============================================================================
# Command Type Enumeration
# =============================================================================

class CommandType(str, Enum):
    """
    Canonical command types emitted by the reducer.

    These are stable discriminants used for logging and runtime dispatch.
    """

    # Front-end
    CONFIGURE_FRONT_END = "CONFIGURE_FRONT_END"
    SPEAK = "SPEAK"

    # Input
    START_RACE = "START_RACE"
    AWAIT_CONFIRM_KEY = "AWAIT_CONFIRM_KEY"

    # LLM
    START_LLM = "START_LLM"

    # Operator console
    PRINT_TRANSCRIPT = "PRINT_TRANSCRIPT"
    SHOW_NOTICE = "SHOW_NOTICE"

    # Session / lifecycle
    END_SESSION = "END_SESSION"

    # Observability
    LOG_EVENT = "LOG_EVENT"


# =============================================================================
# Base Command
# =============================================================================

class Command:
    """
    Base command type.

    command_type is an explicit discriminant and must never be inferred
    from Python type identity.
    """

    command_type: CommandType


# =============================================================================
# Front-end Commands
# =============================================================================

@dataclass(frozen=True)
class ConfigureFrontEnd(Command):
    """
    Set the robot voice, then attend the nearest user.

    The runtime answers with exactly one FrontEndConfigured event.
    """
    voice: str
    command_type: CommandType = CommandType.CONFIGURE_FRONT_END


@dataclass(frozen=True)
class Speak(Command):
    """
    Deliver text or a pre-recorded clip through the speech-output actor.

    Exactly one of text / audio_url is set. The runtime answers with exactly
    one SpeechDelivered event once delivery and the post-utterance pause
    have completed.
    """
    text: str | None = None
    audio_url: str | None = None
    first_turn: bool = False
    command_type: CommandType = CommandType.SPEAK


# =============================================================================
# Input Commands
# =============================================================================

@dataclass(frozen=True)
class StartRace(Command):
    """
    Race speech recognition against the key source.

    The runtime answers with exactly one UtteranceHeard, KeyPressed or
    InputFailed event carrying the same race_id.
    """
    race_id: int
    command_type: CommandType = CommandType.START_RACE


@dataclass(frozen=True)
class AwaitConfirmKey(Command):
    """Await a single key for the end-of-session prompt (no speech race)."""
    race_id: int
    prompt: str
    command_type: CommandType = CommandType.AWAIT_CONFIRM_KEY


# =============================================================================
# LLM Commands
# =============================================================================

@dataclass(frozen=True)
class StartLLM(Command):
    """
    Request one chat completion over the full history.

    messages must be immutable; reducer owns serialization.
    The runtime answers with exactly one LLMReplied or LLMFailed event.
    """
    messages: tuple[dict[str, str], ...]
    command_type: CommandType = CommandType.START_LLM


# =============================================================================
# Operator Console Commands
# =============================================================================

@dataclass(frozen=True)
class PrintTranscript(Command):
    """Write a snapshot of the conversation log to the operator console."""
    history: History
    command_type: CommandType = CommandType.PRINT_TRANSCRIPT


@dataclass(frozen=True)
class ShowNotice(Command):
    """Write a one-line notice to the operator console."""
    text: str
    command_type: CommandType = CommandType.SHOW_NOTICE


# =============================================================================
# Session / Lifecycle Commands
# =============================================================================

@dataclass(frozen=True)
class EndSession(Command):
    """The session reached its terminal state."""
    reason: str | None = None
    command_type: CommandType = CommandType.END_SESSION


# =============================================================================
# Observability Commands
# =============================================================================

@dataclass(frozen=True)
class LogEvent(Command):
    """Request to emit a structured observability event."""
    event: dict[str, Any]
    command_type: CommandType = CommandType.LOG_EVENT
