"""
Authoritative session state container.

Rules:
- This dataclass is a pure data model.
- It contains ALL state the reducer may ever need.
- No behavior, no helpers, no derived logic.
- Only the reducer produces new instances (via dataclasses.replace).
"""
from __future__ import annotations

from dataclasses import dataclass, field

from constants import DEFAULT_VOICE
from context.conversation import History
from context.speech_buffer import Fragments
from orchestrator.enums.state import State
from orchestrator.stimuli import StimulusMode, StimulusPayload


# =============================================================================
# Session options
# =============================================================================

@dataclass(frozen=True)
class SessionOptions:
    """
    Switches that distinguish the experiment variants.

    One machine, parameterised; speech pauses are configured on the
    speech-output actor instead.
    """
    enable_list_command: bool = True
    enable_confirm_dump: bool = True
    stimulus_mode: StimulusMode = StimulusMode.AUDIO
    audio_base_url: str = "http://localhost:8000"
    voice: str = DEFAULT_VOICE


# =============================================================================
# Session State
# =============================================================================

@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of all orchestrator-owned state."""

    # Conversation log; first element is always the system turn.
    history: History

    options: SessionOptions = field(default_factory=SessionOptions)

    # ------------------------------------------------------------------
    # Control state
    # ------------------------------------------------------------------
    state: State = State.INIT

    # True until the very first spoken output completes.
    is_first_turn: bool = True

    # ------------------------------------------------------------------
    # Input race
    # ------------------------------------------------------------------

    # Monotonic; bumped on every StartRace / AwaitConfirmKey.
    # 0 means "no race has been started yet".
    active_race_id: int = 0

    # Most recent decisive key; cleared whenever a fresh race begins.
    last_input_key: str | None = None

    # Utterances buffered since the last commit point.
    speech_fragments: Fragments = ()

    # ------------------------------------------------------------------
    # Stimulus delivery
    # ------------------------------------------------------------------

    # Set on entry to STIMULATE, cleared when delivery settles.
    pending_stimulus: StimulusPayload | None = None

    # ------------------------------------------------------------------
    # Error bookkeeping
    # ------------------------------------------------------------------
    last_error: str | None = None
