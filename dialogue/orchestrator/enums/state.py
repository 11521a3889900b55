"""
Authoritative session state enumeration.

Rules:
- This enum defines ONLY the control-plane states.
- No behavior, no helper methods, no side effects.
- Transitions are defined exclusively in the reducer.
"""

from __future__ import annotations

from enum import Enum


class State(str, Enum):
    """
    Control states of a single dialogue session.

    Commit and Dispatch happen inside the LISTEN_RACE -> keypress transition,
    so they have no resting state of their own. Transcript printing never rests either:
    it is a command emitted on the way back to LISTEN_RACE or TERMINAL.
    """

    INIT = "INIT"
    SPEAK_INTRO = "SPEAK_INTRO"
    LISTEN_RACE = "LISTEN_RACE"
    STIMULATE = "STIMULATE"
    RESPOND = "RESPOND"
    SPEAK_RESPONSE = "SPEAK_RESPONSE"
    FAREWELL = "FAREWELL"
    CONFIRM_DUMP = "CONFIRM_DUMP"
    TERMINAL = "TERMINAL"
