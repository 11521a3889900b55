"""
Operator action enumeration.

Rules:
- Closed set: every key token classifies to exactly one Action.
- The mapping from key to Action lives in orchestrator/keymap.py.
"""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """
    What a decisive keypress asks the session to do.

    INJECT_STIMULUS is parameterised by a StimulusVariant, carried
    alongside the Action by the classifier.
    """

    QUIT = "QUIT"
    DISCUSS = "DISCUSS"
    LIST_TRANSCRIPT = "LIST_TRANSCRIPT"
    INJECT_STIMULUS = "INJECT_STIMULUS"
    CONFIRM_YES = "CONFIRM_YES"
    CONFIRM_NO = "CONFIRM_NO"
    UNKNOWN = "UNKNOWN"
