"""
Keypress classifier.

Pure function from a single key token to an operator Action.

The partition is a table lookup, so it is total and mutually exclusive:
every token maps to exactly one Action and evaluation order is irrelevant.
"""

from __future__ import annotations

from dataclasses import dataclass

from orchestrator.enums.action import Action
from orchestrator.stimuli import STIMULUS_KEYS, StimulusVariant


@dataclass(frozen=True)
class Classified:
    """Classifier output. `stimulus` is set iff action is INJECT_STIMULUS."""
    action: Action
    stimulus: StimulusVariant | None = None


QUIT_KEY = "0"
DISCUSS_KEY = "l"
LIST_KEY = "m"
YES_KEY = "y"
NO_KEY = "n"

_CONTROL_KEYS: dict[str, Action] = {
    QUIT_KEY: Action.QUIT,
    DISCUSS_KEY: Action.DISCUSS,
    LIST_KEY: Action.LIST_TRANSCRIPT,
    YES_KEY: Action.CONFIRM_YES,
    NO_KEY: Action.CONFIRM_NO,
}

# Control and stimulus keys must never overlap.
assert not set(_CONTROL_KEYS) & set(STIMULUS_KEYS)


def classify_key(token: str) -> Classified:
    """
    Map a key token to its Action.

    Tokens are compared lower-cased; anything outside the table is UNKNOWN.
    """
    key = token.lower()

    action = _CONTROL_KEYS.get(key)
    if action is not None:
        return Classified(action=action)

    variant = STIMULUS_KEYS.get(key)
    if variant is not None:
        return Classified(action=Action.INJECT_STIMULUS, stimulus=variant)

    return Classified(action=Action.UNKNOWN)
