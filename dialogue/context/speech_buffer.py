"""
Speech buffer.

Accumulates recognised utterances between commit points so that a
participant who is interrupted (or pauses mid-thought) still produces one
user turn per decisive keypress.

All functions are pure: they take the current fragments/history and return
new tuples. The reducer is the only caller.
"""

from __future__ import annotations

from constants import FRAGMENT_SEPARATOR, NO_MATCH_MARKER, NO_MATCH_PLACEHOLDER
from context.conversation import History, append_turn

Fragments = tuple[str, ...]


def sanitize_utterance(utterance: str) -> str:
    """Replace a no-match recognition result with the placeholder."""
    if NO_MATCH_MARKER in utterance.lower():
        return NO_MATCH_PLACEHOLDER
    return utterance


def append_fragment(fragments: Fragments, utterance: str) -> Fragments:
    return fragments + (sanitize_utterance(utterance),)


def flush(history: History, fragments: Fragments) -> tuple[History, Fragments]:
    """
    Commit all buffered fragments as one user turn.

    Returns (history, fragments) unchanged when the buffer is empty,
    otherwise (history + joined user turn, ()).
    """
    if not fragments:
        return history, fragments
    combined = FRAGMENT_SEPARATOR.join(fragments)
    return append_turn(history, "user", combined), ()
