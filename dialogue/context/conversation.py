"""
Conversation log.

Responsibilities:
- Define the Turn value type
- Build the seeded history (system policy + assistant introduction)
- Append turns, returning a new immutable history
- Render the history for the operator transcript

Non-responsibilities:
- No reducer logic
- No LLM formatting (see context/serialization.py)
- No orchestration decisions

Invariants:
- History is append-only; turns are never edited or removed
- The first turn is always the single system turn
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from constants import TRANSCRIPT_FOOTER, TRANSCRIPT_HEADER


Role = Literal["system", "assistant", "user"]

History = tuple["Turn", ...]


@dataclass(frozen=True)
class Turn:
    """Single conversation turn."""
    role: Role
    content: str


def seed_history(system_prompt: str, intro_text: str) -> History:
    """Return the initial history: [system, assistant-intro]."""
    return (
        Turn(role="system", content=system_prompt),
        Turn(role="assistant", content=intro_text),
    )


def append_turn(history: History, role: Role, content: str) -> History:
    """Return a new history with one turn appended."""
    if role == "system":
        raise ValueError("the system turn is only inserted at session start")
    return history + (Turn(role=role, content=content),)


def last_turn(history: History) -> Turn:
    return history[-1]


def format_transcript(history: History) -> list[str]:
    """
    Render history for the operator console.

    Output format:
        === MESSAGE HISTORY ===
        1. [system]: ...
        2. [assistant]: ...
        ======================
    """
    lines = ["", TRANSCRIPT_HEADER]
    lines.extend(
        f"{i}. [{turn.role}]: {turn.content}"
        for i, turn in enumerate(history, start=1)
    )
    lines.append(TRANSCRIPT_FOOTER)
    return lines
