"""
Runtime execution context.

Provides Runtime with access to the external actors it needs for command
execution and side effects.

This module contains:
- Narrow Protocols (capabilities, not implementations)
- Zero orchestration logic
- Zero state mutation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------
# Actor Protocols
# ---------------------------------------------------------------------

@runtime_checkable
class VoiceConfigProtocol(Protocol):
    async def set_voice(self, name: str) -> None: ...


@runtime_checkable
class AttentionProtocol(Protocol):
    async def attend_nearest_user(self) -> None: ...


@runtime_checkable
class SpeechOutputProtocol(Protocol):
    """
    Blocking speech delivery.

    speak() returns only after delivery AND the post-utterance pause
    (long when first_turn, short otherwise) have completed.
    """

    async def speak(
        self,
        *,
        text: str | None = None,
        audio_url: str | None = None,
        first_turn: bool = False,
    ) -> None: ...


@runtime_checkable
class SpeechInputProtocol(Protocol):
    async def listen(self) -> str:
        """Single-shot: one utterance per call."""


@runtime_checkable
class KeySourceProtocol(Protocol):
    async def await_key(self) -> str:
        """Single-shot: one key token per call."""


@runtime_checkable
class LanguageModelProtocol(Protocol):
    async def complete(self, messages: list[dict[str, str]]) -> str: ...


# ---------------------------------------------------------------------
# Runtime Execution Context
# ---------------------------------------------------------------------

@dataclass
class RuntimeExecutionContext:
    """
    Imperative execution context for Runtime.

    Runtime is allowed to:
    - Call actors
    - Read session metadata

    Runtime is NOT allowed to:
    - Perform orchestration decisions
    """

    session_id: str

    voice: VoiceConfigProtocol
    attention: AttentionProtocol
    speech_out: SpeechOutputProtocol
    speech_in: SpeechInputProtocol
    keys: KeySourceProtocol
    llm: LanguageModelProtocol

    cancel_race_loser: bool = False
