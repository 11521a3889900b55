"""
Speech-output adapter contract.

This module defines the *interface only*: no retries and no
orchestration decisions.

Key invariants:
- speak() blocks until delivery AND the post-utterance pause complete.
- Exactly one of text / audio_url is provided per call.
- Failures raise; the runtime converts them into SpeechDelivered(ok=False).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SpeechOutputAdapter(ABC):
    """
    Abstract interface for blocking speech delivery.

    Implementations are responsible for:
    - Rendering text through TTS, or playing a pre-recorded clip
    - Waiting out the post-utterance pause (long after the first turn)

    Non-responsibilities:
    - No state machine logic
    - No transcript bookkeeping
    """

    @abstractmethod
    async def speak(
        self,
        *,
        text: str | None = None,
        audio_url: str | None = None,
        first_turn: bool = False,
    ) -> None:
        """
        Deliver one utterance.

        Args:
            text: Text to synthesise.
            audio_url: URL of a .wav clip to play instead of text.
            first_turn: Use the long first-turn pause afterwards.

        Contract:
        - Must not return before delivery and pause have completed.
        - Must NOT retry internally.
        """
        raise NotImplementedError
