"""
Speech-input adapter contract.

This module defines the *interface only*: no buffering, sanitising,
retries or orchestration decisions live here.

Key invariants:
- listen() is single-shot: one recognised utterance per call.
- The raw recogniser text is returned unmodified (no-match markers included);
  sanitising is the speech buffer's job.
- Failures raise; the runtime converts them into InputFailed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SpeechInputAdapter(ABC):
    """Abstract interface for single-shot speech recognition."""

    @abstractmethod
    async def listen(self) -> str:
        """
        Listen for one utterance and return its text.

        Contract:
        - Must NOT retry internally.
        - Must tolerate being abandoned mid-call (a lost race); the result
          is then simply dropped by the caller.
        """
        raise NotImplementedError
