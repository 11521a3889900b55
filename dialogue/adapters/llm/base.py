"""
Language-model adapter contract.

Purpose:
- Define the interface for one-shot chat completions over the full history.
- Keep retries, timing and orchestration semantics OUT of the adapter.

Rules:
- This file contains NO logic.
- No retries.
- No knowledge of speech output, keys, or the state machine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class LLMError(RuntimeError):
    """The model endpoint answered without a usable reply."""


class LanguageModelAdapter(ABC):
    """
    Abstract base class for chat-completion adapters.

    The adapter is a *dumb pipe*: messages -> vendor -> reply text.

    Orchestrator responsibilities (NOT here):
    - When to call
    - What to do on failure (apologise, never retry)
    - Context construction
    """

    @abstractmethod
    async def complete(self, messages: list[dict[str, str]]) -> str:
        """
        Return the assistant reply for the given history.

        Contract:
        - messages is the full ordered history, system turn first.
        - Must raise on transport errors or an empty reply.
        - Must NOT retry internally.
        """
        raise NotImplementedError
