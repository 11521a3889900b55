"""LLM Adapter"""
from __future__ import annotations

import time
from typing import Any

from adapters.llm.base import LanguageModelAdapter, LLMError
from observability.logger import log_event


class ChatCompletionLLMAdapter(LanguageModelAdapter):
    """
    Non-streaming chat-completion adapter.

    Design notes:
    - Works against any OpenAI-compatible endpoint; the default deployment
      is a local Ollama server exposing /v1.
    - Adapter is responsible ONLY for:
        - Talking to the LLM provider
        - Extracting the reply text
    - Adapter does NOT:
        - Retry
        - Substitute fallback text (the orchestrator apologises)
    """

    def __init__(
        self,
        *,
        client: Any,
        model: str,
        session_id: str,
    ) -> None:
        """
        Args:
            client:
                Vendor client (openai.AsyncOpenAI or compatible).
            model:
                Model identifier string.
            session_id:
                Session identifier for logging/correlation.
        """
        self._client = client
        self._model = model
        self._session_id = session_id

    async def complete(self, messages: list[dict[str, str]]) -> str:
        log_event({
            "ts_ms": self._now_ms(),
            "event_type": "llm_call_started",
            "session_id": self._session_id,
            "model": self._model,
            "messages": len(messages),
        })

        response = await self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            stream=False,
        )
        reply = self._extract_content(response)
        if not reply.strip():
            raise LLMError("empty completion")

        log_event({
            "ts_ms": self._now_ms(),
            "event_type": "llm_call_completed",
            "session_id": self._session_id,
            "reply_len": len(reply),
        })
        return reply

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_content(response: Any) -> str:
        """
        Extract reply text from vendor response (OpenAI format).
        """
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError):
            return ""

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
