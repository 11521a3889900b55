"""
Furhat Remote API client.

Thin async wrapper over the robot's HTTP API (https://docs.furhat.io/remote-api/).

Rules:
- One method per endpoint; no retries, no timeouts, no orchestration.
- Non-2xx responses raise httpx.HTTPStatusError.
- Malformed listen payloads raise FurhatError.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from constants import ATTEND_TARGET
from observability.logger import log_event


class FurhatError(RuntimeError):
    """The robot answered, but not with something we can use."""


class FurhatClient:
    """
    Async client for a single Furhat robot.

    Design notes:
    - No request timeout: the robot blocks on say/listen for as long as the
      utterance lasts, and an unanswered call stalls the session by design.
    - The caller owns the client lifetime (aclose()).
    """

    def __init__(
        self,
        *,
        host: str,
        session_id: str,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            host:
                "ip:port" of the robot's Remote API.
            session_id:
                Session identifier for logging/correlation.
            http:
                Optional preconfigured client (tests pass a MockTransport).
        """
        self._session_id = session_id
        self._http = http or httpx.AsyncClient(
            base_url=f"http://{host}",
            headers={"accept": "application/json"},
            timeout=None,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def set_voice(self, name: str) -> None:
        await self._post("/furhat/voice", {"name": name})

    async def attend(self, user: str = ATTEND_TARGET) -> None:
        await self._post("/furhat/attend", {"user": user})

    async def say_text(self, text: str) -> None:
        """Speak text; returns when the robot has finished speaking."""
        await self._post("/furhat/say", {"text": text, "blocking": "true"})

    async def say_url(self, url: str, *, lipsync: bool = True) -> None:
        """Play a .wav the robot fetches from url; returns when playback ends."""
        await self._post(
            "/furhat/say",
            {
                "url": url,
                "blocking": "true",
                "lipsync": "true" if lipsync else "false",
            },
        )

    async def listen(self) -> str:
        """Run the robot's own recogniser once and return the utterance."""
        response = await self._http.get("/furhat/listen")
        response.raise_for_status()

        try:
            payload = response.json()
            message = payload["message"]
        except (ValueError, KeyError, TypeError) as exc:
            raise FurhatError(f"malformed listen response: {response.text!r}") from exc

        if not isinstance(message, str):
            raise FurhatError(f"listen message is not text: {message!r}")

        log_event({
            "ts_ms": self._now_ms(),
            "event_type": "furhat_listen_result",
            "session_id": self._session_id,
            "message": message,
        })
        return message

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _post(self, path: str, params: dict[str, Any]) -> None:
        response = await self._http.post(path, params=params, content=b"")
        response.raise_for_status()

        log_event({
            "ts_ms": self._now_ms(),
            "event_type": "furhat_call_executed",
            "session_id": self._session_id,
            "path": path,
            "status": response.status_code,
        })

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
