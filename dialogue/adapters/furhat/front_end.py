"""
Furhat front-end setup adapter.

Implements the voice-configuration and attention capabilities the
orchestrator uses once, at session start.
"""

from __future__ import annotations

from adapters.furhat.client import FurhatClient
from constants import ATTEND_TARGET


class FurhatFrontEnd:
    """VoiceConfig + Attention actor backed by the Furhat Remote API."""

    def __init__(self, client: FurhatClient) -> None:
        self._client = client

    async def set_voice(self, name: str) -> None:
        await self._client.set_voice(name)

    async def attend_nearest_user(self) -> None:
        await self._client.attend(ATTEND_TARGET)
