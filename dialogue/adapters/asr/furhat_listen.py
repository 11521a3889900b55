"""
Furhat speech-input adapter: the robot's own recogniser.
"""

from __future__ import annotations

from adapters.asr.base import SpeechInputAdapter
from adapters.furhat.client import FurhatClient


class FurhatSpeechInput(SpeechInputAdapter):
    """Single-shot listen through the Furhat Remote API."""

    def __init__(self, client: FurhatClient) -> None:
        self._client = client

    async def listen(self) -> str:
        return await self._client.listen()
