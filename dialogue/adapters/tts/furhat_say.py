"""
Furhat speech-output adapter.

Speaks text (robot TTS) or plays a pre-recorded clip with lipsync, then
waits out the post-utterance pause that gives the participant a turn.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from adapters.furhat.client import FurhatClient
from adapters.tts.base import SpeechOutputAdapter
from constants import FIRST_TURN_PAUSE_MS, TURN_PAUSE_MS


class FurhatSpeechOutput(SpeechOutputAdapter):
    """
    Blocking speech delivery through the robot.

    Pauses:
    - first_turn_pause_ms after the introduction (it is long, and the
      participant needs time to take it in)
    - turn_pause_ms after every other utterance
    """

    def __init__(
        self,
        client: FurhatClient,
        *,
        first_turn_pause_ms: int = FIRST_TURN_PAUSE_MS,
        turn_pause_ms: int = TURN_PAUSE_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._first_turn_pause_ms = first_turn_pause_ms
        self._turn_pause_ms = turn_pause_ms
        self._sleep = sleep

    async def speak(
        self,
        *,
        text: str | None = None,
        audio_url: str | None = None,
        first_turn: bool = False,
    ) -> None:
        if (text is None) == (audio_url is None):
            raise ValueError("exactly one of text / audio_url must be given")

        if audio_url is not None:
            await self._client.say_url(audio_url, lipsync=True)
        else:
            assert text is not None
            await self._client.say_text(text)

        pause_ms = self._first_turn_pause_ms if first_turn else self._turn_pause_ms
        await self._sleep(pause_ms / 1000.0)
