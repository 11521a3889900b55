"""
Runtime execution shell for a single dialogue session.

Responsibilities:
- Own the authoritative session state
- Call the pure reducer
- Execute commands with side effects (robot, recogniser, keys, LLM, console)
- Convert command outcomes (success or failure) into events

Non-responsibilities:
- Orchestration decisions (reducer only)
- Transport details of the external actors (adapters only)
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from context.conversation import format_transcript
from observability import console
from observability.logger import log_event
from observability.metrics import timed
from orchestrator.commands import (
    AwaitConfirmKey,
    Command,
    ConfigureFrontEnd,
    EndSession,
    LogEvent,
    PrintTranscript,
    ShowNotice,
    Speak,
    StartLLM,
    StartRace,
)
from orchestrator.enums.source import InputSource
from orchestrator.enums.state import State
from orchestrator.events import (
    Event,
    EventType,
    FrontEndConfigured,
    InputFailed,
    KeyPressed,
    LLMFailed,
    LLMReplied,
    SessionStarted,
    SpeechDelivered,
    UtteranceHeard,
)
from orchestrator.race import race_inputs
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import SessionState

if TYPE_CHECKING:
    from orchestrator.runtime_context import RuntimeExecutionContext


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _reason(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class Runtime:
    """
    Runtime execution boundary for a single dialogue session.

    Architectural role:
    Runtime is the bridge between the pure orchestration layer
    (reducer + immutable state) and the imperative world
    (robot, recogniser, keyboard, LLM, console, time).

    Guarantees:
    - Reducer is always called exactly once per incoming event
    - State transitions are serialized and deterministic
    - All side effects occur *after* state has been updated
    - Every actor failure becomes an event; none escapes the loop
    - Runtime never performs orchestration logic itself
    """

    def __init__(
        self,
        *,
        initial_state: SessionState,
        context: RuntimeExecutionContext,
    ) -> None:
        self._state = initial_state
        self._ctx = context
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    @property
    def state(self) -> SessionState:
        """
        Return the current immutable session state.

        State is only replaced internally by Runtime via the reducer;
        consumers must treat it as read-only.
        """
        return self._state

    async def run(self) -> SessionState:
        """
        Drive the session from INIT to TERMINAL.

        Returns the final state.
        """
        self._emit(
            SessionStarted(
                event_type=EventType.SESSION_STARTED,
                ts_ms=_now_ms(),
                session_id=self._ctx.session_id,
            )
        )

        while self._state.state is not State.TERMINAL:
            event = await self._queue.get()
            await self.handle_event(event)

        return self._state

    async def handle_event(self, event: Event) -> None:
        """
        Process a single event through the orchestration pipeline.

        1. Pass the current state and event to the pure reducer
        2. Swap in the new session state
        3. Execute all emitted commands sequentially

        Follow-up events produced by command execution are queued, not
        handled re-entrantly.
        """
        new_state, commands = reduce(self._state, event)
        self._state = new_state

        for cmd in commands:
            await self._execute_command(cmd)

    def _emit(self, event: Event) -> None:
        self._queue.put_nowait(event)

    # ------------------------------------------------------------------
    # Command execution (side effects)
    # ------------------------------------------------------------------

    async def _execute_command(self, cmd: Command) -> None:
        """Execute a single command with side effects."""

        if isinstance(cmd, LogEvent):
            log_event({
                **cmd.event,
                "session_id": self._ctx.session_id,
            })

        elif isinstance(cmd, ConfigureFrontEnd):
            await self._configure_front_end(cmd)

        elif isinstance(cmd, Speak):
            await self._speak(cmd)

        elif isinstance(cmd, StartRace):
            await self._run_race(cmd)

        elif isinstance(cmd, AwaitConfirmKey):
            await self._await_confirm_key(cmd)

        elif isinstance(cmd, StartLLM):
            await self._complete(cmd)

        elif isinstance(cmd, PrintTranscript):
            for line in format_transcript(cmd.history):
                console.say(line)

        elif isinstance(cmd, ShowNotice):
            console.say(cmd.text)

        elif isinstance(cmd, EndSession):
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "session_ended",
                "session_id": self._ctx.session_id,
                "reason": cmd.reason,
                "history_len": len(self._state.history),
            })

        else:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "COMMAND_NOT_IMPLEMENTED",
                "session_id": self._ctx.session_id,
                "command_type": type(cmd).__name__,
            })

    async def _configure_front_end(self, cmd: ConfigureFrontEnd) -> None:
        reasons: list[str] = []

        voice_ok = True
        try:
            await self._ctx.voice.set_voice(cmd.voice)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            voice_ok = False
            reasons.append(f"voice: {_reason(exc)}")

        attend_ok = True
        try:
            await self._ctx.attention.attend_nearest_user()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            attend_ok = False
            reasons.append(f"attend: {_reason(exc)}")

        self._emit(
            FrontEndConfigured(
                event_type=EventType.FRONT_END_CONFIGURED,
                ts_ms=_now_ms(),
                voice_ok=voice_ok,
                attend_ok=attend_ok,
                reason="; ".join(reasons) or None,
            )
        )

    async def _speak(self, cmd: Speak) -> None:
        try:
            with timed(
                "speech_delivery",
                session_id=self._ctx.session_id,
                state=self._state.state.value,
                details={"audio": cmd.audio_url is not None, "first_turn": cmd.first_turn},
            ):
                await self._ctx.speech_out.speak(
                    text=cmd.text,
                    audio_url=cmd.audio_url,
                    first_turn=cmd.first_turn,
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._emit(
                SpeechDelivered(
                    event_type=EventType.SPEECH_DELIVERED,
                    ts_ms=_now_ms(),
                    ok=False,
                    reason=_reason(exc),
                )
            )
            return

        self._emit(
            SpeechDelivered(event_type=EventType.SPEECH_DELIVERED, ts_ms=_now_ms())
        )

    async def _run_race(self, cmd: StartRace) -> None:
        try:
            result = await race_inputs(
                race_id=cmd.race_id,
                listen=self._ctx.speech_in.listen,
                await_key=self._ctx.keys.await_key,
                cancel_loser=self._ctx.cancel_race_loser,
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._emit(
                InputFailed(
                    event_type=EventType.INPUT_FAILED,
                    ts_ms=_now_ms(),
                    race_id=cmd.race_id,
                    reason=_reason(exc),
                )
            )
            return

        if result.source is InputSource.SPEECH:
            self._emit(
                UtteranceHeard(
                    event_type=EventType.UTTERANCE_HEARD,
                    ts_ms=_now_ms(),
                    race_id=cmd.race_id,
                    text=result.value,
                )
            )
        else:
            self._emit(
                KeyPressed(
                    event_type=EventType.KEY_PRESSED,
                    ts_ms=_now_ms(),
                    race_id=cmd.race_id,
                    key=result.value,
                )
            )

    async def _await_confirm_key(self, cmd: AwaitConfirmKey) -> None:
        console.say(cmd.prompt)
        try:
            key = await self._ctx.keys.await_key()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._emit(
                InputFailed(
                    event_type=EventType.INPUT_FAILED,
                    ts_ms=_now_ms(),
                    race_id=cmd.race_id,
                    reason=_reason(exc),
                )
            )
            return

        self._emit(
            KeyPressed(
                event_type=EventType.KEY_PRESSED,
                ts_ms=_now_ms(),
                race_id=cmd.race_id,
                key=key,
            )
        )

    async def _complete(self, cmd: StartLLM) -> None:
        try:
            with timed(
                "llm_completion",
                session_id=self._ctx.session_id,
                details={"messages": len(cmd.messages)},
            ):
                reply = await self._ctx.llm.complete(list(cmd.messages))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._emit(
                LLMFailed(
                    event_type=EventType.LLM_FAILED,
                    ts_ms=_now_ms(),
                    reason=_reason(exc),
                )
            )
            return

        self._emit(
            LLMReplied(event_type=EventType.LLM_REPLIED, ts_ms=_now_ms(), text=reply)
        )
