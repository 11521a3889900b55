"""
Race scheduler.

Runs "listen" and "await-key" concurrently and returns whichever settles
first, tagged with its origin.

Rules:
- The loser is NOT cancelled by default; it keeps running and its eventual
  result is dropped. Set cancel_loser=True to cancel it instead.
- If the winner failed, its exception propagates to the caller. The race is
  never retried here; restarting is the orchestrator's decision.
- No knowledge of session state. Stale gating happens in the reducer via
  race_id.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from observability.logger import log_event
from orchestrator.enums.source import InputSource


@dataclass(frozen=True)
class RaceResult:
    """Winning producer and its value (utterance text or key token)."""
    source: InputSource
    value: str


def _discard_loser(race_id: int, source: InputSource, task: asyncio.Task[str]) -> None:
    """Done-callback for a losing producer: drop its result, keep the log."""
    if task.cancelled():
        outcome = "cancelled"
    elif task.exception() is not None:
        outcome = f"failed: {type(task.exception()).__name__}"
    else:
        outcome = "discarded"

    log_event({
        "event_type": "race_loser_settled",
        "race_id": race_id,
        "source": source.value,
        "outcome": outcome,
    })


async def race_inputs(
    *,
    race_id: int,
    listen: Callable[[], Awaitable[str]],
    await_key: Callable[[], Awaitable[str]],
    cancel_loser: bool = False,
) -> RaceResult:
    """
    Race speech against keypress.

    When both settle within the same loop iteration the keypress wins:
    it is the decisive input, and the utterance is dropped like any loser.
    """
    tasks: dict[InputSource, asyncio.Task[str]] = {
        InputSource.SPEECH: asyncio.ensure_future(listen()),
        InputSource.KEYPRESS: asyncio.ensure_future(await_key()),
    }

    try:
        done, _ = await asyncio.wait(
            tasks.values(),
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        for task in tasks.values():
            task.cancel()
        raise

    if tasks[InputSource.KEYPRESS] in done:
        winner = InputSource.KEYPRESS
    else:
        winner = InputSource.SPEECH

    for source, task in tasks.items():
        if source is winner:
            continue
        if task.done():
            _discard_loser(race_id, source, task)
            continue
        task.add_done_callback(
            lambda t, s=source: _discard_loser(race_id, s, t)
        )
        if cancel_loser:
            task.cancel()

    # Raises the winner's exception, if any.
    value = tasks[winner].result()
    return RaceResult(source=winner, value=value)
