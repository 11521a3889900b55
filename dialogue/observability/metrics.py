"""
Timing helpers for observability.

Responsibilities:
- Measure durations of external calls (LLM completion, speech delivery)
  using monotonic time
- Emit each measurement as one JSONL event via observability.logger
- Never aggregate: one metric = one log event
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import log_event


@contextmanager
def timed(
    name: str,
    *,
    session_id: str | None = None,
    state: str | None = None,
    details: dict[str, Any] | None = None,
) -> Iterator[None]:
    """
    Measure the wrapped block and emit one METRIC_TIMER event.

    The metric is emitted exactly once, also when the block raises.

    Usage:
        with timed("llm_completion", session_id=ctx.session_id):
            reply = await llm.complete(messages)
    """
    start_ns = time.monotonic_ns()
    try:
        yield
    finally:
        log_event({
            "ts_ms": int(time.time() * 1000),
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_ms": (time.monotonic_ns() - start_ns) // 1_000_000,
            "session_id": session_id,
            "state": state,
            "details": details or {},
        })
