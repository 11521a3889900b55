"""
Operator keyboard on the controlling terminal.

The terminal is switched to cbreak mode for the lifetime of the context
manager so single keystrokes arrive without Enter and without echo.
Keystrokes are read through the event loop (add_reader); no thread.
"""

from __future__ import annotations

import asyncio
import os
import sys
import termios
import time
import tty
from typing import IO, Any

from adapters.keys.base import KeySourceAdapter
from observability.logger import log_event


class TerminalKeySource(KeySourceAdapter):
    """
    Single-character key source backed by stdin.

    Usage:
        with TerminalKeySource(session_id=sid) as keys:
            key = await keys.await_key()

    Design notes:
    - One pending read is shared by every await_key() caller. A race
      loser that is left running (or cancelled) keeps that read alive,
      and the next race picks it up, so no keystroke is ever consumed by
      a result nobody looks at.
    - Keys typed while nobody is waiting (speech delivery, LLM call) are
      dropped, never replayed into a later race.
    - Once stdin reaches EOF the pending read never resolves. Speech input
      keeps working; the operator has simply lost the keyboard.
    """

    def __init__(self, *, session_id: str, stream: IO[str] | None = None) -> None:
        self._session_id = session_id
        self._stream = stream or sys.stdin
        self._fd = self._stream.fileno()
        self._saved_attrs: list[Any] | None = None

        self._loop: asyncio.AbstractEventLoop | None = None
        self._pending: asyncio.Future[str] | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Terminal mode
    # ------------------------------------------------------------------

    def __enter__(self) -> TerminalKeySource:
        if os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._detach()
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    # ------------------------------------------------------------------
    # KeySourceAdapter
    # ------------------------------------------------------------------

    async def await_key(self) -> str:
        self._attach()
        if self._pending is None or self._pending.done():
            self._pending = asyncio.get_running_loop().create_future()
        # Shielded: cancelling a race loser must not cancel the shared read.
        return await asyncio.shield(self._pending)

    # ------------------------------------------------------------------
    # Reader plumbing
    # ------------------------------------------------------------------

    def _attach(self) -> None:
        if self._loop is not None or self._closed:
            return
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(self._fd, self._on_readable)

    def _detach(self) -> None:
        if self._loop is not None:
            self._loop.remove_reader(self._fd)
            self._loop = None

    def _on_readable(self) -> None:
        try:
            chunk = os.read(self._fd, 64)
        except BlockingIOError:
            return

        if not chunk:
            self._closed = True
            self._detach()
            log_event({
                "ts_ms": int(time.time() * 1000),
                "event_type": "key_source_closed",
                "session_id": self._session_id,
            })
            return

        for char in chunk.decode("utf-8", errors="ignore"):
            if self._pending is not None and not self._pending.done():
                self._pending.set_result(char)
                continue
            log_event({
                "ts_ms": int(time.time() * 1000),
                "event_type": "key_ignored",
                "session_id": self._session_id,
                "key": char,
            })
