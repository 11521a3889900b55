"""
Operator console output.

The researcher watches this stream: key banner, transcript dumps and
notices. Structured logs go through observability.logger instead.
"""

from __future__ import annotations

import sys
from typing import Callable


def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print


def say(line: str) -> None:
    """Write one line to the operator console."""
    _print(line)
