"""
Key-source adapter contract.

Key invariants:
- await_key() resolves with exactly one key token (a single character).
- A call that loses a race may stay pending; the next call must not lose
  the keystroke it would have received.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeySourceAdapter(ABC):
    """Abstract single-shot keyboard reader."""

    @abstractmethod
    async def await_key(self) -> str:
        raise NotImplementedError
