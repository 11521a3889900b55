"""
Conversation history serialization for LLM consumption.

Responsibilities:
- Convert the conversation log into LLM-ready message format.

Non-responsibilities:
- No turn storage
- No logging
- No orchestration decisions
"""

from __future__ import annotations

from context.conversation import History


def serialize_for_llm(history: History) -> tuple[dict[str, str], ...]:
    """
    Serialize history into chat-completion message format.

    Output format:
    (
        {"role": "system", "content": "..."},
        {"role": "assistant", "content": "..."},
        {"role": "user", "content": "..."},
        ...
    )

    The system turn is already first in history; order is preserved exactly.
    """
    return tuple(
        {"role": turn.role, "content": turn.content}
        for turn in history
    )
