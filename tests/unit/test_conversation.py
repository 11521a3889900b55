# pylint: disable=missing-module-docstring,missing-function-docstring
import pytest

from constants import TRANSCRIPT_FOOTER, TRANSCRIPT_HEADER
from context.conversation import Turn, append_turn, format_transcript, seed_history
from context.serialization import serialize_for_llm


def test_seed_history_starts_with_single_system_turn():
    history = seed_history("be neutral", "hello")

    assert history == (
        Turn(role="system", content="be neutral"),
        Turn(role="assistant", content="hello"),
    )


def test_append_turn_is_non_destructive():
    history = seed_history("s", "i")

    longer = append_turn(history, "user", "the pilot")

    assert len(history) == 2
    assert longer[-1] == Turn(role="user", content="the pilot")


def test_append_turn_rejects_second_system_turn():
    with pytest.raises(ValueError):
        append_turn(seed_history("s", "i"), "system", "override")


def test_transcript_format():
    history = append_turn(seed_history("s", "i"), "user", "u")

    assert format_transcript(history) == [
        "",
        TRANSCRIPT_HEADER,
        "1. [system]: s",
        "2. [assistant]: i",
        "3. [user]: u",
        TRANSCRIPT_FOOTER,
    ]


def test_serialization_preserves_order_and_roles():
    history = append_turn(seed_history("s", "i"), "user", "u")

    assert serialize_for_llm(history) == (
        {"role": "system", "content": "s"},
        {"role": "assistant", "content": "i"},
        {"role": "user", "content": "u"},
    )
