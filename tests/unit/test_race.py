# pylint: disable=missing-module-docstring,missing-function-docstring
import asyncio
import json

import pytest

from observability import logger
from orchestrator.enums.source import InputSource
from orchestrator.race import race_inputs


@pytest.fixture
def captured_logs(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    captured: list[dict] = []
    monkeypatch.setattr(logger, "_print", lambda line: captured.append(json.loads(line)))
    return captured


def loser_outcomes(logs: list[dict]) -> list[str]:
    return [e["outcome"] for e in logs if e["event_type"] == "race_loser_settled"]


def test_speech_wins_when_it_settles_first(captured_logs: list[dict]):
    async def scenario():
        gate: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        async def listen() -> str:
            return "the doctor"

        async def await_key() -> str:
            return await gate

        result = await race_inputs(race_id=1, listen=listen, await_key=await_key)

        # The loser is left running; resolving it later is harmless.
        gate.set_result("l")
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        return result

    result = asyncio.run(scenario())

    assert result.source is InputSource.SPEECH
    assert result.value == "the doctor"
    assert loser_outcomes(captured_logs) == ["discarded"]


def test_key_wins_when_it_settles_first(captured_logs: list[dict]):
    async def scenario():
        async def listen() -> str:
            await asyncio.sleep(10)
            return "too late"

        async def await_key() -> str:
            return "0"

        return await race_inputs(
            race_id=7,
            listen=listen,
            await_key=await_key,
            cancel_loser=True,
        )

    result = asyncio.run(scenario())

    assert result.source is InputSource.KEYPRESS
    assert result.value == "0"


def test_key_wins_a_tie():
    async def scenario():
        async def listen() -> str:
            return "hello"

        async def await_key() -> str:
            return "m"

        return await race_inputs(race_id=1, listen=listen, await_key=await_key)

    result = asyncio.run(scenario())

    assert result.source is InputSource.KEYPRESS
    assert result.value == "m"


def test_loser_is_not_cancelled_by_default(captured_logs: list[dict]):
    listen_finished: list[bool] = []

    async def scenario():
        release = asyncio.Event()

        async def listen() -> str:
            await release.wait()
            listen_finished.append(True)
            return "late utterance"

        async def await_key() -> str:
            return "l"

        await race_inputs(race_id=1, listen=listen, await_key=await_key)
        release.set()
        for _ in range(3):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert listen_finished == [True]
    assert loser_outcomes(captured_logs) == ["discarded"]


def test_loser_is_cancelled_when_requested(captured_logs: list[dict]):
    async def scenario():
        async def listen() -> str:
            await asyncio.sleep(10)
            return "never"

        async def await_key() -> str:
            return "l"

        await race_inputs(race_id=1, listen=listen, await_key=await_key, cancel_loser=True)
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert loser_outcomes(captured_logs) == ["cancelled"]


def test_winner_failure_propagates():
    async def scenario():
        async def listen() -> str:
            raise ConnectionError("robot unreachable")

        async def await_key() -> str:
            await asyncio.sleep(10)
            return "l"

        await race_inputs(race_id=1, listen=listen, await_key=await_key, cancel_loser=True)

    with pytest.raises(ConnectionError):
        asyncio.run(scenario())
