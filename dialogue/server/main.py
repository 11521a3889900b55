"""
Operator entry point for one research session.

Responsibilities:
- Load configuration (.env, then environment)
- Serve stimulus audio in-process when running with recorded stimuli
- Put the terminal into single-key mode and run the session to the end
- Release the robot and model clients on the way out
"""

from __future__ import annotations

import asyncio
import sys
import time

import uvicorn
from dotenv import load_dotenv

from adapters.keys.terminal import TerminalKeySource
from config import AppConfig
from constants import KEY_BANNER
from observability import console, logger
from observability.logger import log_event
from server.app import create_app
from session.dialogue_session import build_dialogue_session, new_session_id


def _now_ms() -> int:
    return int(time.time() * 1000)


def _audio_server(config: AppConfig) -> uvicorn.Server:
    return uvicorn.Server(
        uvicorn.Config(
            create_app(config.audio_dir),
            host="0.0.0.0",
            port=config.audio_port,
            log_level=config.log_level.lower(),
        )
    )


async def run_session(config: AppConfig) -> int:
    session_id = new_session_id()

    for line in KEY_BANNER.strip("\n").splitlines():
        console.say(line)

    server: uvicorn.Server | None = None
    server_task: asyncio.Task[None] | None = None
    if config.stimulus_mode == "audio":
        server = _audio_server(config)
        server_task = asyncio.create_task(server.serve())

    try:
        with TerminalKeySource(session_id=session_id) as keys:
            session = build_dialogue_session(
                config=config,
                keys=keys,
                session_id=session_id,
            )
            try:
                final_state = await session.run()
            finally:
                await session.aclose()
    finally:
        if server is not None and server_task is not None:
            server.should_exit = True
            await server_task

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "session_finished",
        "session_id": session_id,
        "state": final_state.state.value,
        "turns": len(final_state.history),
    })
    return 0


def main() -> int:
    load_dotenv()
    config = AppConfig.load_from_env()
    logger.set_enabled(config.enable_json_logs)

    try:
        return asyncio.run(run_session(config))
    except KeyboardInterrupt:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "session_interrupted",
        })
        return 130


if __name__ == "__main__":
    sys.exit(main())
