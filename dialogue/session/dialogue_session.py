"""
Dialogue session container and builder.

- Owns the Furhat HTTP client and the LLM client for one session
- Wires adapters into the runtime execution context
- Seeds the conversation history
- NOT a state machine
- Contains no orchestration logic
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import httpx
from openai import AsyncOpenAI

from adapters.asr.furhat_listen import FurhatSpeechInput
from adapters.furhat.client import FurhatClient
from adapters.furhat.front_end import FurhatFrontEnd
from adapters.llm.chat_completion import ChatCompletionLLMAdapter
from adapters.llm.prompts import INTRO_TEXT, system_prompt_for
from adapters.tts.furhat_say import FurhatSpeechOutput
from config import AppConfig
from context.conversation import seed_history
from orchestrator.runtime import Runtime
from orchestrator.runtime_context import KeySourceProtocol, RuntimeExecutionContext
from orchestrator.state_dataclass import SessionOptions, SessionState
from orchestrator.stimuli import StimulusMode


def new_session_id() -> str:
    return f"sess_{uuid4().hex[:12]}"


# ---------------------------------------------------------------------
# DialogueSession
# ---------------------------------------------------------------------


@dataclass
class DialogueSession:
    """Runtime container for a single research session."""

    session_id: str
    runtime: Runtime
    furhat: FurhatClient
    llm_client: Any  # Type: openai.AsyncOpenAI in practice

    async def run(self) -> SessionState:
        """Drive the session to TERMINAL and return the final state."""
        return await self.runtime.run()

    async def aclose(self) -> None:
        await self.furhat.aclose()
        await self.llm_client.close()


# ---------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------


def build_llm_client(config: AppConfig) -> AsyncOpenAI:
    """OpenAI-compatible client; Ollama ignores the key but the SDK requires one."""
    return AsyncOpenAI(api_key=config.llm_api_key, base_url=config.llm_base_url)


def build_session_options(config: AppConfig) -> SessionOptions:
    return SessionOptions(
        enable_list_command=config.enable_list_command,
        enable_confirm_dump=config.enable_confirm_dump,
        stimulus_mode=StimulusMode(config.stimulus_mode),
        audio_base_url=config.audio_base_url,
        voice=config.furhat_voice,
    )


def build_dialogue_session(
    *,
    config: AppConfig,
    keys: KeySourceProtocol,
    session_id: str | None = None,
    furhat_http: httpx.AsyncClient | None = None,
    llm_client: Any | None = None,
) -> DialogueSession:
    """
    Assemble a ready-to-run session.

    furhat_http and llm_client are injection points; by default the real
    robot and the configured model endpoint are used.
    """
    session_id = session_id or new_session_id()
    options = build_session_options(config)

    furhat = FurhatClient(
        host=config.furhat_host,
        session_id=session_id,
        http=furhat_http,
    )
    front_end = FurhatFrontEnd(furhat)

    if llm_client is None:
        llm_client = build_llm_client(config)

    context = RuntimeExecutionContext(
        session_id=session_id,
        voice=front_end,
        attention=front_end,
        speech_out=FurhatSpeechOutput(
            furhat,
            first_turn_pause_ms=config.first_turn_pause_ms,
            turn_pause_ms=config.turn_pause_ms,
        ),
        speech_in=FurhatSpeechInput(furhat),
        keys=keys,
        llm=ChatCompletionLLMAdapter(
            client=llm_client,
            model=config.llm_model,
            session_id=session_id,
        ),
        cancel_race_loser=config.cancel_race_loser,
    )

    # Recorded stimuli run with the brief prompt.
    brief = options.stimulus_mode is StimulusMode.AUDIO
    initial_state = SessionState(
        history=seed_history(system_prompt_for(brief), INTRO_TEXT),
        options=options,
    )

    return DialogueSession(
        session_id=session_id,
        runtime=Runtime(initial_state=initial_state, context=context),
        furhat=furhat,
        llm_client=llm_client,
    )
