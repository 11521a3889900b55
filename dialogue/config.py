"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No orchestration logic
- No behavioural constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import DEFAULT_VOICE, FIRST_TURN_PAUSE_MS, TURN_PAUSE_MS


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) == "1"


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the session builder and the audio server.
    """

    # ------------------------------------------------------------------
    # Furhat front-end
    # ------------------------------------------------------------------

    furhat_host: str
    furhat_voice: str

    # ------------------------------------------------------------------
    # LLM configuration
    # ------------------------------------------------------------------

    llm_base_url: str
    llm_model: str
    llm_api_key: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool
    # Level for the in-process audio server (uvicorn).
    log_level: str

    # ------------------------------------------------------------------
    # Stimuli
    # ------------------------------------------------------------------

    stimulus_mode: str
    audio_host: str
    audio_port: int
    audio_dir: str

    # ------------------------------------------------------------------
    # Session behaviour
    # ------------------------------------------------------------------

    first_turn_pause_ms: int
    turn_pause_ms: int
    enable_list_command: bool
    enable_confirm_dump: bool
    cancel_race_loser: bool

    @property
    def audio_base_url(self) -> str:
        return f"http://{self.audio_host}:{self.audio_port}"

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if STIMULUS_MODE or a numeric variable is malformed.
        """
        stimulus_mode = os.environ.get("STIMULUS_MODE", "audio").lower()
        if stimulus_mode not in ("audio", "text"):
            raise ValueError(f"STIMULUS_MODE must be 'audio' or 'text', got {stimulus_mode!r}")

        return AppConfig(
            furhat_host=os.environ.get("FURHAT_HOST", "127.0.0.1:54321"),
            furhat_voice=os.environ.get("FURHAT_VOICE", DEFAULT_VOICE),

            llm_base_url=os.environ.get("LLM_BASE_URL", "http://localhost:11434/v1"),
            llm_model=os.environ.get("LLM_MODEL", "llava:13b"),
            llm_api_key=os.environ.get("LLM_API_KEY", "ollama"),

            enable_json_logs=_flag("ENABLE_JSON_LOGS", "1"),
            log_level=os.environ.get("LOG_LEVEL", "WARNING"),

            stimulus_mode=stimulus_mode,
            audio_host=os.environ.get("AUDIO_HOST", "localhost"),
            audio_port=int(os.environ.get("AUDIO_PORT", "8000")),
            audio_dir=os.environ.get("AUDIO_DIR", "audio"),

            first_turn_pause_ms=int(
                os.environ.get("FIRST_TURN_PAUSE_MS", str(FIRST_TURN_PAUSE_MS))
            ),
            turn_pause_ms=int(os.environ.get("TURN_PAUSE_MS", str(TURN_PAUSE_MS))),
            enable_list_command=_flag("ENABLE_LIST_COMMAND", "1"),
            enable_confirm_dump=_flag("ENABLE_CONFIRM_DUMP", "1"),
            cancel_race_loser=_flag("CANCEL_RACE_LOSER", "0"),
        )
