# pylint: disable=missing-module-docstring,missing-function-docstring
import pytest

from config import AppConfig
from constants import DEFAULT_VOICE, FIRST_TURN_PAUSE_MS
from session.dialogue_session import build_session_options
from orchestrator.stimuli import StimulusMode

_VARS = (
    "FURHAT_HOST", "FURHAT_VOICE", "LLM_BASE_URL", "LLM_MODEL", "STIMULUS_MODE",
    "AUDIO_HOST", "AUDIO_PORT", "FIRST_TURN_PAUSE_MS", "ENABLE_LIST_COMMAND",
    "ENABLE_CONFIRM_DUMP", "CANCEL_RACE_LOSER", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.load_from_env()

    assert config.furhat_host == "127.0.0.1:54321"
    assert config.furhat_voice == DEFAULT_VOICE
    assert config.llm_base_url == "http://localhost:11434/v1"
    assert config.llm_model == "llava:13b"
    assert config.stimulus_mode == "audio"
    assert config.audio_base_url == "http://localhost:8000"
    assert config.first_turn_pause_ms == FIRST_TURN_PAUSE_MS
    assert config.enable_list_command is True
    assert config.cancel_race_loser is False
    assert config.log_level == "WARNING"


def test_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STIMULUS_MODE", "TEXT")
    monkeypatch.setenv("AUDIO_PORT", "9000")
    monkeypatch.setenv("FIRST_TURN_PAUSE_MS", "15000")
    monkeypatch.setenv("ENABLE_LIST_COMMAND", "0")
    monkeypatch.setenv("CANCEL_RACE_LOSER", "1")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = AppConfig.load_from_env()

    assert config.stimulus_mode == "text"
    assert config.audio_port == 9000
    assert config.first_turn_pause_ms == 15000
    assert config.enable_list_command is False
    assert config.cancel_race_loser is True
    assert config.log_level == "DEBUG"


def test_bad_stimulus_mode_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STIMULUS_MODE", "video")

    with pytest.raises(ValueError):
        AppConfig.load_from_env()


def test_session_options_follow_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STIMULUS_MODE", "text")
    monkeypatch.setenv("ENABLE_CONFIRM_DUMP", "0")

    options = build_session_options(AppConfig.load_from_env())

    assert options.stimulus_mode is StimulusMode.TEXT
    assert options.enable_confirm_dump is False
    assert options.audio_base_url == "http://localhost:8000"
