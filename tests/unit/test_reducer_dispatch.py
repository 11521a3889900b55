# pylint: disable=missing-module-docstring,missing-function-docstring
from dataclasses import replace

from constants import APOLOGY_TEXT, CONFIRM_DUMP_PROMPT, FAREWELL_TEXT, UNKNOWN_KEY_NOTICE
from context.conversation import Turn, seed_history
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import SessionOptions, SessionState
from orchestrator.enums.state import State
from orchestrator.stimuli import StimulusMode

from orchestrator.events import (
    EventType,
    SpeechDelivered,
    KeyPressed,
    InputFailed,
    LLMReplied,
    LLMFailed,
)

from orchestrator.commands import (
    AwaitConfirmKey,
    Command,
    EndSession,
    PrintTranscript,
    ShowNotice,
    Speak,
    StartLLM,
    StartRace,
)


def key(race_id: int, token: str) -> KeyPressed:
    return KeyPressed(
        ts_ms=0,
        event_type=EventType.KEY_PRESSED,
        race_id=race_id,
        key=token,
    )


def delivered() -> SpeechDelivered:
    return SpeechDelivered(ts_ms=0, event_type=EventType.SPEECH_DELIVERED)


def listening(**options: object) -> SessionState:
    return SessionState(
        history=seed_history("policy", "intro"),
        options=SessionOptions(**options),  # type: ignore[arg-type]
        state=State.LISTEN_RACE,
        is_first_turn=False,
        active_race_id=1,
    )


def of_type(commands: tuple[Command, ...], cls: type) -> list[Command]:
    return [c for c in commands if isinstance(c, cls)]


# ---------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------

def test_key_commits_buffered_fragments_as_one_user_turn():
    state = replace(listening(), speech_fragments=("I think", "...", "the pilot"))

    new_state, _ = reduce(state, key(1, "l"))

    assert new_state.history[-1] == Turn(role="user", content="I think ... the pilot")
    assert new_state.speech_fragments == ()
    assert new_state.last_input_key == "l"


def test_key_with_empty_buffer_commits_nothing():
    state = listening()

    new_state, _ = reduce(state, key(1, "x"))

    assert new_state.history == state.history


# ---------------------------------------------------------------------
# Discuss
# ---------------------------------------------------------------------

def test_discuss_sends_full_history_including_committed_speech():
    state = replace(listening(), speech_fragments=("save the child",))

    new_state, commands = reduce(state, key(1, "l"))

    assert new_state.state is State.RESPOND
    (start,) = of_type(commands, StartLLM)
    assert start.messages[0] == {"role": "system", "content": "policy"}
    assert start.messages[-1] == {"role": "user", "content": "save the child"}
    assert len(start.messages) == len(new_state.history)


def test_upper_case_key_is_classified_like_lower_case():
    new_state, _ = reduce(listening(), key(1, "L"))

    assert new_state.state is State.RESPOND


def test_llm_reply_is_appended_and_spoken():
    state = replace(listening(), state=State.RESPOND)
    event = LLMReplied(ts_ms=0, event_type=EventType.LLM_REPLIED, text="Why the pilot?")

    new_state, commands = reduce(state, event)

    assert new_state.state is State.SPEAK_RESPONSE
    assert new_state.history[-1] == Turn(role="assistant", content="Why the pilot?")
    assert Speak(text="Why the pilot?") in commands


def test_llm_failure_apologises_and_is_not_retried():
    state = replace(listening(), state=State.RESPOND)
    event = LLMFailed(ts_ms=0, event_type=EventType.LLM_FAILED, reason="APIConnectionError")

    new_state, commands = reduce(state, event)

    assert new_state.state is State.SPEAK_RESPONSE
    assert new_state.history[-1] == Turn(role="assistant", content=APOLOGY_TEXT)
    assert new_state.last_error == "APIConnectionError"
    assert Speak(text=APOLOGY_TEXT) in commands
    assert not of_type(commands, StartLLM)


def test_spoken_response_returns_to_race():
    state = replace(listening(), state=State.SPEAK_RESPONSE)

    new_state, commands = reduce(state, delivered())

    assert new_state.state is State.LISTEN_RACE
    assert StartRace(race_id=2) in commands


# ---------------------------------------------------------------------
# List transcript
# ---------------------------------------------------------------------

def test_list_prints_transcript_and_keeps_racing():
    state = replace(listening(), speech_fragments=("hello",))

    new_state, commands = reduce(state, key(1, "m"))

    assert new_state.state is State.LISTEN_RACE
    (printed,) = of_type(commands, PrintTranscript)
    assert printed.history == new_state.history
    assert printed.history[-1].content == "hello"
    assert StartRace(race_id=2) in commands


def test_list_twice_without_speech_leaves_history_unchanged():
    first, _ = reduce(listening(), key(1, "m"))
    second, _ = reduce(first, key(2, "m"))

    assert second.history == first.history == listening().history


def test_list_disabled_is_treated_as_unknown():
    new_state, commands = reduce(listening(enable_list_command=False), key(1, "m"))

    assert not of_type(commands, PrintTranscript)
    assert ShowNotice(text=UNKNOWN_KEY_NOTICE) in commands
    assert new_state.state is State.LISTEN_RACE


# ---------------------------------------------------------------------
# Stimuli
# ---------------------------------------------------------------------

def test_audio_stimulus_plays_clip_and_annotates_history():
    state = listening(stimulus_mode=StimulusMode.AUDIO, audio_base_url="http://lab:8000")

    new_state, commands = reduce(state, key(1, "1"))

    assert new_state.state is State.STIMULATE
    assert new_state.history[-1] == Turn(role="assistant", content="[stimulus: questioning-doctor]")
    assert Speak(audio_url="http://lab:8000/hmm_doctor.wav") in commands
    assert new_state.pending_stimulus is not None


def test_text_stimulus_speaks_phrase_and_records_it():
    state = listening(stimulus_mode=StimulusMode.TEXT)

    new_state, commands = reduce(state, key(1, "w"))

    assert new_state.history[-1] == Turn(role="assistant", content="........ The pregnant lady?")
    assert Speak(text="........ The pregnant lady?") in commands


def test_stimulus_delivery_returns_to_race():
    stimulating, _ = reduce(listening(), key(1, "f"))

    new_state, commands = reduce(stimulating, delivered())

    assert new_state.state is State.LISTEN_RACE
    assert new_state.pending_stimulus is None
    assert StartRace(race_id=2) in commands


# ---------------------------------------------------------------------
# Unknown keys
# ---------------------------------------------------------------------

def test_unknown_key_shows_notice_and_restarts_race():
    state = listening()

    new_state, commands = reduce(state, key(1, "z"))

    assert ShowNotice(text=UNKNOWN_KEY_NOTICE) in commands
    assert new_state.history == state.history
    assert new_state.active_race_id == 2


def test_confirmation_keys_are_unknown_during_discussion():
    for token in ("y", "n"):
        new_state, commands = reduce(listening(), key(1, token))

        assert new_state.state is State.LISTEN_RACE
        assert ShowNotice(text=UNKNOWN_KEY_NOTICE) in commands


# ---------------------------------------------------------------------
# Quit / farewell / confirmation
# ---------------------------------------------------------------------

def test_quit_says_farewell():
    new_state, commands = reduce(listening(), key(1, "0"))

    assert new_state.state is State.FAREWELL
    assert new_state.history[-1] == Turn(role="assistant", content=FAREWELL_TEXT)
    assert Speak(text=FAREWELL_TEXT) in commands


def test_farewell_asks_for_transcript_confirmation():
    farewell, _ = reduce(listening(), key(1, "0"))

    new_state, commands = reduce(farewell, delivered())

    assert new_state.state is State.CONFIRM_DUMP
    assert AwaitConfirmKey(race_id=2, prompt=CONFIRM_DUMP_PROMPT) in commands


def test_farewell_without_confirmation_ends_session():
    farewell, _ = reduce(listening(enable_confirm_dump=False), key(1, "0"))

    new_state, commands = reduce(farewell, delivered())

    assert new_state.state is State.TERMINAL
    assert of_type(commands, EndSession)
    assert not of_type(commands, PrintTranscript)


def _confirming() -> SessionState:
    farewell, _ = reduce(listening(), key(1, "0"))
    confirming, _ = reduce(farewell, delivered())
    return confirming


def test_yes_prints_transcript_then_ends():
    state = _confirming()

    new_state, commands = reduce(state, key(state.active_race_id, "Y"))

    assert new_state.state is State.TERMINAL
    (printed,) = of_type(commands, PrintTranscript)
    assert printed.history[-1].content == FAREWELL_TEXT
    assert commands.index(printed) < commands.index(of_type(commands, EndSession)[0])


def test_no_ends_without_transcript():
    state = _confirming()

    new_state, commands = reduce(state, key(state.active_race_id, "n"))

    assert new_state.state is State.TERMINAL
    assert not of_type(commands, PrintTranscript)
    assert of_type(commands, EndSession)


def test_other_key_reprompts_confirmation():
    state = _confirming()

    new_state, commands = reduce(state, key(state.active_race_id, "l"))

    assert new_state.state is State.CONFIRM_DUMP
    assert AwaitConfirmKey(race_id=state.active_race_id + 1, prompt=CONFIRM_DUMP_PROMPT) in commands


def test_failed_confirmation_read_reprompts():
    state = _confirming()
    event = InputFailed(
        ts_ms=0,
        event_type=EventType.INPUT_FAILED,
        race_id=state.active_race_id,
        reason="OSError",
    )

    new_state, commands = reduce(state, event)

    assert new_state.state is State.CONFIRM_DUMP
    assert of_type(commands, AwaitConfirmKey)


def test_stale_key_from_discussion_race_cannot_answer_confirmation():
    state = _confirming()

    new_state, _ = reduce(state, key(1, "y"))

    assert new_state == state


# ---------------------------------------------------------------------
# Fresh races
# ---------------------------------------------------------------------

def test_fresh_race_after_unknown_key_clears_last_input_key():
    new_state, _ = reduce(listening(), key(1, "z"))

    assert new_state.active_race_id == 2
    assert new_state.last_input_key is None


def test_fresh_race_after_list_clears_last_input_key():
    new_state, _ = reduce(listening(), key(1, "m"))

    assert new_state.last_input_key is None


def test_stimulus_keeps_key_until_its_delivery_starts_a_race():
    stimulating, _ = reduce(listening(), key(1, "a"))
    assert stimulating.last_input_key == "a"

    new_state, _ = reduce(stimulating, delivered())

    assert new_state.last_input_key is None


def test_stimulus_after_buffered_speech_adds_one_user_and_one_assistant_turn():
    state = replace(listening(), speech_fragments=("the doctor", "..."))

    new_state, commands = reduce(state, key(1, "q"))

    assert new_state.history[len(state.history):] == (
        Turn(role="user", content="the doctor ..."),
        Turn(role="assistant", content="[stimulus: paused-doctor]"),
    )
    assert len(of_type(commands, Speak)) == 1
    assert not of_type(commands, StartLLM)
