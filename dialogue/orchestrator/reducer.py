"""
Pure dialogue reducer.

(state, event) -> (new_state, commands)

Rules:
- Pure: no side effects, no IO, no clocks.
- Deterministic: output depends only on inputs.
- Total: every (state, event) pair is handled or explicitly ignored (logged).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from constants import (
    APOLOGY_TEXT,
    CONFIRM_DUMP_PROMPT,
    FAREWELL_TEXT,
    UNKNOWN_KEY_NOTICE,
)
from context.conversation import append_turn, last_turn
from context.serialization import serialize_for_llm
from context.speech_buffer import append_fragment, flush
from orchestrator.commands import (
    AwaitConfirmKey,
    Command,
    ConfigureFrontEnd,
    EndSession,
    LogEvent,
    PrintTranscript,
    ShowNotice,
    Speak,
    StartLLM,
    StartRace,
)
from orchestrator.enums.action import Action
from orchestrator.enums.state import State
from orchestrator.events import (
    Event,
    FrontEndConfigured,
    InputEvent,
    InputFailed,
    KeyPressed,
    LLMFailed,
    LLMReplied,
    SessionStarted,
    SpeechDelivered,
    UtteranceHeard,
)
from orchestrator.keymap import Classified, classify_key
from orchestrator.state_dataclass import SessionState
from orchestrator.stimuli import stimulus_payload


# =============================================================================
# Small helpers
# =============================================================================

def _log(
    state: SessionState,
    event: Event,
    decision: str,
    details: dict[str, Any] | None = None,
) -> LogEvent:
    return LogEvent(
        event={
            "ts_ms": event.ts_ms,
            "state": state.state.value,
            "event_type": event.event_type.value,
            "decision": decision,
            "race_id": state.active_race_id,
            "history_len": len(state.history),
            "buffered_fragments": len(state.speech_fragments),
            "details": details or {},
        }
    )


def _state_changed(
    old: SessionState,
    new: SessionState,
    event: Event,
    source: str,
) -> LogEvent:
    return _log(
        new,
        event,
        "state_changed",
        {
            "from_state": old.state.value,
            "to_state": new.state.value,
            "source": source,
        },
    )


def _logs_last(commands: tuple[Command, ...]) -> tuple[Command, ...]:
    non_logs: list[Command] = []
    logs: list[Command] = []
    state_change_logs: list[Command] = []

    for command in commands:
        if isinstance(command, LogEvent):
            if command.event.get("decision") == "state_changed":
                state_change_logs.append(command)
            else:
                logs.append(command)
        else:
            non_logs.append(command)

    return tuple(non_logs + logs + state_change_logs)


def _ignore(
    state: SessionState, event: Event, reason: str
) -> tuple[SessionState, tuple[Command, ...]]:
    return state, (_log(state, event, "ignore", {"reason": reason}),)


def _is_stale(state: SessionState, event: InputEvent) -> bool:
    return event.race_id != state.active_race_id


def _start_race(
    state: SessionState,
    event: Event,
    source: str,
) -> tuple[SessionState, tuple[Command, ...]]:
    """
    Enter LISTEN_RACE and start a fresh race.

    Bumping active_race_id here is what makes every result of an older
    race stale.
    """
    new_state = replace(
        state,
        state=State.LISTEN_RACE,
        active_race_id=state.active_race_id + 1,
        last_input_key=None,
    )
    cmds: tuple[Command, ...] = (StartRace(race_id=new_state.active_race_id),)
    if state.state is not State.LISTEN_RACE:
        cmds += (_state_changed(state, new_state, event, source),)
    return new_state, cmds


def _await_confirm(
    state: SessionState,
    event: Event,
    source: str,
) -> tuple[SessionState, tuple[Command, ...]]:
    new_state = replace(
        state,
        state=State.CONFIRM_DUMP,
        active_race_id=state.active_race_id + 1,
    )
    cmds: tuple[Command, ...] = (
        AwaitConfirmKey(race_id=new_state.active_race_id, prompt=CONFIRM_DUMP_PROMPT),
    )
    if state.state is not State.CONFIRM_DUMP:
        cmds += (_state_changed(state, new_state, event, source),)
    return new_state, cmds


def _terminate(
    state: SessionState,
    event: Event,
    reason: str,
    extra: tuple[Command, ...] = (),
) -> tuple[SessionState, tuple[Command, ...]]:
    new_state = replace(state, state=State.TERMINAL)
    return new_state, _logs_last(extra + (
        EndSession(reason=reason),
        _state_changed(state, new_state, event, reason),
    ))


def _effective(classified: Classified, state: SessionState) -> Classified:
    """Apply session options and prompt validity to a raw classification."""
    if classified.action is Action.LIST_TRANSCRIPT and not state.options.enable_list_command:
        return Classified(action=Action.UNKNOWN)
    if classified.action in (Action.CONFIRM_YES, Action.CONFIRM_NO):
        # y/n are only meaningful at the end-of-session prompt
        return Classified(action=Action.UNKNOWN)
    return classified


# =============================================================================
# Reducer
# =============================================================================

def reduce(
    state: SessionState,
    event: Event,
) -> tuple[SessionState, tuple[Command, ...]]:
    """
    Pure reducer entry point.

    Routes by control state first, then by event type.
    """
    if state.state is State.TERMINAL:
        return _ignore(state, event, "terminal")

    if state.state is State.INIT:
        return _reduce_init(state, event)

    if isinstance(event, SpeechDelivered):
        return _reduce_speech_delivered(state, event)

    if state.state is State.LISTEN_RACE:
        return _reduce_listen_race(state, event)

    if state.state is State.RESPOND:
        return _reduce_respond(state, event)

    if state.state is State.CONFIRM_DUMP:
        return _reduce_confirm_dump(state, event)

    return _ignore(state, event, f"{state.state.value.lower()}_unhandled")


# -----------------------------------------------------------------------------
# INIT
# -----------------------------------------------------------------------------

def _reduce_init(
    state: SessionState,
    event: Event,
) -> tuple[SessionState, tuple[Command, ...]]:
    if isinstance(event, SessionStarted):
        return state, _logs_last((
            ConfigureFrontEnd(voice=state.options.voice),
            _log(state, event, "configure_front_end", {"voice": state.options.voice}),
        ))

    if isinstance(event, FrontEndConfigured):
        new_state = replace(state, state=State.SPEAK_INTRO)
        cmds: tuple[Command, ...] = (
            Speak(
                text=last_turn(state.history).content,
                first_turn=state.is_first_turn,
            ),
            _state_changed(state, new_state, event, "front_end_configured"),
        )
        if not (event.voice_ok and event.attend_ok):
            # Setup failures never block the session.
            cmds += (
                _log(
                    new_state,
                    event,
                    "front_end_setup_failed",
                    {
                        "voice_ok": event.voice_ok,
                        "attend_ok": event.attend_ok,
                        "reason": event.reason,
                    },
                ),
            )
        return new_state, _logs_last(cmds)

    return _ignore(state, event, "init_unhandled")


# -----------------------------------------------------------------------------
# Speech delivery (SPEAK_INTRO, STIMULATE, SPEAK_RESPONSE, FAREWELL)
# -----------------------------------------------------------------------------

def _reduce_speech_delivered(
    state: SessionState,
    event: SpeechDelivered,
) -> tuple[SessionState, tuple[Command, ...]]:
    failure_log: tuple[Command, ...] = ()
    if not event.ok:
        # Delivery failures are logged; turn-taking proceeds regardless.
        failure_log = (
            _log(state, event, "speech_delivery_failed", {"reason": event.reason}),
        )

    if state.state is State.SPEAK_INTRO:
        cleared = replace(state, is_first_turn=False)
        new_state, cmds = _start_race(cleared, event, "intro_spoken")
        return new_state, _logs_last(failure_log + cmds)

    if state.state is State.STIMULATE:
        cleared = replace(state, pending_stimulus=None)
        new_state, cmds = _start_race(cleared, event, "stimulus_delivered")
        return new_state, _logs_last(failure_log + cmds)

    if state.state is State.SPEAK_RESPONSE:
        new_state, cmds = _start_race(state, event, "response_spoken")
        return new_state, _logs_last(failure_log + cmds)

    if state.state is State.FAREWELL:
        if state.options.enable_confirm_dump:
            new_state, cmds = _await_confirm(state, event, "farewell_spoken")
            return new_state, _logs_last(failure_log + cmds)
        return _terminate(state, event, "farewell_spoken", failure_log)

    return _ignore(state, event, "speech_delivered_unexpected")


# -----------------------------------------------------------------------------
# LISTEN_RACE (+ Commit and Dispatch)
# -----------------------------------------------------------------------------

def _reduce_listen_race(
    state: SessionState,
    event: Event,
) -> tuple[SessionState, tuple[Command, ...]]:
    if not isinstance(event, InputEvent):
        return _ignore(state, event, "listen_race_unhandled")

    if _is_stale(state, event):
        return _ignore(state, event, "stale_race_result")

    if isinstance(event, UtteranceHeard):
        buffered = replace(
            state,
            speech_fragments=append_fragment(state.speech_fragments, event.text),
        )
        new_state, cmds = _start_race(buffered, event, "utterance_buffered")
        return new_state, _logs_last(cmds + (
            _log(
                new_state,
                event,
                "utterance_buffered",
                {
                    "raw": event.text,
                    "buffered": new_state.speech_fragments[-1],
                },
            ),
        ))

    if isinstance(event, InputFailed):
        new_state, cmds = _start_race(state, event, "input_failed")
        return new_state, _logs_last(cmds + (
            _log(state, event, "race_restarted", {"reason": event.reason}),
        ))

    if isinstance(event, KeyPressed):
        return _dispatch_key(state, event)

    return _ignore(state, event, "listen_race_unhandled")


def _dispatch_key(
    state: SessionState,
    event: KeyPressed,
) -> tuple[SessionState, tuple[Command, ...]]:
    # Commit: flush buffered speech before acting on the key.
    history, fragments = flush(state.history, state.speech_fragments)
    committed = replace(
        state,
        history=history,
        speech_fragments=fragments,
        last_input_key=event.key,
    )
    commit_logs: tuple[Command, ...] = ()
    if history is not state.history:
        commit_logs = (
            _log(
                committed,
                event,
                "speech_committed",
                {
                    "fragments": len(state.speech_fragments),
                    "text": last_turn(history).content,
                },
            ),
        )

    # Dispatch
    classified = _effective(classify_key(event.key), committed)
    key_log = _log(
        committed,
        event,
        "key_classified",
        {"key": event.key, "action": classified.action.value},
    )
    pre = commit_logs + (key_log,)

    if classified.action is Action.QUIT:
        new_state = replace(
            committed,
            state=State.FAREWELL,
            history=append_turn(committed.history, "assistant", FAREWELL_TEXT),
        )
        return new_state, _logs_last(pre + (
            Speak(text=FAREWELL_TEXT),
            _state_changed(state, new_state, event, "quit"),
        ))

    if classified.action is Action.DISCUSS:
        new_state = replace(committed, state=State.RESPOND)
        return new_state, _logs_last(pre + (
            StartLLM(messages=serialize_for_llm(new_state.history)),
            _state_changed(state, new_state, event, "discuss"),
        ))

    if classified.action is Action.LIST_TRANSCRIPT:
        new_state, cmds = _start_race(committed, event, "list_transcript")
        return new_state, _logs_last(
            pre + (PrintTranscript(history=committed.history),) + cmds
        )

    if classified.action is Action.INJECT_STIMULUS:
        assert classified.stimulus is not None
        payload = stimulus_payload(
            classified.stimulus,
            mode=committed.options.stimulus_mode,
            audio_base_url=committed.options.audio_base_url,
        )
        new_state = replace(
            committed,
            state=State.STIMULATE,
            history=append_turn(committed.history, "assistant", payload.annotation),
            pending_stimulus=payload,
        )
        return new_state, _logs_last(pre + (
            Speak(text=payload.text, audio_url=payload.audio_url),
            _log(
                new_state,
                event,
                "stimulus_injected",
                {
                    "variant": payload.variant.name,
                    "annotation": payload.annotation,
                },
            ),
            _state_changed(state, new_state, event, "inject_stimulus"),
        ))

    new_state, cmds = _start_race(committed, event, "unknown_key")
    return new_state, _logs_last(
        pre + (ShowNotice(text=UNKNOWN_KEY_NOTICE),) + cmds
    )


# -----------------------------------------------------------------------------
# RESPOND
# -----------------------------------------------------------------------------

def _reduce_respond(
    state: SessionState,
    event: Event,
) -> tuple[SessionState, tuple[Command, ...]]:
    if isinstance(event, LLMReplied):
        new_state = replace(
            state,
            state=State.SPEAK_RESPONSE,
            history=append_turn(state.history, "assistant", event.text),
        )
        return new_state, _logs_last((
            Speak(text=event.text),
            _log(new_state, event, "llm_replied", {"reply_len": len(event.text)}),
            _state_changed(state, new_state, event, "llm_replied"),
        ))

    if isinstance(event, LLMFailed):
        # Recovered locally: apologise and keep talking. Never retried.
        new_state = replace(
            state,
            state=State.SPEAK_RESPONSE,
            history=append_turn(state.history, "assistant", APOLOGY_TEXT),
            last_error=event.reason,
        )
        return new_state, _logs_last((
            Speak(text=APOLOGY_TEXT),
            _log(new_state, event, "llm_failed_apologise", {"reason": event.reason}),
            _state_changed(state, new_state, event, "llm_failed"),
        ))

    return _ignore(state, event, "respond_unhandled")


# -----------------------------------------------------------------------------
# CONFIRM_DUMP
# -----------------------------------------------------------------------------

def _reduce_confirm_dump(
    state: SessionState,
    event: Event,
) -> tuple[SessionState, tuple[Command, ...]]:
    if not isinstance(event, InputEvent):
        return _ignore(state, event, "confirm_dump_unhandled")

    if _is_stale(state, event):
        return _ignore(state, event, "stale_race_result")

    if isinstance(event, InputFailed):
        new_state, cmds = _await_confirm(state, event, "input_failed")
        return new_state, _logs_last(cmds + (
            _log(state, event, "confirm_reprompted", {"reason": event.reason}),
        ))

    if not isinstance(event, KeyPressed):
        return _ignore(state, event, "confirm_dump_expects_key")

    answered = replace(state, last_input_key=event.key)
    action = classify_key(event.key).action

    if action is Action.CONFIRM_YES:
        return _terminate(
            answered,
            event,
            "transcript_dumped",
            (PrintTranscript(history=answered.history),),
        )

    if action is Action.CONFIRM_NO:
        return _terminate(answered, event, "transcript_declined")

    new_state, cmds = _await_confirm(answered, event, "confirm_reprompt")
    return new_state, _logs_last(cmds + (
        _log(answered, event, "confirm_reprompted", {"key": event.key}),
    ))
