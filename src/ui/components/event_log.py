"""Event log component — recent game events in the sidebar."""

from __future__ import annotations

from typing import Iterable

import streamlit as st

from src.realtime.events import EventPayload, GameEvent

_EVENT_TEXT: dict[GameEvent, str] = {
    GameEvent.PLAYER_JOINED: "{name} joined",
    GameEvent.PLAYER_LEFT: "A player left",
    GameEvent.INITIAL_ROLL_STARTED: "Rolling for the turn order",
    GameEvent.INITIAL_DIE_ROLLED: "{name} rolled for the turn order",
    GameEvent.TURN_ORDER_DECIDED: "Turn order decided",
    GameEvent.DICE_ROLLED: "{name} threw the dice",
    GameEvent.DUIM_ROLLED: "Duim! {name} threw the same again",
    GameEvent.POINTING_ROLLED: "{name} is pointing",
    GameEvent.MEXICO_ROLLED: "MEXICO by {name}!",
    GameEvent.SAND_ROLLED: "{name} threw sand",
    GameEvent.ROLL_VOIDED: "{name}'s throw doesn't count",
    GameEvent.DIE_LOCKED: "{name} locked a die",
    GameEvent.DIE_UNLOCKED: "{name} unlocked a die",
    GameEvent.SCORE_CONFIRMED: "{name} stands",
    GameEvent.HUNDREDS_BURNED: "All hundreds burned!",
    GameEvent.TURN_ADVANCED: "Next player",
    GameEvent.DEATH_MATCH_STARTED: "Death match!",
    GameEvent.ROUND_ENDED: "Round over",
    GameEvent.NEW_ROUND_STARTED: "New round",
}

MAX_EVENT_LOG_ENTRIES = 15


def format_event(payload: EventPayload) -> str:
    """One-line description of an event, naming the acting player."""
    snapshot = payload.data.get("snapshot", {})
    roster = snapshot.get("players", []) + snapshot.get("death_match_players", [])
    name = next(
        (p["name"] for p in roster if p["id"] == payload.player_id),
        "Someone",
    )
    return _EVENT_TEXT.get(payload.event, payload.event.name).format(name=name)


def render_event_log(entries: Iterable[str]) -> None:
    """Render the most recent events, newest first."""
    st.markdown("### Events")
    entries = list(entries)[-MAX_EVENT_LOG_ENTRIES:]
    if not entries:
        st.caption("Nothing happened yet.")
        return
    for entry in reversed(entries):
        st.caption(entry)
