"""
Mexico - Game Event Definitions

Event types and payloads for game state changes, plus classifiers that
derive events from an accepted intent and the snapshots around it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import GamePhase, Notifications, ScoreKind
from src.engine.models import GameState


class GameEvent(Enum):
    """Events that can occur during a game."""

    PLAYER_JOINED = auto()
    PLAYER_LEFT = auto()
    INITIAL_ROLL_STARTED = auto()
    INITIAL_DIE_ROLLED = auto()
    TURN_ORDER_DECIDED = auto()
    DICE_ROLLED = auto()
    DUIM_ROLLED = auto()
    POINTING_ROLLED = auto()
    MEXICO_ROLLED = auto()
    SAND_ROLLED = auto()
    ROLL_VOIDED = auto()
    DIE_LOCKED = auto()
    DIE_UNLOCKED = auto()
    SCORE_CONFIRMED = auto()
    HUNDREDS_BURNED = auto()
    TURN_ADVANCED = auto()
    DEATH_MATCH_STARTED = auto()
    ROUND_ENDED = auto()
    NEW_ROUND_STARTED = auto()


@dataclass
class EventPayload:
    """Wrapper for game event data."""

    event: GameEvent
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


# Map accepted intents to the event they always produce
_INTENT_EVENT_MAP: dict[str, GameEvent] = {
    "add_player": GameEvent.PLAYER_JOINED,
    "remove_player": GameEvent.PLAYER_LEFT,
    "start_initial_roll": GameEvent.INITIAL_ROLL_STARTED,
    "perform_initial_roll": GameEvent.INITIAL_DIE_ROLLED,
    "roll_dice": GameEvent.DICE_ROLLED,
    "roll_death_match_dice": GameEvent.DICE_ROLLED,
    "lock_die": GameEvent.DIE_LOCKED,
    "unlock_die": GameEvent.DIE_UNLOCKED,
    "confirm_score": GameEvent.SCORE_CONFIRMED,
    "dismiss_mexico_popup": GameEvent.SCORE_CONFIRMED,
    "dismiss_sand_popup": GameEvent.SCORE_CONFIRMED,
    "dismiss_pointing_popup": GameEvent.ROLL_VOIDED,
    "start_new_round": GameEvent.NEW_ROUND_STARTED,
}

# Notification flags that announce a special roll when they switch on
_NOTIFICATION_EVENT_MAP: dict[str, GameEvent] = {
    "duim": GameEvent.DUIM_ROLLED,
    "pointing": GameEvent.POINTING_ROLLED,
    "mexico": GameEvent.MEXICO_ROLLED,
    "sand": GameEvent.SAND_ROLLED,
}

_PHASE_EVENT_MAP: dict[GamePhase, GameEvent] = {
    GamePhase.INITIAL_ROLL: GameEvent.INITIAL_ROLL_STARTED,
    GamePhase.DEATH_MATCH: GameEvent.DEATH_MATCH_STARTED,
    GamePhase.ROUND_END: GameEvent.ROUND_ENDED,
}


def classify_intent(intent: str) -> GameEvent | None:
    """Determine the primary event of an accepted intent."""
    return _INTENT_EVENT_MAP.get(intent)


def classify_notification_change(
    old: Notifications, new: Notifications
) -> list[GameEvent]:
    """Events for notification flags that were switched on."""
    return [
        event
        for flag, event in _NOTIFICATION_EVENT_MAP.items()
        if getattr(new, flag) and not getattr(old, flag)
    ]


def classify_roll_notifications(new: Notifications) -> list[GameEvent]:
    """Events announced by a throw: every flag the throw left raised."""
    return [event for flag, event in _NOTIFICATION_EVENT_MAP.items() if getattr(new, flag)]


def classify_state_change(old: GameState, new: GameState) -> list[GameEvent]:
    """Determine the game events implied by a snapshot change."""
    events: list[GameEvent] = []

    if not old.is_death_match and new.round_number == old.round_number and _burned_hundreds(old, new):
        events.append(GameEvent.HUNDREDS_BURNED)

    if new.phase != old.phase:
        if new.phase == GamePhase.ROLLING and old.phase == GamePhase.INITIAL_ROLL:
            events.append(GameEvent.TURN_ORDER_DECIDED)
        elif new.phase == GamePhase.ROLLING and old.phase == GamePhase.ROUND_END:
            events.append(GameEvent.NEW_ROUND_STARTED)
        elif new.phase in _PHASE_EVENT_MAP:
            events.append(_PHASE_EVENT_MAP[new.phase])
        return events

    # A death match that restarts within the phase jumps back to the first entrant
    restarted = new.current_player_index < old.current_player_index or _roster_ids(new) != _roster_ids(old)
    if new.is_death_match and restarted:
        events.append(GameEvent.DEATH_MATCH_STARTED)
    elif new.current_player_index != old.current_player_index:
        events.append(GameEvent.TURN_ADVANCED)

    return events


def _roster_ids(state: GameState) -> tuple[str, ...]:
    return tuple(p.id for p in state.death_match_players)


def _burned_hundreds(old: GameState, new: GameState) -> bool:
    """A Hundred score in the main roster was revoked."""
    after = {p.id: p.score for p in new.players}
    return any(
        p.score is not None
        and p.score.kind == ScoreKind.HUNDRED
        and p.id in after
        and after[p.id] is None
        for p in old.players
    )
