"""
Mexico - Game Session Manager

High-level manager that ties the game engine to its observers. Every intent
goes through the session, which applies it to the engine, classifies what
changed and publishes the resulting events with a fresh snapshot.
"""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Any, Callable

from src.config.settings import Settings, get_settings
from src.engine.base import NavigationTarget, Notifications
from src.engine.mexico import DieSource, MexicoGame
from src.engine.models import GameState
from src.realtime.events import (
    EventPayload,
    GameEvent,
    classify_intent,
    classify_notification_change,
    classify_roll_notifications,
    classify_state_change,
)
from src.realtime.snapshots import GameSnapshot
from src.realtime.subscriptions import SnapshotChannel

logger = logging.getLogger(__name__)

INTENTS = frozenset({
    "add_player",
    "remove_player",
    "start_initial_roll",
    "perform_initial_roll",
    "next_initial_roll",
    "roll_dice",
    "lock_die",
    "unlock_die",
    "confirm_score",
    "next_player",
    "dismiss_pointing_popup",
    "dismiss_mexico_popup",
    "dismiss_sand_popup",
    "dismiss_duim_popup",
    "roll_death_match_dice",
    "next_death_match_player",
    "start_new_round",
})


# Throws report every raised flag, not only newly raised ones
_ROLL_INTENTS = frozenset({"roll_dice", "roll_death_match_dice"})


class GameSession:
    """Coordinates one game and the observers watching it.

    Wraps MexicoGame with event classification and snapshot publishing.
    Observers subscribe once and receive an EventPayload per event.
    """

    def __init__(self, game: MexicoGame | None = None) -> None:
        self._game = game or MexicoGame()
        self._channel = SnapshotChannel()

    @property
    def game(self) -> MexicoGame:
        return self._game

    @property
    def state(self) -> GameState:
        return self._game.state

    @property
    def notifications(self) -> Notifications:
        return self._game.notifications

    @property
    def is_rolling(self) -> bool:
        return self._game.is_rolling

    def consume_navigation(self) -> NavigationTarget | None:
        return self._game.consume_navigation()

    def subscribe(self, on_event: Callable[[EventPayload], None]) -> Callable[[], None]:
        """Subscribe to game events; returns the unsubscribe function."""
        return self._channel.subscribe(on_event)

    def get_snapshot(self) -> GameSnapshot:
        """Serializable copy of the current game state."""
        return GameSnapshot.from_state(self._game.state)

    def dispatch(self, intent: str, *args: Any, **kwargs: Any) -> bool:
        """Apply an intent and publish the events it caused.

        Args:
            intent: Name of a MexicoGame intent, e.g. ``"roll_dice"``.
            *args, **kwargs: Forwarded to the intent.

        Returns:
            True if the engine accepted the intent.

        Raises:
            ValueError: If ``intent`` is not a known intent name.
        """
        if intent not in INTENTS:
            raise ValueError(f"Unknown intent {intent!r}.")

        old_state = self._game.state
        old_notifications = self._game.notifications
        accepted = getattr(self._game, intent)(*args, **kwargs)
        if not accepted:
            return False

        events = self._collect_events(intent, old_state, old_notifications)
        player_id = self._actor_id(intent, old_state, args)
        data = {
            "intent": intent,
            "snapshot": self.get_snapshot().model_dump(),
            "notifications": asdict(self._game.notifications),
        }
        for event in events:
            self._channel.publish(EventPayload(event=event, player_id=player_id, data=data))
        logger.debug("%s -> %s", intent, ", ".join(e.name for e in events) or "no events")
        return True

    def shutdown(self) -> None:
        """Drop every subscriber."""
        self._channel.unsubscribe_all()

    def _collect_events(
        self,
        intent: str,
        old_state: GameState,
        old_notifications: Notifications,
    ) -> list[GameEvent]:
        candidates: list[GameEvent] = []
        primary = classify_intent(intent)
        if primary is not None:
            candidates.append(primary)
        if intent in _ROLL_INTENTS:
            candidates.extend(classify_roll_notifications(self._game.notifications))
        else:
            candidates.extend(classify_notification_change(old_notifications, self._game.notifications))
        candidates.extend(classify_state_change(old_state, self._game.state))

        # Keep first occurrence, preserve order
        return list(dict.fromkeys(candidates))

    def _actor_id(self, intent: str, old_state: GameState, args: tuple[Any, ...]) -> str | None:
        if intent == "add_player":
            return self._game.state.players[-1].id
        if intent == "remove_player":
            return args[0] if args else None
        player = old_state.current_player
        return player.id if player is not None else None


# -- Module-level convenience functions ----------------------------------


def make_die_source(settings: Settings | None = None) -> DieSource | None:
    """Seeded die source when ``dice_seed`` is configured, else None (engine default)."""
    settings = settings or get_settings()
    if settings.dice_seed is None:
        return None
    rng = random.Random(settings.dice_seed)
    return lambda: rng.randint(1, 6)


def create_session(settings: Settings | None = None) -> GameSession:
    """Create a new game session configured from settings.

    Convenience function for use in the UI layer.
    """
    return GameSession(MexicoGame(die_source=make_die_source(settings)))
