"""
Mexico - Turn and Phase State Machine

Game Rules:
- 2-10 players; a single die decides the turn order (highest starts)
- Each turn a player throws two dice up to the round's throw cap
- The first player in turn order sets the cap to the throws they used
- A 1 or a 2 may be locked; only the other die is thrown again
- Mexico (1-2) puts 5 drinks in the pot and burns every other Hundred
- A Hundred (double) puts its face value in drinks into the pot
- Pointing (1-3) is void and gives the throw back
- Lowest score loses the round; ties play a death match among themselves

The engine holds one immutable GameState snapshot and replaces it whole on
every accepted intent. Intents that do not apply to the current snapshot are
ignored: they return False and leave everything untouched.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, ClassVar, Iterator

from src.engine.base import (
    DicePair,
    DiePosition,
    GamePhase,
    NavigationTarget,
    Notifications,
    Score,
    ScoreKind,
)
from src.engine.models import GameState, Player, lowest_scorers
from src.engine.scoring import MexicoScoring
from src.engine.validators import (
    validate_die_position,
    validate_die_value,
    validate_player_name,
    validate_roster_size,
)

logger = logging.getLogger(__name__)

DieSource = Callable[[], int]

_PLAYING_PHASES = frozenset({GamePhase.ROLLING, GamePhase.DEATH_MATCH})


class MexicoGame:
    """
    Single writer of the game snapshot.

    Besides the snapshot it keeps the transient observer surface: the
    rolling flag, the one-shot popup notifications and the navigation
    signal. The die source is injectable so tests can script every throw.
    """

    MIN_PLAYERS: ClassVar[int] = 2
    MAX_PLAYERS: ClassVar[int] = 10
    MAX_THROWS: ClassVar[int] = 3
    MEXICO_POT_BONUS: ClassVar[int] = MexicoScoring.MEXICO_POT_BONUS

    def __init__(
        self,
        die_source: DieSource | None = None,
        state: GameState | None = None,
    ) -> None:
        self._roll_die = die_source or MexicoScoring.roll_die
        self._state = state or GameState()
        self._notifications = Notifications()
        self._navigation: NavigationTarget | None = None
        self._is_rolling = False

    # -- Observer surface ------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def notifications(self) -> Notifications:
        return self._notifications

    @property
    def is_rolling(self) -> bool:
        return self._is_rolling

    @property
    def navigation(self) -> NavigationTarget | None:
        return self._navigation

    def consume_navigation(self) -> NavigationTarget | None:
        """Return the pending navigation signal and clear it."""
        target, self._navigation = self._navigation, None
        return target

    # -- Setup -----------------------------------------------------------

    def add_player(self, name: str) -> bool:
        state = self._state
        if state.phase != GamePhase.SETUP:
            return self._reject("add_player", "players can only join during setup")
        try:
            name = validate_player_name(name)
            validate_roster_size(len(state.players) + 1, max_count=self.MAX_PLAYERS)
        except ValueError as exc:
            return self._reject("add_player", str(exc))

        player = Player.create(name)
        self._state = replace(state, players=state.players + (player,))
        logger.debug("Player %s joined as %s", name, player.id)
        return True

    def remove_player(self, player_id: str) -> bool:
        state = self._state
        if state.phase != GamePhase.SETUP:
            return self._reject("remove_player", "players can only leave during setup")
        if state.find_player(player_id) is None:
            return self._reject("remove_player", f"unknown player {player_id}")

        self._state = replace(
            state, players=tuple(p for p in state.players if p.id != player_id)
        )
        return True

    def start_initial_roll(self) -> bool:
        state = self._state
        if state.phase != GamePhase.SETUP:
            return self._reject("start_initial_roll", f"phase is {state.phase.value}")
        try:
            validate_roster_size(
                len(state.players), min_count=self.MIN_PLAYERS, max_count=self.MAX_PLAYERS
            )
        except ValueError as exc:
            return self._reject("start_initial_roll", str(exc))

        self._state = replace(state, phase=GamePhase.INITIAL_ROLL, current_player_index=0)
        self._navigation = NavigationTarget.INITIAL_ROLL
        logger.info("Initial roll started with %d players", len(state.players))
        return True

    # -- Initial roll ----------------------------------------------------

    def perform_initial_roll(self) -> bool:
        state = self._state
        if state.phase != GamePhase.INITIAL_ROLL:
            return self._reject("perform_initial_roll", f"phase is {state.phase.value}")
        player = state.current_player
        if player is None or player.initial_roll is not None:
            return self._reject("perform_initial_roll", "current player already rolled")

        with self._rolling():
            value = self._draw()

        self._state = state.with_current_player(replace(player, initial_roll=value))
        logger.debug("%s rolled %d for the turn order", player.name, value)
        return True

    def next_initial_roll(self) -> bool:
        state = self._state
        if state.phase != GamePhase.INITIAL_ROLL:
            return self._reject("next_initial_roll", f"phase is {state.phase.value}")
        player = state.current_player
        if player is None or player.initial_roll is None:
            return self._reject("next_initial_roll", "current player has not rolled yet")

        next_index = state.current_player_index + 1
        if next_index >= len(state.players):
            self._determine_play_order()
        else:
            self._state = replace(state, current_player_index=next_index)
        return True

    def _determine_play_order(self) -> None:
        state = self._state
        # sorted() is stable, so equal rolls keep their registration order
        ordered = sorted(state.players, key=lambda p: -(p.initial_roll or 0))
        self._state = replace(
            state,
            players=tuple(p.reset_turn() for p in ordered),
            current_player_index=0,
            phase=GamePhase.ROLLING,
            max_throws=self.MAX_THROWS,
        )
        self._navigation = NavigationTarget.GAME
        logger.info("Turn order decided: %s", ", ".join(p.name for p in ordered))

    # -- Rolling ---------------------------------------------------------

    def roll_dice(self) -> bool:
        return self._roll("roll_dice")

    def roll_death_match_dice(self) -> bool:
        if self._state.phase != GamePhase.DEATH_MATCH:
            return self._reject("roll_death_match_dice", "no death match running")
        return self._roll("roll_death_match_dice")

    def _roll(self, intent: str) -> bool:
        state = self._state
        if state.phase not in _PLAYING_PHASES:
            return self._reject(intent, f"phase is {state.phase.value}")
        if self._notifications.blocks_play:
            return self._reject(intent, "a special roll awaits acknowledgement")
        player = state.current_player
        if player is None:
            return self._reject(intent, "no current player")
        if player.score is not None:
            return self._reject(intent, f"{player.name} already has a score")
        if state.max_throws is None or player.throws_used >= state.max_throws:
            return self._reject(intent, f"{player.name} has no throws left")

        with self._rolling():
            if player.has_lock:
                dice = DicePair.with_locked(
                    player.locked_die, player.locked_position, self._draw()
                )
            else:
                dice = DicePair(first=self._draw(), second=self._draw())

        is_duim = dice.matches(player.previous_dice)
        rolled = replace(
            player,
            current_dice=dice,
            previous_dice=dice,
            throws_used=player.throws_used + 1,
            has_rolled=True,
        )
        self._state = state.with_current_player(rolled)
        logger.debug(
            "%s threw %d-%d (throw %d of %d)",
            player.name, dice.first, dice.second, rolled.throws_used, state.max_throws,
        )

        # A repeat roll is only announced; it never opens a special-roll popup
        self._notifications = replace(self._notifications, duim=is_duim)
        if is_duim:
            return True

        kind = MexicoScoring.score_pair(dice).kind
        if kind == ScoreKind.POINTING:
            self._notifications = replace(self._notifications, pointing=True)
        elif kind == ScoreKind.MEXICO:
            self._notifications = replace(self._notifications, mexico=True)
        elif kind == ScoreKind.SAND:
            self._notifications = replace(self._notifications, sand=True)
        return True

    # -- Popups ----------------------------------------------------------

    def dismiss_pointing_popup(self) -> bool:
        if not self._notifications.pointing:
            return self._reject("dismiss_pointing_popup", "no Pointing popup open")
        self._notifications = replace(self._notifications, pointing=False)

        state = self._state
        player = state.current_player
        if player is not None:
            voided = replace(
                player.unlocked(),
                throws_used=max(0, player.throws_used - 1),
                current_dice=None,
            )
            self._state = state.with_current_player(voided)
            logger.debug("Pointing voided for %s", player.name)
        return True

    def dismiss_mexico_popup(self) -> bool:
        if not self._notifications.mexico:
            return self._reject("dismiss_mexico_popup", "no Mexico popup open")
        self._notifications = replace(self._notifications, mexico=False)
        return self._confirm("dismiss_mexico_popup")

    def dismiss_sand_popup(self) -> bool:
        if not self._notifications.sand:
            return self._reject("dismiss_sand_popup", "no Sand popup open")
        self._notifications = replace(self._notifications, sand=False)
        return self._confirm("dismiss_sand_popup")

    def dismiss_duim_popup(self) -> bool:
        if not self._notifications.duim:
            return self._reject("dismiss_duim_popup", "no Duim popup open")
        self._notifications = replace(self._notifications, duim=False)
        return True

    # -- Locking ---------------------------------------------------------

    def lock_die(self, face: int, position: DiePosition | int) -> bool:
        state = self._state
        if state.phase not in _PLAYING_PHASES:
            return self._reject("lock_die", f"phase is {state.phase.value}")
        if self._notifications.blocks_play:
            return self._reject("lock_die", "a special roll awaits acknowledgement")
        player = state.current_player
        if player is None or player.score is not None:
            return self._reject("lock_die", "no player is throwing")
        try:
            position = validate_die_position(position)
        except ValueError as exc:
            return self._reject("lock_die", str(exc))
        if not MexicoScoring.can_lock_die(face):
            return self._reject("lock_die", f"a {face} cannot be locked")
        if player.has_lock:
            return self._reject("lock_die", f"{player.name} already locked a die")
        if MexicoScoring.is_pointing_pair(player.current_dice):
            return self._reject("lock_die", "a Pointing throw is about to be voided")
        if player.current_dice is None or player.current_dice.face_at(position) != face:
            return self._reject("lock_die", f"no {face} in the {position.name.lower()} slot")

        self._state = state.with_current_player(
            replace(player, locked_die=face, locked_position=position)
        )
        return True

    def unlock_die(self) -> bool:
        state = self._state
        if state.phase not in _PLAYING_PHASES:
            return self._reject("unlock_die", f"phase is {state.phase.value}")
        player = state.current_player
        if player is None:
            return self._reject("unlock_die", "no current player")

        self._state = state.with_current_player(player.unlocked())
        return True

    # -- Scoring ---------------------------------------------------------

    def confirm_score(self) -> bool:
        if self._notifications.blocks_play:
            return self._reject("confirm_score", "a special roll awaits acknowledgement")
        return self._confirm("confirm_score")

    def _confirm(self, intent: str) -> bool:
        state = self._state
        if state.phase not in _PLAYING_PHASES:
            return self._reject(intent, f"phase is {state.phase.value}")
        player = state.current_player
        if player is None or not player.has_rolled or player.current_dice is None:
            return self._reject(intent, "nothing to confirm")
        if player.score is not None:
            return self._reject(intent, f"{player.name} already has a score")

        score = MexicoScoring.score_pair(player.current_dice)
        state = state.with_current_player(replace(player, score=score))
        if not state.is_death_match:
            state = self._apply_pot(state, player.id, score)
        if state.is_leader_turn:
            state = replace(state, max_throws=player.throws_used)

        self._state = state
        logger.debug("%s stands on %s", player.name, score.display_text)
        self._advance()
        return True

    def _apply_pot(self, state: GameState, scorer_id: str, score: Score) -> GameState:
        if score.kind == ScoreKind.MEXICO:
            players = tuple(
                replace(p, score=None)
                if p.id != scorer_id and p.score is not None and p.score.kind == ScoreKind.HUNDRED
                else p
                for p in state.players
            )
            burned = sum(1 for old, new in zip(state.players, players) if old is not new)
            if burned:
                logger.info("Mexico burned %d hundred(s)", burned)
            return replace(
                state,
                players=players,
                pot=state.pot + self.MEXICO_POT_BONUS,
                mexico_mode=True,
            )
        if score.kind == ScoreKind.HUNDRED:
            return replace(state, pot=state.pot + score.drinks)
        return state

    # -- Turn order ------------------------------------------------------

    def next_player(self) -> bool:
        state = self._state
        if state.phase not in _PLAYING_PHASES:
            return self._reject("next_player", f"phase is {state.phase.value}")
        if self._notifications.blocks_play:
            return self._reject("next_player", "a special roll awaits acknowledgement")
        self._advance()
        return True

    def next_death_match_player(self) -> bool:
        if self._state.phase != GamePhase.DEATH_MATCH:
            return self._reject("next_death_match_player", "no death match running")
        return self.next_player()

    def _advance(self) -> None:
        self._notifications = Notifications()
        state = self._state
        next_index = state.current_player_index + 1
        if next_index < len(state.active_players):
            self._state = replace(state, current_player_index=next_index)
        elif state.is_death_match:
            self._finish_death_match()
        else:
            self._end_round()

    def _end_round(self) -> None:
        losers = self._state.lowest_score_players()
        if len(losers) > 1:
            self._start_death_match(losers)
        else:
            self._finish_round(losers[0] if losers else None)

    def _start_death_match(self, entrants: tuple[Player, ...]) -> None:
        self._state = replace(
            self._state,
            phase=GamePhase.DEATH_MATCH,
            death_match_players=tuple(p.reset_turn() for p in entrants),
            current_player_index=0,
            max_throws=self.MAX_THROWS,
        )
        logger.info("Death match: %s", ", ".join(p.name for p in entrants))

    def _finish_death_match(self) -> None:
        state = self._state
        entrants = state.death_match_players
        results = {p.id: p.score for p in entrants}
        self._state = replace(
            state,
            players=tuple(
                replace(p, score=results[p.id]) if p.id in results else p
                for p in state.players
            ),
        )

        # Nobody stood on a real score: the same entrants go again
        losers = lowest_scorers(entrants) or entrants
        if len(losers) > 1:
            self._start_death_match(losers)
        else:
            self._finish_round(self._state.find_player(losers[0].id))

    def _finish_round(self, loser: Player | None) -> None:
        self._state = replace(
            self._state,
            phase=GamePhase.ROUND_END,
            current_player_index=0,
            death_match_players=(),
            loser_id=loser.id if loser else None,
        )
        self._navigation = NavigationTarget.RESULT
        if loser is None:
            logger.info("Round %d ended without a loser", self._state.round_number)
        else:
            logger.info(
                "Round %d lost by %s (pot: %d)",
                self._state.round_number, loser.name, self._state.pot,
            )

    def start_new_round(self) -> bool:
        state = self._state
        if state.phase != GamePhase.ROUND_END:
            return self._reject("start_new_round", f"phase is {state.phase.value}")

        self._state = replace(
            state,
            players=tuple(p.reset_for_new_round() for p in state.players),
            current_player_index=0,
            pot=0,
            max_throws=self.MAX_THROWS,
            mexico_mode=False,
            phase=GamePhase.ROLLING,
            round_number=state.round_number + 1,
            death_match_players=(),
            loser_id=None,
        )
        self._notifications = Notifications()
        self._navigation = NavigationTarget.GAME
        logger.info("Round %d started", self._state.round_number)
        return True

    # -- Helpers ---------------------------------------------------------

    def _draw(self) -> int:
        return validate_die_value(self._roll_die())

    @contextmanager
    def _rolling(self) -> Iterator[None]:
        self._is_rolling = True
        try:
            yield
        finally:
            self._is_rolling = False

    def _reject(self, intent: str, reason: str) -> bool:
        logger.debug("Ignoring %s: %s", intent, reason)
        return False
