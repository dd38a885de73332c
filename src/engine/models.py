"""
Mexico - Game State Models

Player and GameState snapshots. Both are frozen dataclasses: every change
produces a new instance, so a snapshot handed to an observer never changes
under its feet.
"""

import uuid
from dataclasses import dataclass, field, replace

from src.engine.base import DicePair, DiePosition, GamePhase, Score, ScoreKind


@dataclass(frozen=True)
class Player:
    """
    A player's identity plus their state for the current turn.

    Attributes:
        id: Opaque unique identifier
        name: Display name
        score: Finalized score for this round, if any
        throws_used: Throws taken this turn
        locked_die: Face of the locked die, if any
        locked_position: Slot the locked die occupies
        has_rolled: Whether the player rolled at least once this turn
        current_dice: Most recent throw (None before rolling or after Pointing)
        previous_dice: Throw before that, for repeat-roll detection
        initial_roll: Die rolled to decide the turn order
        is_eliminated: Reserved; cleared only when a new round starts
    """
    id: str
    name: str
    score: Score | None = None
    throws_used: int = 0
    locked_die: int | None = None
    locked_position: DiePosition | None = None
    has_rolled: bool = False
    current_dice: DicePair | None = None
    previous_dice: DicePair | None = None
    initial_roll: int | None = None
    is_eliminated: bool = False

    @classmethod
    def create(cls, name: str) -> "Player":
        """Register a new player with a fresh id."""
        return cls(id=uuid.uuid4().hex, name=name)

    @property
    def has_lock(self) -> bool:
        return self.locked_die is not None and self.locked_position is not None

    @property
    def has_real_score(self) -> bool:
        """Holds a score that takes part in the loser computation."""
        return self.score is not None and self.score.is_comparable

    def reset_turn(self) -> "Player":
        """Blank turn state; elimination flag and initial roll are kept."""
        return replace(
            self,
            score=None,
            throws_used=0,
            locked_die=None,
            locked_position=None,
            has_rolled=False,
            current_dice=None,
            previous_dice=None,
        )

    def reset_for_new_round(self) -> "Player":
        return replace(self.reset_turn(), is_eliminated=False)

    def unlocked(self) -> "Player":
        return replace(self, locked_die=None, locked_position=None)


def lowest_scorers(players: tuple[Player, ...]) -> tuple[Player, ...]:
    """Players sharing the lowest real score; Pointing and unscored players are ignored."""
    scored = [p for p in players if p.has_real_score]
    if not scored:
        return ()
    lowest = min(p.score.numeric_value for p in scored)
    return tuple(p for p in scored if p.score.numeric_value == lowest)


@dataclass(frozen=True)
class GameState:
    """
    Complete snapshot of a game.

    Attributes:
        players: Main roster in turn order
        current_player_index: Index into the active roster
        pot: Drinks accumulated this round
        max_throws: Throw cap for this round (None until the turn order is set)
        mexico_mode: Whether a Mexico was confirmed this round
        phase: Current game phase
        round_number: 1-based round counter
        death_match_players: Roster of the running death match
        loser_id: The round's loser once the round has ended
    """
    players: tuple[Player, ...] = field(default_factory=tuple)
    current_player_index: int = 0
    pot: int = 0
    max_throws: int | None = None
    mexico_mode: bool = False
    phase: GamePhase = GamePhase.SETUP
    round_number: int = 1
    death_match_players: tuple[Player, ...] = field(default_factory=tuple)
    loser_id: str | None = None

    def __post_init__(self) -> None:
        if self.pot < 0:
            raise ValueError(f"Pot cannot be negative, got {self.pot}.")

    @property
    def is_death_match(self) -> bool:
        return self.phase == GamePhase.DEATH_MATCH

    @property
    def active_players(self) -> tuple[Player, ...]:
        """The roster the current phase addresses."""
        if self.is_death_match:
            return self.death_match_players
        return self.players

    @property
    def current_player(self) -> Player | None:
        roster = self.active_players
        if 0 <= self.current_player_index < len(roster):
            return roster[self.current_player_index]
        return None

    @property
    def is_leader_turn(self) -> bool:
        """The first player in turn order sets the throw cap."""
        return self.current_player_index == 0

    def with_active_players(self, roster: tuple[Player, ...]) -> "GameState":
        """Replace whichever roster the current phase addresses."""
        if self.is_death_match:
            return replace(self, death_match_players=roster)
        return replace(self, players=roster)

    def with_current_player(self, player: Player) -> "GameState":
        """Replace the current player in the active roster."""
        roster = tuple(
            player if i == self.current_player_index else p
            for i, p in enumerate(self.active_players)
        )
        return self.with_active_players(roster)

    def find_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def lowest_score_players(self, roster: tuple[Player, ...] | None = None) -> tuple[Player, ...]:
        """Players tied for the lowest real score in ``roster`` (main roster by default)."""
        return lowest_scorers(self.players if roster is None else roster)

    @property
    def loser(self) -> Player | None:
        if self.loser_id is None:
            return None
        return self.find_player(self.loser_id)

    @property
    def losers(self) -> tuple[Player, ...]:
        """The decided loser, or the current lowest scorers while the round is open."""
        if self.loser is not None:
            return (self.loser,)
        return self.lowest_score_players()

    @property
    def has_sand_loser(self) -> bool:
        return any(
            p.score is not None and p.score.kind == ScoreKind.SAND for p in self.losers
        )

    @property
    def standings(self) -> tuple[Player, ...]:
        """Main roster from lowest to highest score; Pointing and unscored players last."""
        return tuple(sorted(
            self.players,
            key=lambda p: (not p.has_real_score, p.score.numeric_value if p.has_real_score else 0),
        ))
