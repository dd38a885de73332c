"""
Mexico - Snapshot Models

Pydantic models that mirror the engine's GameState for observers.
Event payloads carry ``GameSnapshot.model_dump()`` so subscribers receive
plain data they cannot use to mutate the engine.
"""

from pydantic import BaseModel, Field

from src.engine.base import DicePair, Score
from src.engine.models import GameState, Player


class ScoreSnapshot(BaseModel):
    """Mirrors a Score."""

    kind: str
    value: int = 0
    drinks: int = 0
    numeric_value: int
    display_text: str

    model_config = {"from_attributes": True}

    @classmethod
    def from_score(cls, score: Score | None) -> "ScoreSnapshot | None":
        if score is None:
            return None
        return cls(
            kind=score.kind.name.lower(),
            value=score.value,
            drinks=score.drinks,
            numeric_value=score.numeric_value,
            display_text=score.display_text,
        )


def _dice(dice: DicePair | None) -> list[int] | None:
    return list(dice.values) if dice is not None else None


class PlayerSnapshot(BaseModel):
    """Mirrors a Player."""

    id: str
    name: str = Field(max_length=30)
    score: ScoreSnapshot | None = None
    throws_used: int = Field(default=0, ge=0)
    locked_die: int | None = None
    locked_position: int | None = None
    has_rolled: bool = False
    current_dice: list[int] | None = None
    previous_dice: list[int] | None = None
    initial_roll: int | None = None
    is_eliminated: bool = False

    model_config = {"from_attributes": True}

    @classmethod
    def from_player(cls, player: Player) -> "PlayerSnapshot":
        return cls(
            id=player.id,
            name=player.name,
            score=ScoreSnapshot.from_score(player.score),
            throws_used=player.throws_used,
            locked_die=player.locked_die,
            locked_position=player.locked_position.value if player.locked_position else None,
            has_rolled=player.has_rolled,
            current_dice=_dice(player.current_dice),
            previous_dice=_dice(player.previous_dice),
            initial_roll=player.initial_roll,
            is_eliminated=player.is_eliminated,
        )


class GameSnapshot(BaseModel):
    """Mirrors a GameState."""

    players: list[PlayerSnapshot] = Field(default_factory=list)
    current_player_index: int = 0
    pot: int = Field(default=0, ge=0)
    max_throws: int | None = None
    mexico_mode: bool = False
    phase: str = "setup"
    round_number: int = Field(default=1, ge=1)
    death_match_players: list[PlayerSnapshot] = Field(default_factory=list)
    loser_id: str | None = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_state(cls, state: GameState) -> "GameSnapshot":
        return cls(
            players=[PlayerSnapshot.from_player(p) for p in state.players],
            current_player_index=state.current_player_index,
            pot=state.pot,
            max_throws=state.max_throws,
            mexico_mode=state.mexico_mode,
            phase=state.phase.value,
            round_number=state.round_number,
            death_match_players=[PlayerSnapshot.from_player(p) for p in state.death_match_players],
            loser_id=state.loser_id,
        )
