"""
Mexico - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so a game
snapshot can be handed to observers without copying.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

MIN_FACE = 1
MAX_FACE = 6


class GamePhase(Enum):
    """Phases of a Mexico game."""
    SETUP = "setup"
    INITIAL_ROLL = "initial_roll"
    ROLLING = "rolling"
    ROUND_END = "round_end"
    DEATH_MATCH = "death_match"


class ScoreKind(Enum):
    """Outcome kinds of a two-dice roll."""
    NORMAL = auto()
    HUNDRED = auto()
    MEXICO = auto()    # 1-2
    SAND = auto()      # 2-3
    POINTING = auto()  # 1-3, void roll


class DiePosition(Enum):
    """Slot a locked die occupies."""
    FIRST = 1
    SECOND = 2


class NavigationTarget(Enum):
    """Top-level screen the presentation layer should show next."""
    INITIAL_ROLL = "initial_roll"
    GAME = "game"
    RESULT = "result"


MEXICO_VALUE = 10_000
SAND_VALUE = 0
POINTING_VALUE = -1


@dataclass(frozen=True)
class Score:
    """
    Finalized outcome of a two-dice roll.

    Use the factory classmethods rather than the constructor.

    Attributes:
        kind: Which outcome this is
        value: Normal score (10 x high + low) or the Hundred face
        drinks: Drinks added to the pot by a Hundred
    """
    kind: ScoreKind
    value: int = 0
    drinks: int = 0

    def __post_init__(self) -> None:
        if self.kind == ScoreKind.HUNDRED and not (MIN_FACE <= self.value <= MAX_FACE):
            raise ValueError(f"Hundred face must be between 1 and 6, got {self.value}.")

    @classmethod
    def normal(cls, value: int) -> "Score":
        return cls(kind=ScoreKind.NORMAL, value=value)

    @classmethod
    def hundred(cls, face: int) -> "Score":
        return cls(kind=ScoreKind.HUNDRED, value=face, drinks=face)

    @classmethod
    def mexico(cls) -> "Score":
        return cls(kind=ScoreKind.MEXICO)

    @classmethod
    def sand(cls) -> "Score":
        return cls(kind=ScoreKind.SAND)

    @classmethod
    def pointing(cls) -> "Score":
        return cls(kind=ScoreKind.POINTING)

    @property
    def numeric_value(self) -> int:
        """Value used to rank scores; Mexico beats everything, Sand loses to everything."""
        if self.kind == ScoreKind.NORMAL:
            return self.value
        if self.kind == ScoreKind.HUNDRED:
            return self.value * 100
        if self.kind == ScoreKind.MEXICO:
            return MEXICO_VALUE
        if self.kind == ScoreKind.SAND:
            return SAND_VALUE
        return POINTING_VALUE

    @property
    def display_text(self) -> str:
        if self.kind == ScoreKind.NORMAL:
            return str(self.value)
        if self.kind == ScoreKind.HUNDRED:
            return f"{self.value}00"
        if self.kind == ScoreKind.MEXICO:
            return "MEXICO!"
        if self.kind == ScoreKind.SAND:
            return "SAND!"
        return "POINTING"

    @property
    def is_comparable(self) -> bool:
        """Pointing is a void roll and never takes part in the loser computation."""
        return self.kind != ScoreKind.POINTING

    def __str__(self) -> str:
        return self.display_text


@dataclass(frozen=True)
class DicePair:
    """
    Immutable representation of a two-dice throw.

    Attributes:
        first: Face of the die in the first slot
        second: Face of the die in the second slot
    """
    first: int
    second: int

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in (self.first, self.second):
            if not isinstance(value, int) or not (MIN_FACE <= value <= MAX_FACE):
                raise ValueError(
                    f"Invalid die value {value}. Must be between {MIN_FACE} and {MAX_FACE}."
                )

    def __iter__(self):
        return iter((self.first, self.second))

    @property
    def values(self) -> tuple[int, int]:
        return (self.first, self.second)

    def face_at(self, position: DiePosition) -> int:
        return self.first if position == DiePosition.FIRST else self.second

    def matches(self, other: "DicePair | None") -> bool:
        """Same two faces in either orientation."""
        if other is None:
            return False
        return sorted(self.values) == sorted(other.values)

    def is_pair(self, a: int, b: int) -> bool:
        """True when this throw is the unordered pair {a, b}."""
        return sorted(self.values) == sorted((a, b))

    @classmethod
    def with_locked(cls, face: int, position: DiePosition, rolled: int) -> "DicePair":
        """Pair holding ``face`` in ``position`` and the freshly rolled die in the other slot."""
        if position == DiePosition.FIRST:
            return cls(first=face, second=rolled)
        return cls(first=rolled, second=face)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DicePair":
        """Create a DicePair from any two-item sequence."""
        if len(values) != 2:
            raise ValueError(f"A throw has exactly 2 dice, got {len(values)}.")
        return cls(first=values[0], second=values[1])


@dataclass(frozen=True)
class Notifications:
    """
    One-shot notification flags the presentation layer must dismiss.

    Attributes:
        pointing: A Pointing roll is awaiting acknowledgement
        mexico: A Mexico roll is awaiting acknowledgement
        sand: A Sand roll is awaiting acknowledgement
        duim: The latest throw repeated the one before it (informational)
    """
    pointing: bool = False
    mexico: bool = False
    sand: bool = False
    duim: bool = False

    @property
    def blocks_play(self) -> bool:
        """Special-roll popups suspend play until dismissed; Duim does not."""
        return self.pointing or self.mexico or self.sand
