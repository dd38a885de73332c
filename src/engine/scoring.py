"""
Mexico - Scoring Rules

Maps a two-dice throw to its outcome.

Scoring Rules (checked in this order):
- 1-2 (either order) = Mexico, the best possible throw
- 2-3 (either order) = Sand, the worst possible throw
- 1-3 (either order) = Pointing, a void throw that does not count
- Doubles = Hundreds (4-4 = 400), worth face value in drinks for the pot
- Anything else = 10 x high die + low die (6-4 = 64)

Only dice showing 1 or 2 may be locked, keeping a path open to Mexico.

All methods are stateless class methods.
"""

import random
from typing import ClassVar

from src.engine.base import MAX_FACE, MIN_FACE, DicePair, Score, ScoreKind


class MexicoScoring:
    """
    Stateless rule table for Mexico.

    All methods are class methods operating on immutable data.
    """

    MEXICO_PAIR: ClassVar[tuple[int, int]] = (1, 2)
    SAND_PAIR: ClassVar[tuple[int, int]] = (2, 3)
    POINTING_PAIR: ClassVar[tuple[int, int]] = (1, 3)
    LOCKABLE_FACES: ClassVar[frozenset[int]] = frozenset({1, 2})
    SPECIAL_KINDS: ClassVar[frozenset[ScoreKind]] = frozenset(
        {ScoreKind.MEXICO, ScoreKind.SAND, ScoreKind.POINTING}
    )
    MEXICO_POT_BONUS: ClassVar[int] = 5

    @classmethod
    def roll_die(cls) -> int:
        """Roll a single D6."""
        return random.randint(MIN_FACE, MAX_FACE)

    @classmethod
    def roll_dice(cls) -> DicePair:
        """Roll both dice."""
        return DicePair(first=cls.roll_die(), second=cls.roll_die())

    @classmethod
    def score(cls, die_a: int, die_b: int) -> Score:
        """
        Score a throw.

        Args:
            die_a: Face of one die (1-6)
            die_b: Face of the other die (1-6)

        Returns:
            The Score for the unordered pair; score(a, b) == score(b, a)

        Raises:
            ValueError: If either face is outside 1-6
        """
        dice = DicePair(first=die_a, second=die_b)

        if dice.is_pair(*cls.MEXICO_PAIR):
            return Score.mexico()
        if dice.is_pair(*cls.SAND_PAIR):
            return Score.sand()
        if dice.is_pair(*cls.POINTING_PAIR):
            return Score.pointing()
        if die_a == die_b:
            return Score.hundred(die_a)

        return Score.normal(max(die_a, die_b) * 10 + min(die_a, die_b))

    @classmethod
    def score_pair(cls, dice: DicePair) -> Score:
        """Score a DicePair."""
        return cls.score(dice.first, dice.second)

    @classmethod
    def can_lock_die(cls, face: int) -> bool:
        """Only a 1 or a 2 may be locked."""
        return face in cls.LOCKABLE_FACES

    @classmethod
    def is_special_roll(cls, score: Score) -> bool:
        """Mexico, Sand and Pointing interrupt play with a popup."""
        return score.kind in cls.SPECIAL_KINDS

    @classmethod
    def is_pointing_pair(cls, dice: DicePair | None) -> bool:
        return dice is not None and dice.is_pair(*cls.POINTING_PAIR)

    @classmethod
    def describe(cls, score: Score) -> str:
        """Human-readable description of a score and its drink consequence."""
        if score.kind == ScoreKind.NORMAL:
            return f"Score: {score.value}"
        if score.kind == ScoreKind.HUNDRED:
            return f"{score.display_text} ({score.drinks} drinks)"
        if score.kind == ScoreKind.MEXICO:
            return f"MEXICO! ({cls.MEXICO_POT_BONUS} drinks into the pot, hundreds burned)"
        if score.kind == ScoreKind.SAND:
            return "SAND! (Half a glass, straight away)"
        return "POINTING! (Point at the other players)"

    @classmethod
    def loser_penalty(cls, pot: int, has_sand: bool) -> str:
        """What the round's loser has to drink."""
        if has_sand:
            return "Half a glass, straight away"
        return f"{pot} drinks from the pot"
