"""
Mexico - Scoring Rules Tests

Tests for the rule table, die locking and score descriptions.
"""

import itertools

import pytest

from src.engine.base import DicePair, Score, ScoreKind
from src.engine.scoring import MexicoScoring

ALL_PAIRS = list(itertools.product(range(1, 7), repeat=2))


# === Score ===


class TestScore:
    """Tests for MexicoScoring.score()."""

    @pytest.mark.parametrize("a,b", ALL_PAIRS)
    def test_symmetric(self, a, b):
        assert MexicoScoring.score(a, b) == MexicoScoring.score(b, a)

    def test_special_rolls(self, special_rolls):
        for name, (dice, kind) in special_rolls.items():
            assert MexicoScoring.score(*dice).kind == kind, name

    @pytest.mark.parametrize("face", [1, 2, 3, 4, 5, 6])
    def test_doubles_are_hundreds(self, face):
        score = MexicoScoring.score(face, face)
        assert score == Score.hundred(face)
        assert score.drinks == face
        assert score.numeric_value == face * 100

    @pytest.mark.parametrize("a,b,expected", [
        (6, 4, 64),
        (4, 6, 64),
        (1, 4, 41),
        (5, 3, 53),
        (6, 5, 65),
        (2, 6, 62),
    ])
    def test_normal_high_die_first(self, a, b, expected):
        score = MexicoScoring.score(a, b)
        assert score.kind == ScoreKind.NORMAL
        assert score.numeric_value == expected

    def test_each_special_kind_has_exactly_one_pair(self):
        unordered = {tuple(sorted(p)) for p in ALL_PAIRS}
        kinds = [MexicoScoring.score(*pair).kind for pair in unordered]
        assert len(unordered) == 21
        assert kinds.count(ScoreKind.MEXICO) == 1
        assert kinds.count(ScoreKind.SAND) == 1
        assert kinds.count(ScoreKind.POINTING) == 1
        assert kinds.count(ScoreKind.HUNDRED) == 6
        assert kinds.count(ScoreKind.NORMAL) == 12

    def test_mexico_beats_everything(self):
        mexico = MexicoScoring.score(1, 2).numeric_value
        others = [MexicoScoring.score(a, b).numeric_value for a, b in ALL_PAIRS if {a, b} != {1, 2}]
        assert all(mexico > value for value in others)

    def test_sand_below_every_normal_and_hundred(self):
        sand = MexicoScoring.score(2, 3).numeric_value
        ranked = [
            MexicoScoring.score(a, b)
            for a, b in ALL_PAIRS
            if MexicoScoring.score(a, b).kind in (ScoreKind.NORMAL, ScoreKind.HUNDRED)
        ]
        assert all(sand < s.numeric_value for s in ranked)

    def test_invalid_face_raises(self):
        with pytest.raises(ValueError, match="Invalid die value 7"):
            MexicoScoring.score(7, 1)

    def test_score_pair(self):
        assert MexicoScoring.score_pair(DicePair(3, 1)) == Score.pointing()


# === Locking ===


class TestCanLockDie:
    """Tests for MexicoScoring.can_lock_die()."""

    @pytest.mark.parametrize("face", [1, 2])
    def test_one_and_two_lockable(self, face):
        assert MexicoScoring.can_lock_die(face) is True

    @pytest.mark.parametrize("face", [3, 4, 5, 6])
    def test_other_faces_not_lockable(self, face):
        assert MexicoScoring.can_lock_die(face) is False


# === Helpers ===


class TestSpecialRollHelpers:
    """Tests for special roll classification helpers."""

    @pytest.mark.parametrize("score,expected", [
        (Score.mexico(), True),
        (Score.sand(), True),
        (Score.pointing(), True),
        (Score.hundred(3), False),
        (Score.normal(54), False),
    ])
    def test_is_special_roll(self, score, expected):
        assert MexicoScoring.is_special_roll(score) is expected

    def test_is_pointing_pair(self):
        assert MexicoScoring.is_pointing_pair(DicePair(3, 1)) is True
        assert MexicoScoring.is_pointing_pair(DicePair(1, 2)) is False
        assert MexicoScoring.is_pointing_pair(None) is False


class TestDescriptions:
    """Tests for human-readable score text."""

    def test_describe_hundred(self):
        assert MexicoScoring.describe(Score.hundred(4)) == "400 (4 drinks)"

    def test_describe_normal(self):
        assert MexicoScoring.describe(Score.normal(64)) == "Score: 64"

    def test_describe_mexico_mentions_pot(self):
        assert "5 drinks" in MexicoScoring.describe(Score.mexico())

    def test_loser_penalty_from_pot(self):
        assert MexicoScoring.loser_penalty(7, has_sand=False) == "7 drinks from the pot"

    def test_loser_penalty_sand(self):
        assert MexicoScoring.loser_penalty(7, has_sand=True) == "Half a glass, straight away"


class TestRollDice:
    """Tests for the default die source."""

    def test_value_range(self):
        for _ in range(200):
            assert 1 <= MexicoScoring.roll_die() <= 6

    def test_roll_dice_returns_pair(self):
        assert isinstance(MexicoScoring.roll_dice(), DicePair)

    def test_distribution(self):
        assert {MexicoScoring.roll_die() for _ in range(1000)} == {1, 2, 3, 4, 5, 6}
