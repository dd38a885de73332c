"""
Mexico - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from typing import Callable

import pytest

from src.engine.base import ScoreKind
from src.engine.mexico import MexicoGame


class ScriptedDice:
    """Die source that returns pre-programmed faces in order."""

    def __init__(self, *faces: int) -> None:
        self._faces = list(faces)
        self.calls = 0

    def push(self, *faces: int) -> None:
        self._faces.extend(faces)

    @property
    def remaining(self) -> int:
        return len(self._faces)

    def __call__(self) -> int:
        if not self._faces:
            raise AssertionError("Scripted die source ran out of faces")
        self.calls += 1
        return self._faces.pop(0)


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def special_rolls() -> dict[str, tuple[tuple[int, int], ScoreKind]]:
    """
    The three special throws in both orientations.

    Returns:
        Dict mapping name to (dice, expected kind)
    """
    return {
        "mexico": ((1, 2), ScoreKind.MEXICO),
        "mexico_reversed": ((2, 1), ScoreKind.MEXICO),
        "sand": ((2, 3), ScoreKind.SAND),
        "sand_reversed": ((3, 2), ScoreKind.SAND),
        "pointing": ((1, 3), ScoreKind.POINTING),
        "pointing_reversed": ((3, 1), ScoreKind.POINTING),
    }


# =============================================================================
# GAME FIXTURES
# =============================================================================

@pytest.fixture
def dice() -> ScriptedDice:
    """Empty scripted die source; push faces before each throw."""
    return ScriptedDice()


@pytest.fixture
def game(dice: ScriptedDice) -> MexicoGame:
    """Fresh game in the setup phase using the scripted die source."""
    return MexicoGame(die_source=dice)


@pytest.fixture
def make_playing_game(dice: ScriptedDice) -> Callable[..., MexicoGame]:
    """
    Factory for a game that has finished the initial roll.

    Players roll 6, 5, 4, ... in registration order, so the turn order
    equals the registration order.
    """
    def _make(*names: str) -> MexicoGame:
        game = MexicoGame(die_source=dice)
        for name in names:
            game.add_player(name)
        game.start_initial_roll()
        for face in range(6, 6 - len(names), -1):
            dice.push(face)
            game.perform_initial_roll()
            game.next_initial_roll()
        game.consume_navigation()
        dice.calls = 0
        return game

    return _make


@pytest.fixture
def two_player_game(make_playing_game) -> MexicoGame:
    """Ann and Bob, Ann throws first."""
    return make_playing_game("Ann", "Bob")


@pytest.fixture
def three_player_game(make_playing_game) -> MexicoGame:
    """Ann, Bob and Cas, in that turn order."""
    return make_playing_game("Ann", "Bob", "Cas")
