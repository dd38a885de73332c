"""
Mexico Game Engine.

Pure Python game logic with zero UI dependencies.
Handles dice scoring, die locking, special rolls, the pot, and death matches.
"""

from src.engine.base import (
    DicePair,
    DiePosition,
    GamePhase,
    NavigationTarget,
    Notifications,
    Score,
    ScoreKind,
)
from src.engine.models import GameState, Player
from src.engine.scoring import MexicoScoring
from src.engine.mexico import MexicoGame

__all__ = [
    # Data Classes
    "DicePair",
    "GameState",
    "Notifications",
    "Player",
    "Score",
    # Enums
    "DiePosition",
    "GamePhase",
    "NavigationTarget",
    "ScoreKind",
    # Engines
    "MexicoScoring",
    "MexicoGame",
]
