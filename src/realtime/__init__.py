"""
Mexico Game Events.

Observer subscriptions, event classification and snapshot publishing.
"""

from src.realtime.events import EventPayload, GameEvent
from src.realtime.snapshots import GameSnapshot, PlayerSnapshot, ScoreSnapshot
from src.realtime.subscriptions import SnapshotChannel
from src.realtime.sync_manager import GameSession, create_session

__all__ = [
    "EventPayload",
    "GameEvent",
    "GameSession",
    "GameSnapshot",
    "PlayerSnapshot",
    "ScoreSnapshot",
    "SnapshotChannel",
    "create_session",
]
