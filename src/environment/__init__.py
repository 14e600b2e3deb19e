"""Session layer for Wordfall: orchestration, timers, leaderboards, autoplay."""

from .models import (
    Screen,
    FeedbackKind,
    FlyTarget,
    SessionState,
    Feedback,
    FlyingTile,
    HighScoreEntry,
    SessionSnapshot,
    GameConfig,
    MoveRecord,
    GameResult,
)
from .scheduler import Scheduler, ScheduledCall
from .leaderboard import Leaderboard, MemoryLeaderboard, JsonLeaderboard
from .session import GameSession
from .autoplayer import AutoPlayer

__all__ = [
    "Screen",
    "FeedbackKind",
    "FlyTarget",
    "SessionState",
    "Feedback",
    "FlyingTile",
    "HighScoreEntry",
    "SessionSnapshot",
    "GameConfig",
    "MoveRecord",
    "GameResult",
    "Scheduler",
    "ScheduledCall",
    "Leaderboard",
    "MemoryLeaderboard",
    "JsonLeaderboard",
    "GameSession",
    "AutoPlayer",
]
