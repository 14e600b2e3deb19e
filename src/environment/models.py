"""
Pydantic models for the environment layer.

This module contains the data models (configuration, session state, snapshots,
results) used by the session orchestrator. The logic classes (GameSession,
Scheduler, AutoPlayer, leaderboards) remain in their respective files.
"""

import math
from typing import List, Optional, Literal
from pydantic import BaseModel, Field

from ..engine.constants import (
    STARTING_TARGET_SCORE,
    STARTING_TIME,
    LEVEL_TIME_BONUS,
)
from ..engine.data import DEFAULT_WORD_LIST
from ..engine.models import Coordinate, Difficulty, GameMode, MatchResult, SpawnType, Tile


# Type aliases
Screen = Literal["MENU", "GAME", "LEVEL_UP", "GAMEOVER", "LEADERBOARD"]
FeedbackKind = Literal["success", "gold", "error", ""]
FlyTarget = Literal["SCORE"]  # named anchors on the presentation layer


class SessionState(BaseModel):
    """Score, progression and streak counters for one game."""
    score: int = Field(default=0, ge=0)
    word_count: int = 0
    best_word: str = ""
    last_score_added: Optional[int] = None  # transient, cleared after feedback
    level: int = Field(default=1, ge=1)
    time_left: int = 0  # seconds, timed mode only
    target_score: int = STARTING_TARGET_SCORE
    streak_short: int = 0
    streak_long: int = 0

    @classmethod
    def fresh(cls, mode: GameMode) -> "SessionState":
        """State at the start of a game."""
        return cls(time_left=STARTING_TIME if mode == "TIMED" else 0)

    @property
    def reached_target(self) -> bool:
        return self.score >= self.target_score

    def record_match(self, result: MatchResult, mode: GameMode) -> None:
        """Fold a resolved word into the running totals."""
        self.score += result.total
        self.word_count += 1
        if len(result.word) > len(self.best_word):
            self.best_word = result.word
        self.last_score_added = result.total
        self.streak_short = result.streak_short
        self.streak_long = result.streak_long
        if mode == "TIMED":
            self.time_left += result.time_added

    def advance_level(self, mode: GameMode) -> None:
        """Move to the next level. The score carries over."""
        self.level += 1
        self.target_score = math.floor(self.target_score * 1.5) + 500
        if mode == "TIMED":
            self.time_left += LEVEL_TIME_BONUS


class Feedback(BaseModel):
    """Transient banner for the presentation layer."""
    text: str = ""
    kind: FeedbackKind = ""


class FlyingTile(BaseModel):
    """A matched tile animating from its cell to the score display."""
    id: str
    letter: str
    color: str
    source: Coordinate
    target: FlyTarget = "SCORE"


class HighScoreEntry(BaseModel):
    """A finished game on the leaderboard."""
    score: int
    best_word: str = ""
    timestamp: int  # milliseconds since the epoch
    level: Optional[int] = None  # timed mode only


class SessionSnapshot(BaseModel):
    """Everything the presentation layer may observe, detached from the session."""
    screen: Screen
    mode: GameMode
    difficulty: Difficulty
    state: SessionState
    grid: List[List[Tile]] = Field(default_factory=list)
    selection: List[Coordinate] = Field(default_factory=list)
    feedback: Feedback = Field(default_factory=Feedback)
    flying_tiles: List[FlyingTile] = Field(default_factory=list)
    spawn_queue: List[SpawnType] = Field(default_factory=list)
    animating: bool = False
    ready: bool = False
    is_high_score: bool = False
    end_reason: str = ""


class GameConfig(BaseModel):
    """Configuration for a headless game run."""
    mode: GameMode = "CASUAL"
    difficulty: Difficulty = "NORMAL"
    seed: Optional[int] = None
    dictionary_path: str = str(DEFAULT_WORD_LIST)
    leaderboard_path: Optional[str] = None
    max_moves: int = Field(default=200, ge=1)
    move_seconds: float = Field(default=3.0, ge=0)


class MoveRecord(BaseModel):
    """One word played during a run."""
    move_number: int
    level: int
    word: str
    path: List[Coordinate]
    score_added: int
    bonus: Optional[str] = None
    exploded: int = 0
    spawns: List[SpawnType] = Field(default_factory=list)
    time_left: int = 0


class GameResult(BaseModel):
    """Result of a complete headless run."""
    config: GameConfig
    end_reason: str = ""
    is_high_score: bool = False
    final_state: SessionState
    moves: List[MoveRecord] = Field(default_factory=list)
    final_grid: str = ""
    leaderboard: List[HighScoreEntry] = Field(default_factory=list)
    level_ups: int = 0
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
