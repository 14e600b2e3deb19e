"""Data models for the puzzle engine."""

from typing import List, Optional, Literal, NamedTuple
from pydantic import BaseModel, Field, model_validator


# Type aliases
TileStatus = Literal[
    "IDLE",
    "SELECTED",   # live path that can still grow into a word
    "VALID",      # live path spelling a submittable word
    "REJECT",     # live path that is no prefix of any word
    "INVALID",    # flashed after a failed submission
    "MATCHED",
    "EXPLODED",
]
GameMode = Literal["CASUAL", "TIMED"]
Difficulty = Literal["EASY", "NORMAL", "HARD"]
SpawnType = Literal["BLOCKED", "BOMB"]
Bonus = Literal["GOLD", "COLOR"]

# Tiles in these statuses are waiting to be removed by the next refill
REMOVAL_STATUSES = ("MATCHED", "EXPLODED")


class Coordinate(NamedTuple):
    """A cell address; row 0 is the top of the grid."""
    row: int
    col: int


class Tile(BaseModel):
    """A single letter tile on the grid."""
    id: str
    letter: str = Field("", pattern=r'^[A-Z]?$')
    color: str
    status: TileStatus = "IDLE"
    is_new: bool = False  # cosmetic: spawned by the last refill
    is_blocked: bool = False
    is_bomb: bool = False

    @model_validator(mode="after")
    def _check_kind(self) -> "Tile":
        if self.is_blocked and self.is_bomb:
            raise ValueError("A tile cannot be both blocked and a bomb")
        if self.is_blocked and self.letter:
            raise ValueError("Blocked tiles carry no letter")
        return self

    @property
    def is_removed(self) -> bool:
        """Whether the tile is pending removal."""
        return self.status in REMOVAL_STATUSES


Grid = List[List[Tile]]


class SelectionResult(BaseModel):
    """Outcome of a single input event on the grid."""
    accepted: bool
    code: str
    message: str = ""
    status: Optional[TileStatus] = None
    word: str = ""


class MatchResult(BaseModel):
    """Everything a committed word does to the board and the session."""
    word: str
    path: List[Coordinate]
    exploded: List[Coordinate] = Field(default_factory=list)
    base_score: int
    multiplier: int = 1
    bonus: Optional[Bonus] = None
    explosion_points: int = 0
    total: int
    time_added: int = 0
    streak_short: int = 0
    streak_long: int = 0
    spawns: List[SpawnType] = Field(default_factory=list)

    @property
    def feedback_text(self) -> str:
        """Short banner describing the match."""
        parts = [self.word]
        if self.time_added:
            parts.append(f"+{self.time_added}s")
        if self.exploded:
            parts.append("BOOM!")
        if self.bonus:
            parts.append(f"{self.bonus} BONUS!")
        return " ".join(parts)
