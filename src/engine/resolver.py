"""
Match resolution for committed words.

Resolution is split in two: `resolve_match` works out everything a word does
(removals, score, bonuses, streaks, spawns, time) without touching the grid,
and `apply_match` then marks the removals. The removal set and score are
therefore fixed before any tile changes.
"""

import math
from typing import List, Optional, Sequence, Tuple

from .constants import (
    SCORES,
    MAX_WORD_LENGTH,
    WILD_COLOR,
    BOMB_COLOR,
    GOLD_MULTIPLIER,
    COLOR_MULTIPLIER,
    EXPLOSION_POINTS,
    GOLD_TIME_BONUS,
    COLOR_TIME_BONUS,
)
from .grid import in_bounds, neighbors, set_status, tile_at, word_from_path
from .models import Bonus, Coordinate, Difficulty, GameMode, Grid, MatchResult, SpawnType


def base_score(length: int) -> int:
    """Points for a word of the given length before bonuses."""
    return SCORES.get(length, SCORES[MAX_WORD_LENGTH])


def blast_targets(grid: Grid, path: Sequence[Coordinate]) -> List[Coordinate]:
    """
    Cells destroyed by the bombs in a path.

    Every bomb destroys its 8 neighbors, blocked tiles included, except cells
    that are part of the word or already removed. Overlapping blasts count a
    cell once.
    """
    size = len(grid)
    in_path = set(path)
    exploded: List[Coordinate] = []
    seen = set()

    for coord in path:
        if not tile_at(grid, coord).is_bomb:
            continue
        for n in neighbors(coord, size):
            if n in in_path or n in seen:
                continue
            if tile_at(grid, n).is_removed:
                continue
            seen.add(n)
            exploded.append(n)

    return exploded


def classify_bonus(grid: Grid, path: Sequence[Coordinate]) -> Optional[Bonus]:
    """GOLD if any wild tile is used, COLOR if all plain tiles share a color."""
    colors = [tile_at(grid, c).color for c in path]
    if WILD_COLOR in colors:
        return "GOLD"

    plain = {color for color in colors if color not in (WILD_COLOR, BOMB_COLOR)}
    if len(plain) == 1:
        return "COLOR"
    return None


def is_short_penalty(length: int, difficulty: Difficulty) -> bool:
    """Whether a word this short counts toward the blocked-tile streak."""
    if difficulty == "NORMAL":
        return length == 3
    if difficulty == "HARD":
        return length in (3, 4)
    return False


def next_streaks(
    length: int,
    difficulty: Difficulty,
    streak_short: int,
    streak_long: int,
) -> Tuple[int, int, List[SpawnType]]:
    """
    Advance the short/long word streaks.

    Returns the new (short, long) counters and the special tiles to queue.
    From the second word of a streak on, every word queues one tile.
    """
    spawns: List[SpawnType] = []

    if is_short_penalty(length, difficulty):
        streak_short += 1
        streak_long = 0
        if streak_short >= 2:
            spawns.append("BLOCKED")
    elif length >= 5:
        streak_long += 1
        streak_short = 0
        if streak_long >= 2:
            spawns.append("BOMB")
    else:
        streak_short = 0
        streak_long = 0

    return streak_short, streak_long, spawns


def time_bonus(length: int, level: int, bonus: Optional[Bonus]) -> int:
    """Seconds a word adds to the clock in timed mode."""
    factor = max(0.2, 1 - (level - 1) * 0.15)
    seconds = math.ceil(length * factor)
    if bonus == "GOLD":
        seconds += GOLD_TIME_BONUS
    elif bonus == "COLOR":
        seconds += COLOR_TIME_BONUS
    return seconds


def resolve_match(
    grid: Grid,
    path: Sequence[Coordinate],
    *,
    difficulty: Difficulty,
    mode: GameMode,
    level: int,
    streak_short: int = 0,
    streak_long: int = 0,
) -> MatchResult:
    """
    Work out the full effect of committing `path` as a word.

    The grid is only read. Call `apply_match` with the result to mark the
    removed tiles.
    """
    path = list(path)
    for coord in path:
        if not in_bounds(coord, len(grid)):
            raise ValueError(f"Path coordinate {tuple(coord)} is off the grid")

    word = word_from_path(grid, path)
    base = base_score(len(word))
    exploded = blast_targets(grid, path)
    bonus = classify_bonus(grid, path)

    multiplier = 1
    if bonus == "GOLD":
        multiplier = GOLD_MULTIPLIER
    elif bonus == "COLOR":
        multiplier = COLOR_MULTIPLIER

    explosion_points = len(exploded) * EXPLOSION_POINTS
    total = base * multiplier + explosion_points

    short, long_, spawns = next_streaks(len(word), difficulty, streak_short, streak_long)
    time_added = time_bonus(len(word), level, bonus) if mode == "TIMED" else 0

    return MatchResult(
        word=word,
        path=path,
        exploded=exploded,
        base_score=base,
        multiplier=multiplier,
        bonus=bonus,
        explosion_points=explosion_points,
        total=total,
        time_added=time_added,
        streak_short=short,
        streak_long=long_,
        spawns=spawns,
    )


def apply_match(grid: Grid, result: MatchResult) -> None:
    """Mark the word tiles MATCHED and the blast tiles EXPLODED."""
    set_status(grid, result.path, "MATCHED")
    set_status(grid, result.exploded, "EXPLODED")
