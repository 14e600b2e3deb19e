"""Tile generation and the gravity/refill step."""

import logging
import random
from typing import Deque, List, Optional

from .constants import (
    GRID_SIZE,
    LETTER_POOL,
    TILE_COLORS,
    WILD_COLOR,
    BOMB_COLOR,
    BLOCKED_COLOR,
    BOMB_CHANCE,
    WILD_CHANCE,
)
from .models import GameMode, Grid, SpawnType, Tile

logger = logging.getLogger("wordfall")


class GridInvariantError(RuntimeError):
    """The grid reached a shape the refill algorithm should make impossible."""


def blocked_chance(level: int, mode: GameMode) -> float:
    """Probability that a generated tile is blocked."""
    if mode == "TIMED":
        return min(0.25, level * 0.03)
    return min(0.20, 0.04 + level * 0.01)


class TileGenerator:
    """
    Produces new tiles from a weighted probability model.

    Every random draw, tile ids included, comes from the injected
    random source so a seeded game is reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def _new_id(self) -> str:
        return f"{self.rng.getrandbits(48):012x}"

    def _letter(self) -> str:
        return self.rng.choice(LETTER_POOL)

    def blocked(self, is_new: bool = False) -> Tile:
        return Tile(id=self._new_id(), letter="", color=BLOCKED_COLOR,
                    is_new=is_new, is_blocked=True)

    def bomb(self, is_new: bool = False) -> Tile:
        return Tile(id=self._new_id(), letter=self._letter(), color=BOMB_COLOR,
                    is_new=is_new, is_bomb=True)

    def generate(
        self,
        level: int,
        mode: GameMode,
        is_new: bool = False,
        forced: Optional[SpawnType] = None,
    ) -> Tile:
        """Generate one tile, honoring a forced type if given."""
        if forced == "BLOCKED":
            return self.blocked(is_new)
        if forced == "BOMB":
            return self.bomb(is_new)

        chance = blocked_chance(level, mode)
        roll = self.rng.random()
        if roll < chance:
            return self.blocked(is_new)
        if roll < chance + BOMB_CHANCE:
            return self.bomb(is_new)

        if self.rng.random() < WILD_CHANCE:
            color = WILD_COLOR
        else:
            color = self.rng.choice(TILE_COLORS)
        return Tile(id=self._new_id(), letter=self._letter(), color=color, is_new=is_new)


def create_initial_grid(generator: TileGenerator, mode: GameMode, size: int = GRID_SIZE) -> Grid:
    """A fresh grid at level 1 with no entry animation and no forced tiles."""
    return [[generator.generate(1, mode) for _ in range(size)] for _ in range(size)]


def apply_gravity(
    grid: Grid,
    generator: TileGenerator,
    level: int,
    mode: GameMode,
    spawn_queue: Deque[SpawnType],
) -> Grid:
    """
    Drop surviving tiles down each column and refill from the top.

    Columns are processed left to right and new tiles top-down, each
    consuming the oldest queued special tile if any is pending. The grid is
    updated in place and returned.
    """
    size = len(grid)
    spawned = 0

    for c in range(size):
        survivors: List[Tile] = []
        for r in range(size):
            tile = grid[r][c]
            if not tile.is_removed:
                tile.is_new = False
                survivors.append(tile)

        needed = size - len(survivors)
        new_tiles = []
        for _ in range(needed):
            forced = spawn_queue.popleft() if spawn_queue else None
            new_tiles.append(generator.generate(level, mode, is_new=True, forced=forced))
        spawned += needed

        column = new_tiles + survivors
        if len(column) != size:
            raise GridInvariantError(f"Column {c} holds {len(column)} tiles after refill, expected {size}")
        for r in range(size):
            grid[r][c] = column[r]

    logger.debug("Refill spawned %d tiles (%d special tiles still queued)", spawned, len(spawn_queue))
    return grid
