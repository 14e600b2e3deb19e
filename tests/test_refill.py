"""Test tile generation and the gravity/refill step."""

import random
from collections import deque
from unittest.mock import patch

import pytest

from src.engine import TileGenerator, blocked_chance, create_initial_grid, apply_gravity, render_grid
from src.engine.constants import TILE_COLORS, WILD_COLOR, BOMB_COLOR, LETTER_POOL

from helpers import make_grid


FILLER = [
    "QZJXVW",
    "XJVKWQ",
    "ZQXWKJ",
    "VJKQZX",
    "QZJXVW",
    "JXVWQZ",
]


class TestBlockedChance:
    """Blocked tile probability by level and mode."""

    def test_timed(self):
        assert blocked_chance(1, "TIMED") == pytest.approx(0.03)
        assert blocked_chance(5, "TIMED") == pytest.approx(0.15)
        assert blocked_chance(9, "TIMED") == pytest.approx(0.25)
        assert blocked_chance(50, "TIMED") == pytest.approx(0.25)

    def test_casual(self):
        assert blocked_chance(1, "CASUAL") == pytest.approx(0.05)
        assert blocked_chance(10, "CASUAL") == pytest.approx(0.14)
        assert blocked_chance(30, "CASUAL") == pytest.approx(0.20)


class TestTileGenerator:
    """Weighted tile generation."""

    def setup_method(self):
        self.rng = random.Random(1)
        self.generator = TileGenerator(self.rng)

    def test_low_roll_is_blocked(self):
        with patch.object(self.rng, "random", side_effect=[0.01]):
            tile = self.generator.generate(1, "CASUAL")
        assert tile.is_blocked
        assert tile.letter == ""

    def test_roll_inside_bomb_band(self):
        """Bombs take the band just above the blocked chance."""
        with patch.object(self.rng, "random", side_effect=[0.10]):
            tile = self.generator.generate(1, "CASUAL")
        assert tile.is_bomb
        assert tile.color == BOMB_COLOR
        assert tile.letter in LETTER_POOL

    def test_wild_tile(self):
        with patch.object(self.rng, "random", side_effect=[0.5, 0.01]):
            tile = self.generator.generate(1, "CASUAL")
        assert tile.color == WILD_COLOR
        assert not tile.is_bomb and not tile.is_blocked

    def test_plain_tile(self):
        with patch.object(self.rng, "random", side_effect=[0.5, 0.5]):
            tile = self.generator.generate(1, "TIMED", is_new=True)
        assert tile.color in TILE_COLORS
        assert tile.letter in LETTER_POOL
        assert tile.is_new
        assert tile.status == "IDLE"

    def test_forced_types_skip_the_roll(self):
        with patch.object(self.rng, "random", side_effect=AssertionError("rolled")):
            assert self.generator.generate(1, "CASUAL", forced="BLOCKED").is_blocked
            assert self.generator.generate(1, "CASUAL", forced="BOMB").is_bomb

    def test_initial_grid(self):
        grid = create_initial_grid(self.generator, "CASUAL")
        assert len(grid) == 6
        assert all(len(row) == 6 for row in grid)
        tiles = [tile for row in grid for tile in row]
        assert not any(tile.is_new for tile in tiles)
        assert len({tile.id for tile in tiles}) == 36

    def test_seeded_generation_is_reproducible(self):
        a = create_initial_grid(TileGenerator(random.Random(42)), "TIMED")
        b = create_initial_grid(TileGenerator(random.Random(42)), "TIMED")
        assert render_grid(a) == render_grid(b)
        assert [t.id for row in a for t in row] == [t.id for row in b for t in row]


class TestApplyGravity:
    """Survivors fall, new tiles fill from the top."""

    def setup_method(self):
        self.rng = random.Random(3)
        self.generator = TileGenerator(self.rng)
        self.grid = make_grid(FILLER)
        for row in self.grid:
            for tile in row:
                tile.is_new = True
        self.grid[0][0].status = "MATCHED"
        self.grid[2][0].status = "MATCHED"
        self.grid[5][3].status = "EXPLODED"

    def refill(self, queue):
        with patch.object(self.rng, "random", return_value=0.9):
            return apply_gravity(self.grid, self.generator, 1, "CASUAL", queue)

    def test_columns_stay_full(self):
        self.refill(deque())
        assert len(self.grid) == 6
        assert all(len(row) == 6 for row in self.grid)
        assert not any(tile.is_removed for row in self.grid for tile in row)

    def test_survivors_keep_order_at_bottom(self):
        survivors = [self.grid[r][0].id for r in (1, 3, 4, 5)]
        shifted = [self.grid[r][3].id for r in range(5)]
        self.refill(deque())
        assert [self.grid[r][0].id for r in range(2, 6)] == survivors
        assert [self.grid[r][3].id for r in range(1, 6)] == shifted

    def test_new_flags(self):
        """Only tiles spawned by this refill are new."""
        self.refill(deque())
        assert self.grid[0][0].is_new and self.grid[1][0].is_new
        assert self.grid[0][3].is_new
        assert not self.grid[2][0].is_new
        assert not self.grid[0][1].is_new

    def test_spawn_queue_consumed_in_order(self):
        """Queued specials go to the first new tiles, left to right, top down."""
        queue = deque(["BLOCKED", "BOMB"])
        self.refill(queue)
        assert self.grid[0][0].is_blocked
        assert self.grid[1][0].is_bomb
        assert not self.grid[0][3].is_blocked and not self.grid[0][3].is_bomb
        assert len(queue) == 0

    def test_leftover_queue_waits(self):
        queue = deque(["BOMB", "BOMB", "BOMB", "BLOCKED"])
        self.refill(queue)
        assert self.grid[0][0].is_bomb
        assert self.grid[1][0].is_bomb
        assert self.grid[0][3].is_bomb
        assert list(queue) == ["BLOCKED"]

    def test_nothing_removed_changes_nothing(self):
        grid = make_grid(FILLER)
        before = render_grid(grid)
        apply_gravity(grid, self.generator, 1, "CASUAL", deque(["BOMB"]))
        assert render_grid(grid) == before
