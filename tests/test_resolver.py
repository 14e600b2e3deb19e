"""Test match resolution: scoring, bonuses, bombs and streaks."""

import pytest

from src.engine import Coordinate, MatchResult, resolve_match, apply_match
from src.engine.resolver import base_score, blast_targets, classify_bonus, next_streaks, time_bonus

from helpers import make_grid


C = Coordinate

FILLER = [
    "QZJXVW",
    "XJVKWQ",
    "ZQXWKJ",
    "VJKQZX",
    "QZJXVW",
    "JXVWQZ",
]


def row_path(row, start, length):
    return [C(row, c) for c in range(start, start + length)]


def resolve(grid, path, difficulty="NORMAL", mode="CASUAL", level=1, **streaks):
    return resolve_match(grid, path, difficulty=difficulty, mode=mode, level=level, **streaks)


class TestScoring:
    """Base score, multipliers and totals."""

    def test_score_table(self):
        assert base_score(3) == 10
        assert base_score(4) == 20
        assert base_score(6) == 80
        assert base_score(10) == 1000
        assert base_score(12) == 1000

    def test_plain_word(self):
        """Three mixed-color tiles score the bare table value."""
        grid = make_grid(["CATQZJ"] + FILLER[1:])
        result = resolve(grid, row_path(0, 0, 3))
        assert result.word == "CAT"
        assert result.bonus is None
        assert result.multiplier == 1
        assert result.total == 10

    def test_gold_bonus(self):
        """A single wild tile triples the word score."""
        grid = make_grid(["GOLDEN"] + FILLER[1:], colors=[".G....", "", "", "", "", ""])
        result = resolve(grid, row_path(0, 0, 6))
        assert result.bonus == "GOLD"
        assert result.multiplier == 3
        assert result.total == 240

    def test_color_bonus(self):
        grid = make_grid(["CATQZJ"] + FILLER[1:], colors=["BBB...", "", "", "", "", ""])
        result = resolve(grid, row_path(0, 0, 3))
        assert result.bonus == "COLOR"
        assert result.total == 20

    def test_gold_beats_color(self):
        grid = make_grid(["CATQZJ"] + FILLER[1:], colors=["BGB...", "", "", "", "", ""])
        assert classify_bonus(grid, row_path(0, 0, 3)) == "GOLD"

    def test_bomb_color_ignored_for_color_bonus(self):
        grid = make_grid(["CaTQZJ"] + FILLER[1:], colors=["P.P...", "", "", "", "", ""])
        assert classify_bonus(grid, row_path(0, 0, 3)) == "COLOR"


class TestBombs:
    """Blast radius and explosion points."""

    def setup_method(self):
        rows = list(FILLER)
        rows[2] = "ZCaTKJ"
        self.grid = make_grid(rows)
        self.path = row_path(2, 1, 3)

    def test_bomb_destroys_neighbors_outside_path(self):
        exploded = blast_targets(self.grid, self.path)
        assert set(exploded) == {C(1, 1), C(1, 2), C(1, 3), C(3, 1), C(3, 2), C(3, 3)}

    def test_explosion_points_added_after_multiplier(self):
        result = resolve(self.grid, self.path)
        assert len(result.exploded) == 6
        assert result.explosion_points == 300
        assert result.total == 10 + 300

    def test_blocked_tiles_are_destroyed(self):
        rows = list(FILLER)
        rows[1] = "XJ#KWQ"
        rows[2] = "ZCaTKJ"
        grid = make_grid(rows)
        assert C(1, 2) in blast_targets(grid, self.path)

    def test_removed_tiles_are_skipped(self):
        self.grid[3][3].status = "MATCHED"
        exploded = blast_targets(self.grid, self.path)
        assert C(3, 3) not in exploded
        assert len(exploded) == 5

    def test_overlapping_blasts_count_once(self):
        rows = list(FILLER)
        rows[2] = "ZcAtKJ"
        grid = make_grid(rows)
        result = resolve(grid, row_path(2, 1, 3))
        assert len(result.exploded) == len(set(result.exploded)) == 12
        # the lone plain tile earns the color bonus
        assert result.bonus == "COLOR"
        assert result.total == 20 + 12 * 50

    def test_no_bombs_no_blast(self):
        grid = make_grid(["CATQZJ"] + FILLER[1:])
        assert blast_targets(grid, row_path(0, 0, 3)) == []


class TestStreaks:
    """Short and long word streaks queue special tiles."""

    def test_first_short_word_is_free(self):
        assert next_streaks(3, "NORMAL", 0, 0) == (1, 0, [])

    def test_second_short_word_queues_blocked(self):
        assert next_streaks(3, "NORMAL", 1, 0) == (2, 0, ["BLOCKED"])
        assert next_streaks(3, "NORMAL", 2, 0) == (3, 0, ["BLOCKED"])

    def test_hard_counts_four_letter_words(self):
        assert next_streaks(4, "HARD", 1, 0) == (2, 0, ["BLOCKED"])
        assert next_streaks(4, "NORMAL", 1, 0) == (0, 0, [])

    def test_easy_never_penalizes(self):
        assert next_streaks(3, "EASY", 5, 0) == (0, 0, [])

    def test_long_words_queue_bombs(self):
        assert next_streaks(5, "NORMAL", 0, 0) == (0, 1, [])
        assert next_streaks(6, "EASY", 0, 1) == (0, 2, ["BOMB"])

    def test_long_word_resets_short_streak(self):
        assert next_streaks(7, "NORMAL", 3, 0) == (0, 1, [])

    def test_two_short_words_in_resolution(self):
        """Two 3-letter words on NORMAL push one BLOCKED tile."""
        grid = make_grid(["CATQZJ"] + FILLER[1:])
        first = resolve(grid, row_path(0, 0, 3))
        assert first.spawns == []
        second = resolve(grid, row_path(0, 0, 3),
                         streak_short=first.streak_short, streak_long=first.streak_long)
        assert second.spawns == ["BLOCKED"]


class TestTimeBonus:
    """Seconds added in timed mode."""

    def test_level_one_adds_word_length(self):
        assert time_bonus(3, 1, None) == 3

    def test_factor_shrinks_with_level(self):
        assert time_bonus(5, 2, None) == 5  # ceil(4.25)
        assert time_bonus(4, 10, None) == 1  # floor of 0.2

    def test_bonus_seconds(self):
        assert time_bonus(3, 1, "GOLD") == 6
        assert time_bonus(3, 1, "COLOR") == 5

    def test_only_timed_mode_adds_time(self):
        grid = make_grid(["CATQZJ"] + FILLER[1:])
        assert resolve(grid, row_path(0, 0, 3), mode="TIMED").time_added == 3
        assert resolve(grid, row_path(0, 0, 3), mode="CASUAL").time_added == 0


class TestApplyMatch:
    """Resolution is pure until applied."""

    def test_resolve_does_not_touch_grid(self):
        rows = list(FILLER)
        rows[2] = "ZCaTKJ"
        grid = make_grid(rows)
        resolve(grid, row_path(2, 1, 3))
        assert all(tile.status == "IDLE" for row in grid for tile in row)

    def test_apply_marks_removals(self):
        rows = list(FILLER)
        rows[2] = "ZCaTKJ"
        grid = make_grid(rows)
        result = resolve(grid, row_path(2, 1, 3))
        apply_match(grid, result)
        assert [grid[2][c].status for c in (1, 2, 3)] == ["MATCHED"] * 3
        assert grid[1][1].status == "EXPLODED"
        assert grid[0][0].status == "IDLE"

    def test_off_grid_path_raises(self):
        grid = make_grid(FILLER)
        with pytest.raises(ValueError):
            resolve(grid, [C(5, 5), C(6, 6)])

    def test_feedback_text(self):
        plain = MatchResult(word="CAT", path=[C(0, 0)], base_score=10, total=10)
        assert plain.feedback_text == "CAT"

        fancy = MatchResult(word="GOLDEN", path=[C(0, 0)], exploded=[C(1, 1)], base_score=80,
                            multiplier=3, bonus="GOLD", total=290, time_added=9)
        assert fancy.feedback_text == "GOLDEN +9s BOOM! GOLD BONUS!"
