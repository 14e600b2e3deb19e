"""
Live selection path handling.

A selection is built one tile at a time while the player drags across the
grid. Each accepted change re-classifies the spelled word against the trie
so the path can be painted as extensible, submittable, or dead.
"""

from typing import AbstractSet, List, Optional

from .constants import MIN_WORD_LENGTH
from .grid import in_bounds, is_adjacent, reset_statuses, set_status, tile_at, word_from_path
from .models import Coordinate, Grid, SelectionResult, TileStatus
from .trie import Trie, NO_MATCH, EXACT_WORD


def classify_word(word: str, trie: Trie) -> Optional[TileStatus]:
    """
    Classify a partially spelled word for live feedback.

    Returns None for the empty word, VALID for a dictionary word long enough
    to submit, REJECT when no word starts with it, and SELECTED otherwise
    (including exact words too short to submit).
    """
    if not word:
        return None

    lookup = trie.search(word)
    if lookup == EXACT_WORD and len(word) >= MIN_WORD_LENGTH:
        return "VALID"
    if lookup != NO_MATCH:
        return "SELECTED"
    return "REJECT"


def is_valid_submission(word: str, words: AbstractSet[str]) -> bool:
    """Final check on release, against the flat word set."""
    return len(word) >= MIN_WORD_LENGTH and word in words


def evaluate_selection(grid: Grid, path: List[Coordinate], trie: Trie) -> Optional[TileStatus]:
    """Repaint the grid for the current path and return the path's status."""
    status = classify_word(word_from_path(grid, path), trie)
    reset_statuses(grid)
    if status is not None:
        set_status(grid, path, status)
    return status


class SelectionPath:
    """An ordered, non-repeating chain of adjacent coordinates."""

    def __init__(self, coords: Optional[List[Coordinate]] = None):
        self.coords: List[Coordinate] = list(coords or [])

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self):
        return iter(self.coords)

    def __contains__(self, coord) -> bool:
        return coord in self.coords

    @property
    def last(self) -> Optional[Coordinate]:
        return self.coords[-1] if self.coords else None

    def clear(self) -> None:
        self.coords = []

    def _check_tile(self, grid: Grid, coord: Coordinate) -> Optional[SelectionResult]:
        if not in_bounds(coord, len(grid)):
            return SelectionResult(accepted=False, code="OUT_OF_BOUNDS",
                                   message=f"{tuple(coord)} is off the grid")
        tile = tile_at(grid, coord)
        if tile.is_blocked:
            return SelectionResult(accepted=False, code="BLOCKED_TILE",
                                   message=f"Tile at {tuple(coord)} is blocked")
        if tile.is_removed:
            return SelectionResult(accepted=False, code="REMOVED_TILE",
                                   message=f"Tile at {tuple(coord)} is being removed")
        return None

    def start(self, grid: Grid, coord: Coordinate) -> SelectionResult:
        """Begin a new path at `coord`, discarding any previous one."""
        rejection = self._check_tile(grid, coord)
        if rejection is not None:
            return rejection
        self.coords = [coord]
        return SelectionResult(accepted=True, code="STARTED")

    def extend(self, grid: Grid, coord: Coordinate) -> SelectionResult:
        """
        Move the drag onto `coord`.

        Re-entering the second-to-last cell backtracks by one; otherwise the
        cell is appended if it is adjacent to the last one and not yet used.
        """
        if not self.coords:
            return SelectionResult(accepted=False, code="NO_SELECTION",
                                   message="No selection in progress")

        rejection = self._check_tile(grid, coord)
        if rejection is not None:
            return rejection

        if len(self.coords) > 1 and self.coords[-2] == coord:
            self.coords.pop()
            return SelectionResult(accepted=True, code="BACKTRACKED")

        if coord in self.coords:
            return SelectionResult(accepted=False, code="ALREADY_SELECTED",
                                   message=f"{tuple(coord)} is already in the path")

        if not is_adjacent(self.coords[-1], coord):
            return SelectionResult(accepted=False, code="NOT_ADJACENT",
                                   message=f"{tuple(coord)} is not next to {tuple(self.coords[-1])}")

        self.coords.append(coord)
        return SelectionResult(accepted=True, code="APPENDED")
