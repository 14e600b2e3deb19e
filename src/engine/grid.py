"""Grid addressing, status and rendering utilities."""

from typing import Iterable, List, Sequence

from .constants import GRID_SIZE
from .models import Coordinate, Grid, Tile, TileStatus


# Neighbor order: NW, N, NE, W, E, SW, S, SE
_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def in_bounds(coord: Coordinate, size: int = GRID_SIZE) -> bool:
    """Check that a coordinate lies on a `size` x `size` grid."""
    return 0 <= coord.row < size and 0 <= coord.col < size


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """True when `a` and `b` are distinct cells at Chebyshev distance 1."""
    dr = abs(a.row - b.row)
    dc = abs(a.col - b.col)
    return dr <= 1 and dc <= 1 and not (dr == 0 and dc == 0)


def neighbors(coord: Coordinate, size: int = GRID_SIZE) -> List[Coordinate]:
    """The up-to-8 on-board neighbors of a cell, in fixed order."""
    result = []
    for dr, dc in _OFFSETS:
        n = Coordinate(coord.row + dr, coord.col + dc)
        if in_bounds(n, size):
            result.append(n)
    return result


def tile_at(grid: Grid, coord: Coordinate) -> Tile:
    return grid[coord.row][coord.col]


def is_traversable(tile: Tile) -> bool:
    """Whether a tile may take part in a word path."""
    return not tile.is_blocked and not tile.is_removed


def word_from_path(grid: Grid, path: Sequence[Coordinate]) -> str:
    """Concatenate the letters along a path."""
    return "".join(tile_at(grid, c).letter for c in path)


def set_status(grid: Grid, coords: Iterable[Coordinate], status: TileStatus) -> None:
    for coord in coords:
        tile_at(grid, coord).status = status


def reset_statuses(grid: Grid, clear_new: bool = False) -> None:
    """Return every tile not pending removal to IDLE."""
    for row in grid:
        for tile in row:
            if not tile.is_removed:
                tile.status = "IDLE"
            if clear_new:
                tile.is_new = False


def render_grid(grid: Grid) -> str:
    """
    Render the grid to a string.

    Letters are uppercase, bombs lowercase, blocked tiles '#', and tiles
    pending removal '.'.
    """
    if not grid:
        return ""

    def cell(tile: Tile) -> str:
        if tile.is_removed:
            return "."
        if tile.is_blocked:
            return "#"
        if tile.is_bomb:
            return tile.letter.lower()
        return tile.letter

    return "\n".join("".join(cell(tile) for tile in row) for row in grid)
