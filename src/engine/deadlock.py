"""Search for any word still formable on the grid."""

from typing import Iterator, List, Optional

from .constants import MIN_WORD_LENGTH, SEARCH_DEPTH_LIMIT
from .grid import is_traversable, neighbors
from .models import Coordinate, Grid
from .trie import Trie, NO_MATCH, EXACT_WORD


# Outcomes of visiting one cell
_PRUNE = 0
_EXTEND = 1
_FOUND = 2


def _visit(word: str, trie: Trie, min_length: int, max_depth: int) -> int:
    lookup = trie.search(word)
    if lookup == NO_MATCH:
        return _PRUNE
    if lookup == EXACT_WORD and len(word) >= min_length:
        return _FOUND
    if len(word) >= max_depth:
        return _PRUNE
    return _EXTEND


def _search_from(
    grid: Grid,
    trie: Trie,
    start: Coordinate,
    min_length: int,
    max_depth: int,
) -> Optional[List[Coordinate]]:
    """Depth-first search rooted at one cell, using a backtracking stack."""
    size = len(grid)
    if not is_traversable(grid[start.row][start.col]):
        return None

    path = [start]
    letters = [grid[start.row][start.col].letter]
    visited = {start}

    outcome = _visit("".join(letters), trie, min_length, max_depth)
    if outcome == _FOUND:
        return list(path)
    if outcome == _PRUNE:
        return None

    # One pending-neighbor iterator per cell on the path
    frontier: List[Iterator[Coordinate]] = [iter(neighbors(start, size))]

    while frontier:
        nxt = None
        for n in frontier[-1]:
            if n not in visited and is_traversable(grid[n.row][n.col]):
                nxt = n
                break

        if nxt is None:
            frontier.pop()
            visited.discard(path.pop())
            letters.pop()
            continue

        path.append(nxt)
        letters.append(grid[nxt.row][nxt.col].letter)
        visited.add(nxt)

        outcome = _visit("".join(letters), trie, min_length, max_depth)
        if outcome == _FOUND:
            return list(path)
        if outcome == _EXTEND:
            frontier.append(iter(neighbors(nxt, size)))
        else:
            visited.discard(path.pop())
            letters.pop()

    return None


def find_first_word(
    grid: Grid,
    trie: Trie,
    min_length: int = MIN_WORD_LENGTH,
    max_depth: int = SEARCH_DEPTH_LIMIT,
) -> Optional[List[Coordinate]]:
    """
    Find a path spelling any dictionary word, or None if the grid is deadlocked.

    Starts are tried in row-major order and neighbors in a fixed order, so the
    same grid always yields the same path. Branches are abandoned once they
    spell no prefix or reach `max_depth` letters.
    """
    size = len(grid)
    for r in range(size):
        for c in range(size):
            found = _search_from(grid, trie, Coordinate(r, c), min_length, max_depth)
            if found:
                return found
    return None
