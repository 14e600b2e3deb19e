"""Shared builders for test grids and dictionaries."""

from typing import List, Optional

from src.engine import Tile, Trie
from src.engine.constants import TILE_COLORS, WILD_COLOR, BOMB_COLOR, BLOCKED_COLOR
from src.engine.data import Dictionary


COLOR_CODES = {
    "P": "PINK",
    "B": "BLUE",
    "T": "TEAL",
    "U": "PURPLE",
    "I": "INDIGO",
    "G": WILD_COLOR,
}


def make_tile(ch: str, r: int, c: int, color_code: Optional[str] = None) -> Tile:
    """
    Build a tile from a one-character code.

    '#' is a blocked tile, a lowercase letter is a bomb, an uppercase letter
    a plain tile. Plain tiles get a color that differs from all 8 neighbors
    unless a color code is given.
    """
    tile_id = f"t{r}{c}"
    if ch == "#":
        return Tile(id=tile_id, letter="", color=BLOCKED_COLOR, is_blocked=True)
    if ch.islower():
        return Tile(id=tile_id, letter=ch.upper(), color=BOMB_COLOR, is_bomb=True)
    color = COLOR_CODES[color_code] if color_code else TILE_COLORS[(2 * r + c) % len(TILE_COLORS)]
    return Tile(id=tile_id, letter=ch, color=color)


def _color_code(colors, r, c):
    code = colors[r][c:c + 1] if colors else ""
    return code if code not in ("", ".") else None


def make_grid(rows: List[str], colors: Optional[List[str]] = None) -> List[List[Tile]]:
    """Build a grid from row strings (and optional rows of color codes)."""
    return [
        [
            make_tile(ch, r, c, _color_code(colors, r, c))
            for c, ch in enumerate(line)
        ]
        for r, line in enumerate(rows)
    ]


def make_trie(words: List[str]) -> Trie:
    trie = Trie()
    for w in words:
        trie.insert(w.upper())
    return trie


def make_dictionary(words: List[str]) -> Dictionary:
    return Dictionary(words)


# A grid with CAT/CATS on the top row and DOG on row 2; the rest spells nothing
# in the test dictionary.
PLANTED_ROWS = [
    "CATSQZ",
    "XJVKWQ",
    "DOGJXV",
    "#QXWKJ",
    "VJKQZX",
    "QZJXVW",
]

DEAD_ROWS = [
    "QZJXVW",
    "XJVKWQ",
    "ZQXWKJ",
    "VJKQZX",
    "QZJXVW",
    "JXVWQZ",
]

TEST_WORDS = ["CAT", "CATS", "DOG", "DOGS", "GOLDEN", "TOGA"]
