"""Fixed game constants for the Wordfall engine."""

from typing import Dict, List


GRID_SIZE = 6
MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 10

# Hard cap on the deadlock search depth, independent of MAX_WORD_LENGTH
SEARCH_DEPTH_LIMIT = 8

# Points by word length; longer words score as the longest entry
SCORES: Dict[int, int] = {
    3: 10,
    4: 20,
    5: 40,
    6: 80,
    7: 150,
    8: 300,
    9: 500,
    10: 1000,
}

TILE_COLORS: List[str] = [
    "PINK",
    "BLUE",
    "TEAL",
    "PURPLE",
    "INDIGO",
]

WILD_COLOR = "GOLD"
BOMB_COLOR = "RAINBOW"
BLOCKED_COLOR = "GRAY"

# Weighted distribution similar to Scrabble
# E:12, A:9, I:9, O:8, N:6, R:6, T:6, L:4, S:4, U:4
# D:4, G:3, B:2, C:2, M:2, P:2, F:2, H:2, V:2, W:2, Y:2
# K:1, J:1, X:1, Q:1, Z:1
LETTER_POOL = (
    "EEEEEEEEEEEEAAAAAAAAAIIIIIIIIIOOOOOOOONNNNNNRRRRRRTTTTTT"
    "LLLLSSSSUUUUDDDDGGGBBCCMMPPFFHHVVWWYYKJXQZ"
)

BOMB_CHANCE = 0.08
WILD_CHANCE = 0.08

GOLD_MULTIPLIER = 3
COLOR_MULTIPLIER = 2
EXPLOSION_POINTS = 50

GOLD_TIME_BONUS = 3
COLOR_TIME_BONUS = 2

STARTING_TARGET_SCORE = 500
STARTING_TIME = 60
LEVEL_TIME_BONUS = 15
