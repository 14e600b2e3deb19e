"""Wordfall puzzle engine."""

from .models import (
    Coordinate,
    Tile,
    Grid,
    TileStatus,
    GameMode,
    Difficulty,
    SpawnType,
    Bonus,
    SelectionResult,
    MatchResult,
    REMOVAL_STATUSES,
)
from .trie import Trie, NO_MATCH, PREFIX_ONLY, EXACT_WORD
from .grid import in_bounds, is_adjacent, neighbors, word_from_path, render_grid
from .path import SelectionPath, classify_word, evaluate_selection, is_valid_submission
from .resolver import resolve_match, apply_match
from .refill import TileGenerator, GridInvariantError, blocked_chance, create_initial_grid, apply_gravity
from .deadlock import find_first_word
from .data import Dictionary, DictionaryLoadError, load_dictionary

__all__ = [
    # Models
    "Coordinate",
    "Tile",
    "Grid",
    "TileStatus",
    "GameMode",
    "Difficulty",
    "SpawnType",
    "Bonus",
    "SelectionResult",
    "MatchResult",
    "REMOVAL_STATUSES",
    # Dictionary
    "Trie",
    "NO_MATCH",
    "PREFIX_ONLY",
    "EXACT_WORD",
    "Dictionary",
    "DictionaryLoadError",
    "load_dictionary",
    # Grid utilities
    "in_bounds",
    "is_adjacent",
    "neighbors",
    "word_from_path",
    "render_grid",
    # Selection
    "SelectionPath",
    "classify_word",
    "evaluate_selection",
    "is_valid_submission",
    # Resolution and refill
    "resolve_match",
    "apply_match",
    "TileGenerator",
    "GridInvariantError",
    "blocked_chance",
    "create_initial_grid",
    "apply_gravity",
    # Search
    "find_first_word",
]
