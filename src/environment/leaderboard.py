"""High score storage, one top-10 table per game mode."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from ..engine.models import GameMode
from .models import HighScoreEntry

logger = logging.getLogger("wordfall")

MAX_ENTRIES = 10
MODES: List[GameMode] = ["CASUAL", "TIMED"]


def rank_entries(entries: List[HighScoreEntry], entry: HighScoreEntry) -> List[HighScoreEntry]:
    """Insert `entry` and keep the best MAX_ENTRIES, highest score first.

    Ties keep insertion order, so a new entry ranks below equal older scores.
    """
    ranked = sorted(entries + [entry], key=lambda e: e.score, reverse=True)
    return ranked[:MAX_ENTRIES]


def qualified(entries: List[HighScoreEntry], entry: HighScoreEntry) -> bool:
    """Whether `entry` is on the table, matched by (timestamp, score)."""
    return any(e.timestamp == entry.timestamp and e.score == entry.score for e in entries)


class Leaderboard:
    """Base leaderboard; subclasses decide where the tables live."""

    def _load(self, mode: GameMode) -> List[HighScoreEntry]:
        raise NotImplementedError

    def _store(self, mode: GameMode, entries: List[HighScoreEntry]) -> None:
        raise NotImplementedError

    def get(self, mode: GameMode) -> List[HighScoreEntry]:
        """Entries for a mode, highest score first."""
        return sorted(self._load(mode), key=lambda e: e.score, reverse=True)

    def save(self, mode: GameMode, entry: HighScoreEntry) -> bool:
        """Record a finished game. Returns True if it made the top 10."""
        top = rank_entries(self.get(mode), entry)
        self._store(mode, top)
        made_it = qualified(top, entry)
        logger.info("Saved %s score %d (top %d: %s)", mode, entry.score, MAX_ENTRIES, made_it)
        return made_it


class MemoryLeaderboard(Leaderboard):
    """Leaderboard held in memory for the lifetime of the process."""

    def __init__(self):
        self._tables: Dict[str, List[HighScoreEntry]] = {mode: [] for mode in MODES}

    def _load(self, mode: GameMode) -> List[HighScoreEntry]:
        return list(self._tables.get(mode, []))

    def _store(self, mode: GameMode, entries: List[HighScoreEntry]) -> None:
        self._tables[mode] = list(entries)


class JsonLeaderboard(Leaderboard):
    """
    Leaderboard persisted to a JSON file.

    The file maps each mode to its list of entries. A missing file is an
    empty leaderboard; an unreadable or malformed one is logged and treated
    as empty.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, List[HighScoreEntry]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
            return {
                mode: [HighScoreEntry(**item) for item in data.get(mode, [])]
                for mode in MODES
            }
        except (OSError, ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.warning("Ignoring unreadable leaderboard %s: %s", self.path, e)
            return {}

    def _load(self, mode: GameMode) -> List[HighScoreEntry]:
        return self._read_all().get(mode, [])

    def _store(self, mode: GameMode, entries: List[HighScoreEntry]) -> None:
        tables = self._read_all()
        tables[mode] = entries
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(
                {m: [e.model_dump() for e in tables.get(m, [])] for m in MODES},
                f,
                indent=2,
            )
