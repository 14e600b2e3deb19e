"""
Game session orchestration.

A GameSession owns everything about "the current game": grid, selection,
session state, the special spawn queue, the random source and the scheduler
that drives delayed transitions. Presentation layers send it commands and
observe snapshots; nothing is shared at module level.
"""

import logging
import random
import time
from collections import deque
from typing import Callable, Deque, List, Optional

from ..engine.data import Dictionary, DictionaryLoadError, load_dictionary
from ..engine.deadlock import find_first_word
from ..engine.grid import render_grid, reset_statuses, set_status, tile_at, word_from_path
from ..engine.models import (
    Coordinate,
    Difficulty,
    GameMode,
    Grid,
    MatchResult,
    SelectionResult,
    SpawnType,
)
from ..engine.path import SelectionPath, evaluate_selection, is_valid_submission
from ..engine.refill import TileGenerator, apply_gravity, create_initial_grid
from ..engine.resolver import apply_match, resolve_match
from .leaderboard import Leaderboard, MemoryLeaderboard
from .models import Feedback, FlyingTile, HighScoreEntry, Screen, SessionSnapshot, SessionState
from .scheduler import ScheduledCall, Scheduler

logger = logging.getLogger("wordfall")


# Transition windows, in seconds
INVALID_FLASH_DELAY = 0.4
MATCH_SETTLE_DELAY = 0.6
FEEDBACK_CLEAR_DELAY = 1.0
DEADLOCK_CHECK_DELAY = 0.8
COUNTDOWN_INTERVAL = 1.0

GAME_MODES = ("CASUAL", "TIMED")
DIFFICULTIES = ("EASY", "NORMAL", "HARD")


class GameSession:
    """
    Runs one player's games from start to game over.

    Attributes:
        dictionary: Word set and trie; None while not ready
        load_error: Why the dictionary is unavailable, if it failed to load
        screen: Which screen the game is on
        mode: CASUAL or TIMED
        difficulty: Streak penalty setting
        grid: The tile matrix, mutated in place
        selection: The path currently being dragged
        state: Score, level, timer and streak counters
        spawn_queue: Special tiles forced into the next refills
        animating: True while a transition window blocks input
    """

    def __init__(
        self,
        dictionary: Optional[Dictionary] = None,
        *,
        difficulty: Difficulty = "NORMAL",
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
        leaderboard: Optional[Leaderboard] = None,
        clock: Callable[[], float] = time.time,
        load_error: Optional[str] = None,
    ):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty}")

        self.dictionary = dictionary
        self.load_error = load_error
        self.difficulty: Difficulty = difficulty
        self.rng = rng if rng is not None else random.Random(seed)
        self.generator = TileGenerator(self.rng)
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.leaderboard = leaderboard if leaderboard is not None else MemoryLeaderboard()
        self.clock = clock

        self.screen: Screen = "MENU"
        self.mode: GameMode = "CASUAL"
        self.grid: Grid = []
        self.selection = SelectionPath()
        self.state = SessionState()
        self.spawn_queue: Deque[SpawnType] = deque()
        self.animating = False
        self.feedback = Feedback()
        self.flying_tiles: List[FlyingTile] = []
        self.is_high_score = False
        self.end_reason = ""

        self._timers: List[ScheduledCall] = []
        self._check_deferred = False
        self._countdown: Optional[ScheduledCall] = None
        self._listeners: List[Callable[[SessionSnapshot], None]] = []

        if self.load_error:
            self.feedback = Feedback(text="Error loading words.", kind="error")

    @classmethod
    def from_word_list(cls, path, **kwargs) -> "GameSession":
        """
        Create a session from a word list file.

        A load failure does not raise: the session is returned permanently
        not ready, with `load_error` describing the problem.
        """
        try:
            dictionary = load_dictionary(path)
        except DictionaryLoadError as e:
            logger.error("Failed to load dictionary: %s", e)
            return cls(None, load_error=str(e), **kwargs)
        return cls(dictionary, **kwargs)

    # ------------------------------------------------------------------
    # Observation

    @property
    def ready(self) -> bool:
        return self.dictionary is not None

    def subscribe(self, listener: Callable[[SessionSnapshot], None]) -> None:
        """Register a callback that receives a snapshot after every change."""
        self._listeners.append(listener)

    def snapshot(self) -> SessionSnapshot:
        """A deep copy of everything observable about the session."""
        return SessionSnapshot(
            screen=self.screen,
            mode=self.mode,
            difficulty=self.difficulty,
            state=self.state.model_copy(),
            grid=[[tile.model_copy() for tile in row] for row in self.grid],
            selection=list(self.selection),
            feedback=self.feedback.model_copy(),
            flying_tiles=[t.model_copy() for t in self.flying_tiles],
            spawn_queue=list(self.spawn_queue),
            animating=self.animating,
            ready=self.ready,
            is_high_score=self.is_high_score,
            end_reason=self.end_reason,
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in self._listeners:
            listener(snap)

    # ------------------------------------------------------------------
    # Timers

    def _schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        self._timers = [h for h in self._timers if not h.finished]
        handle = self.scheduler.call_later(delay, callback)
        self._timers.append(handle)
        return handle

    def _cancel_timers(self) -> None:
        for handle in self._timers:
            handle.cancel()
        self._timers = []
        self._stop_countdown()

    def _start_countdown(self) -> None:
        self._stop_countdown()
        self._countdown = self.scheduler.call_every(COUNTDOWN_INTERVAL, self._tick)

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _set_screen(self, screen: Screen) -> None:
        self.screen = screen
        if screen == "GAME" and self.mode == "TIMED":
            self._start_countdown()
        else:
            self._stop_countdown()

    def advance(self, seconds: float) -> int:
        """Let `seconds` of game time pass. Returns the transitions fired."""
        return self.scheduler.advance(seconds)

    # ------------------------------------------------------------------
    # Lifecycle commands

    def set_difficulty(self, difficulty: Difficulty) -> None:
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty}")
        if self.screen in ("GAME", "LEVEL_UP"):
            raise ValueError("Difficulty cannot change during a game")
        self.difficulty = difficulty
        self._notify()

    def start(self, mode: GameMode) -> bool:
        """Start a new game, discarding anything pending from the last one."""
        if mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode: {mode}")
        if not self.ready:
            logger.warning("Cannot start a game: dictionary not loaded")
            return False

        self._cancel_timers()
        self.mode = mode
        self.grid = create_initial_grid(self.generator, mode)
        self.state = SessionState.fresh(mode)
        self.spawn_queue.clear()
        self.selection.clear()
        self.animating = False
        self.feedback = Feedback()
        self.flying_tiles = []
        self.is_high_score = False
        self.end_reason = ""
        self._check_deferred = False
        self._set_screen("GAME")

        if mode == "CASUAL":
            self._schedule(DEADLOCK_CHECK_DELAY, self._check_deadlock)

        logger.info("Started %s game on %s", mode, self.difficulty)
        logger.debug("Initial grid:\n%s", render_grid(self.grid))
        self._notify()
        return True

    def next_level(self) -> None:
        """Continue from the level-up screen into the next level."""
        if self.screen != "LEVEL_UP":
            raise ValueError(f"No level to advance to from screen {self.screen}")

        self.state.advance_level(self.mode)
        self._check_deferred = False
        self._set_screen("GAME")
        if self.mode == "CASUAL":
            self._schedule(DEADLOCK_CHECK_DELAY, self._check_deadlock)

        logger.info("Level %d, target score %d", self.state.level, self.state.target_score)
        self._notify()

    def end_game(self, reason: str = "") -> bool:
        """
        Finish the current game and record it on the leaderboard.

        Pending transitions are cancelled and any selection in progress is
        dropped. Returns whether the score made the leaderboard.
        """
        if self.screen not in ("GAME", "LEVEL_UP"):
            return False

        self._cancel_timers()
        self.selection.clear()
        self.animating = False

        entry = HighScoreEntry(
            score=self.state.score,
            best_word=self.state.best_word,
            timestamp=int(self.clock() * 1000),
            level=self.state.level if self.mode == "TIMED" else None,
        )
        self.is_high_score = self.leaderboard.save(self.mode, entry)
        self.end_reason = reason
        self._set_screen("GAMEOVER")

        logger.info("Game over (%s): score %d, %d words, best word %r",
                    reason or "ended", self.state.score, self.state.word_count, self.state.best_word)
        self._notify()
        return self.is_high_score

    def quit_to_menu(self) -> None:
        """Leave whatever screen is showing, abandoning any game in progress."""
        self._cancel_timers()
        self.selection.clear()
        self.animating = False
        self._set_screen("MENU")
        self._notify()

    def show_leaderboard(self) -> None:
        """Open the high score tables from the menu or the game-over screen."""
        if self.screen in ("GAME", "LEVEL_UP"):
            raise ValueError(f"End the game before opening the leaderboard (screen {self.screen})")
        self._cancel_timers()
        self._set_screen("LEADERBOARD")
        self._notify()

    # ------------------------------------------------------------------
    # Input commands

    def _input_blocked(self, needs_selection: bool = False) -> Optional[SelectionResult]:
        if not self.ready:
            return SelectionResult(accepted=False, code="NOT_READY",
                                   message=self.load_error or "Dictionary not loaded")
        if self.screen != "GAME":
            return SelectionResult(accepted=False, code="NOT_PLAYING",
                                   message=f"No game in progress (screen {self.screen})")
        if self.animating:
            return SelectionResult(accepted=False, code="BUSY",
                                   message="Input is locked during a transition")
        if needs_selection and not len(self.selection):
            return SelectionResult(accepted=False, code="NO_SELECTION",
                                   message="No selection in progress")
        return None

    def _repaint(self, result: SelectionResult) -> SelectionResult:
        status = evaluate_selection(self.grid, self.selection.coords, self.dictionary.trie)
        result.status = status
        result.word = word_from_path(self.grid, self.selection.coords)
        self._notify()
        return result

    def touch_start(self, row: int, col: int) -> SelectionResult:
        """Press on a tile, starting a new path."""
        blocked = self._input_blocked()
        if blocked is not None:
            return blocked

        result = self.selection.start(self.grid, Coordinate(row, col))
        if not result.accepted:
            return result
        self.feedback = Feedback()
        return self._repaint(result)

    def touch_move(self, row: int, col: int) -> SelectionResult:
        """Drag onto a tile, extending or backtracking the path."""
        blocked = self._input_blocked(needs_selection=True)
        if blocked is not None:
            return blocked

        result = self.selection.extend(self.grid, Coordinate(row, col))
        if not result.accepted:
            return result
        return self._repaint(result)

    def touch_end(self) -> Optional[MatchResult]:
        """
        Release the drag and submit the path.

        Returns the resolved match for a valid word, otherwise None (the
        path flashes INVALID, or the release was ignored).
        """
        if self._input_blocked(needs_selection=True) is not None:
            return None

        word = word_from_path(self.grid, self.selection.coords)
        if is_valid_submission(word, self.dictionary.words):
            return self._handle_valid_word()
        self._handle_invalid_word(word)
        return None

    def show_hint(self) -> Optional[List[Coordinate]]:
        """Select the first word the search finds, if there is one."""
        if self._input_blocked() is not None:
            return None

        move = find_first_word(self.grid, self.dictionary.trie)
        if move:
            self.selection = SelectionPath(move)
            reset_statuses(self.grid)
            set_status(self.grid, move, "SELECTED")
            self.feedback = Feedback(text="Word found!", kind="success")
        else:
            self.feedback = Feedback(text="No words found!", kind="error")
        self._notify()
        return move

    # ------------------------------------------------------------------
    # Transitions

    def _handle_valid_word(self) -> MatchResult:
        self.animating = True
        path = list(self.selection)

        result = resolve_match(
            self.grid,
            path,
            difficulty=self.difficulty,
            mode=self.mode,
            level=self.state.level,
            streak_short=self.state.streak_short,
            streak_long=self.state.streak_long,
        )

        self.flying_tiles = [
            FlyingTile(id=t.id, letter=t.letter, color=t.color, source=c)
            for c, t in ((c, tile_at(self.grid, c)) for c in path)
        ]
        apply_match(self.grid, result)
        self.spawn_queue.extend(result.spawns)
        self.state.record_match(result, self.mode)
        self.feedback = Feedback(
            text=result.feedback_text,
            kind="gold" if result.bonus == "GOLD" else "success",
        )

        logger.debug("Matched %s for %d points (bonus=%s, exploded=%d, spawns=%s)",
                     result.word, result.total, result.bonus, len(result.exploded), result.spawns)

        self._schedule(MATCH_SETTLE_DELAY, self._settle_after_match)
        self._notify()
        return result

    def _handle_invalid_word(self, word: str) -> None:
        self.animating = True
        set_status(self.grid, self.selection.coords, "INVALID")
        logger.debug("Rejected submission %r", word)
        self._schedule(INVALID_FLASH_DELAY, self._clear_invalid)
        self._notify()

    def _clear_invalid(self) -> None:
        self.selection.clear()
        reset_statuses(self.grid, clear_new=True)
        self.animating = False
        if self._check_deferred:
            self._check_deferred = False
            self._schedule(DEADLOCK_CHECK_DELAY, self._check_deadlock)
        self._notify()

    def _settle_after_match(self) -> None:
        apply_gravity(self.grid, self.generator, self.state.level, self.mode, self.spawn_queue)
        self.selection.clear()
        self.flying_tiles = []
        self._schedule(FEEDBACK_CLEAR_DELAY, self._clear_feedback)

        if self.state.reached_target:
            self.animating = False
            self._set_screen("LEVEL_UP")
            logger.info("Level %d cleared with %d points", self.state.level, self.state.score)
        elif self.mode == "CASUAL":
            # Input stays locked until the grid is known to be playable
            self._schedule(DEADLOCK_CHECK_DELAY, self._check_after_refill)
        else:
            self.animating = False

        self._notify()

    def _clear_feedback(self) -> None:
        self.state.last_score_added = None
        self.feedback = Feedback()
        self._notify()

    def _check_deadlock(self) -> None:
        """Debounced check after a game or level starts; never holds the input lock."""
        if self.screen != "GAME":
            return
        if self.animating:
            # A transition owns the grid; check again once it is over
            self._check_deferred = True
            return
        if find_first_word(self.grid, self.dictionary.trie) is None:
            self.end_game("No moves left")

    def _check_after_refill(self) -> None:
        """Last step of the match chain in casual mode: releases the input lock."""
        if self.screen != "GAME":
            return
        move = find_first_word(self.grid, self.dictionary.trie)
        self.animating = False
        self._check_deferred = False
        if move is None:
            self.end_game("No moves left")
        else:
            self._notify()

    def _tick(self) -> None:
        if self.screen != "GAME":
            return
        if self.state.time_left <= 0:
            self.end_game("Time's up")
            return
        self.state.time_left -= 1
        self._notify()
