"""
Headless player that drives a GameSession through a full game.

The player behaves like a person at the board: it waits until input is
accepted, asks for a hint, drags the hinted path tile by tile, releases,
and lets the game clock run while transitions play out.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from ..engine.grid import render_grid
from .leaderboard import JsonLeaderboard, Leaderboard, MemoryLeaderboard
from .models import GameConfig, GameResult, MoveRecord
from .session import GameSession

# Upper bound on clock advances while waiting for one transition chain
_MAX_WAIT_STEPS = 1000


class AutoPlayer:
    """
    Plays games on a GameSession without a presentation layer.

    Attributes:
        session: The session being played
        config: Run configuration
        moves: Words played so far
        level_ups: Levels cleared so far
    """

    def __init__(self, session: GameSession, config: Optional[GameConfig] = None):
        self.session = session
        self.config = config or GameConfig()
        self.moves: List[MoveRecord] = []
        self.level_ups = 0
        self.started_at: Optional[datetime] = None

    @classmethod
    def create(cls, config: Optional[GameConfig] = None, **config_kwargs) -> "AutoPlayer":
        """
        Factory method to build a session and player from a configuration.

        Args:
            config: Optional GameConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            AutoPlayer with a ready (or failed-to-load) session
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        leaderboard: Leaderboard
        if config.leaderboard_path:
            leaderboard = JsonLeaderboard(config.leaderboard_path)
        else:
            leaderboard = MemoryLeaderboard()

        session = GameSession.from_word_list(
            config.dictionary_path,
            difficulty=config.difficulty,
            seed=config.seed,
            leaderboard=leaderboard,
        )
        return cls(session, config)

    @property
    def is_complete(self) -> bool:
        return self.session.screen == "GAMEOVER"

    def _wait_until_idle(self) -> None:
        """Advance the clock until input is accepted again or the game ends."""
        session = self.session
        for _ in range(_MAX_WAIT_STEPS):
            if not session.animating or session.screen != "GAME":
                return
            due = session.scheduler.next_due()
            if due is None:
                raise RuntimeError("Session is locked with no pending transition")
            session.advance(max(0.0, due - session.scheduler.now))
        raise RuntimeError("Session did not settle")

    def play_move(self) -> Optional[MoveRecord]:
        """
        Find and play one word.

        Returns the move, or None if no word was available (in timed mode
        the clock is left to run down by one second instead).
        """
        session = self.session
        self._wait_until_idle()
        if session.screen == "LEVEL_UP":
            session.next_level()
            self.level_ups += 1
            self._wait_until_idle()
        if session.screen != "GAME":
            return None

        path = session.show_hint()
        if not path:
            session.advance(1.0)
            return None

        session.advance(self.config.move_seconds)
        if session.screen != "GAME":
            return None

        session.touch_start(*path[0])
        for coord in path[1:]:
            session.touch_move(*coord)
        result = session.touch_end()
        if result is None:
            return None

        move = MoveRecord(
            move_number=len(self.moves) + 1,
            level=session.state.level,
            word=result.word,
            path=result.path,
            score_added=result.total,
            bonus=result.bonus,
            exploded=len(result.exploded),
            spawns=result.spawns,
            time_left=session.state.time_left,
        )
        self.moves.append(move)
        self._wait_until_idle()
        return move

    def run(
        self,
        on_move: Optional[Callable[[MoveRecord], None]] = None,
        verbose: bool = False,
    ) -> GameResult:
        """
        Play one full game.

        Args:
            on_move: Optional callback called after each word
            verbose: If True, print progress to stdout

        Returns:
            GameResult containing the full run data
        """
        session = self.session
        if not session.ready:
            raise ValueError(f"Dictionary not loaded: {session.load_error}")

        self.started_at = datetime.now()
        session.start(self.config.mode)

        if verbose:
            print(f"Starting {self.config.mode} game on {self.config.difficulty}")
            print(render_grid(session.grid))
            print("-" * 40)

        attempts = 0
        while not self.is_complete:
            if len(self.moves) >= self.config.max_moves:
                session.end_game(f"Move limit ({self.config.max_moves}) reached")
                break

            attempts += 1
            if attempts > self.config.max_moves * 100:
                session.end_game("No progress")
                break

            move = self.play_move()
            if move is None:
                continue

            if verbose:
                line = f"#{move.move_number} L{move.level} {move.word} +{move.score_added}"
                if move.bonus:
                    line += f" ({move.bonus})"
                if move.exploded:
                    line += f" BOOM x{move.exploded}"
                if self.config.mode == "TIMED":
                    line += f" [{move.time_left}s left]"
                print(line)

            if on_move:
                on_move(move)

        if verbose:
            print("-" * 40)
            print(f"Game over: {session.end_reason}")
            print(render_grid(session.grid))

        return self.get_result()

    def get_result(self) -> GameResult:
        """Collect the run into a GameResult."""
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        return GameResult(
            config=self.config,
            end_reason=self.session.end_reason,
            is_high_score=self.session.is_high_score,
            final_state=self.session.state.model_copy(),
            moves=self.moves,
            final_grid=render_grid(self.session.grid),
            leaderboard=self.session.leaderboard.get(self.config.mode),
            level_ups=self.level_ups,
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the run result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
