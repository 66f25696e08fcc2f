from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import SHAPE_SIZE, Piece
from .randomizer import PieceRandomizer
from .rules import GravityRules, ScoringRules


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GameMode(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


@dataclass
class LockResult:
    lines_cleared: int
    game_over: bool


class TetrisGame:
    """Falling-block game engine.

    Owns the board and the current/next pieces and runs the mode state
    machine. Player commands never raise: a command that is illegal in the
    current mode or position is ignored. Time only enters through
    ``update(current_time)`` and the optional ``now`` of the commands that
    reset the fall timer; when ``now`` is omitted the injected ``clock`` is read.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        gravity: Optional[GravityRules] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.gravity = gravity or GravityRules()
        self.clock = clock
        if self.config.width < SHAPE_SIZE:
            raise ValueError(f"Board must be at least {SHAPE_SIZE} columns wide, got {self.config.width}")
        self.randomizer = PieceRandomizer(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.lines = 0
        self.fall_interval = self.gravity.base_interval
        self.last_fall = 0.0
        self.mode = GameMode.NOT_STARTED
        self.quit_requested = False
        self.next_piece = self._random_piece()
        self.spawn_new_piece()

    # ---------- Queries ----------
    def is_game_over(self) -> bool:
        return self.mode is GameMode.GAME_OVER

    def is_paused(self) -> bool:
        return self.mode is GameMode.PAUSED

    def has_started(self) -> bool:
        return self.mode is not GameMode.NOT_STARTED

    def is_playing(self) -> bool:
        return self.mode is GameMode.PLAYING

    def get_score(self) -> int:
        return self.score

    def get_lines(self) -> int:
        return self.lines

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if not self.is_game_over():
            value = int(self.current_piece.kind)
            for x, y in self.current_piece.cells():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -value
        return state

    # ---------- Piece lifecycle ----------
    def _random_piece(self) -> Piece:
        return Piece.spawn(self.randomizer.next_kind(), self.grid.width)

    def check_collision(self, piece: Piece, dx: int, dy: int) -> bool:
        for x, y in piece.cells(dx, dy):
            if self.grid.is_out_of_horizontal_bounds(x) or self.grid.is_below_floor(y):
                return True
            if y >= 0 and self.grid.is_occupied(x, y):
                return True
        return False

    def spawn_new_piece(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        # Immediate collision check: if overlaps, game over
        if self.check_collision(self.current_piece, 0, 0):
            self.mode = GameMode.GAME_OVER

    def _lock_piece(self) -> LockResult:
        self.grid.lock(self.current_piece)
        cleared = self.grid.clear_full_rows()
        if cleared > 0:
            self.lines += cleared
            self.score += self.rules.score_for_lines(cleared)
            self.fall_interval = self.gravity.interval_for_lines(self.lines)
        self.spawn_new_piece()
        return LockResult(lines_cleared=cleared, game_over=self.is_game_over())

    def _shift(self, dx: int, dy: int) -> bool:
        if self.check_collision(self.current_piece, dx, dy):
            return False
        self.current_piece.x += dx
        self.current_piece.y += dy
        return True

    # ---------- Player commands ----------
    def move_left(self) -> None:
        if self.is_playing():
            self._shift(-1, 0)

    def move_right(self) -> None:
        if self.is_playing():
            self._shift(1, 0)

    def rotate(self) -> None:
        if not self.is_playing():
            return
        rotated = self.current_piece.rotated()
        if not self.check_collision(rotated, 0, 0):
            self.current_piece = rotated

    def soft_drop(self) -> None:
        if self.is_playing() and self._shift(0, 1):
            self.score += self.rules.soft_drop_points

    def hard_drop(self) -> Optional[LockResult]:
        if not self.is_playing():
            return None
        # Drop until collision
        while self._shift(0, 1):
            pass
        return self._lock_piece()

    def update(self, current_time: float) -> Optional[LockResult]:
        if not self.is_playing():
            return None
        if current_time - self.last_fall <= self.fall_interval:
            return None
        result = None
        if not self._shift(0, 1):
            result = self._lock_piece()
        self.last_fall = current_time
        return result

    # ---------- Mode transitions ----------
    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def start_game(self, now: Optional[float] = None) -> None:
        if self.mode is not GameMode.NOT_STARTED:
            return
        self.mode = GameMode.PLAYING
        self.last_fall = self._now(now)

    def toggle_pause(self, now: Optional[float] = None) -> None:
        if self.mode is GameMode.PLAYING:
            self.mode = GameMode.PAUSED
        elif self.mode is GameMode.PAUSED:
            self.mode = GameMode.PLAYING
            # Elapsed pause time must not count towards the next fall
            self.last_fall = self._now(now)

    def restart(self, now: Optional[float] = None) -> None:
        self.grid.reset()
        self.score = 0
        self.lines = 0
        self.fall_interval = self.gravity.base_interval
        self.mode = GameMode.PLAYING
        self.last_fall = self._now(now)
        self.spawn_new_piece()

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the piece source and restart with two fresh pieces."""
        self.randomizer.reseed(seed)
        self.next_piece = self._random_piece()
        self.restart()

    def quit(self) -> None:
        self.quit_requested = True

    # ---------- Action dispatch ----------
    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        score_before = self.score

        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        obs = self.get_state()
        done = self.is_game_over()
        reward = self.score - score_before
        info = {
            "score": self.score,
            "lines": self.lines,
        }
        return obs, reward, done, info
