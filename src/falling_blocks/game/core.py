from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .board import Board
from .controller import PieceController
from .pieces import Piece
from .rules import ScoringRules
from .shapes import ShapeCatalog


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE = 4
    ROTATE_X = 5
    ROTATE_Y = 6
    FORWARD = 7
    BACKWARD = 8
    STORE = 9
    NONE = 10


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    depth: Optional[int] = None  # None for a flat board
    random_seed: Optional[int] = None
    hold_enabled: bool = False
    kicks_enabled: bool = False
    initial_interval: int = 500  # milliseconds between gravity ticks
    high_score: int = 0

    def __post_init__(self) -> None:
        extents = [self.width, self.height] + ([] if self.depth is None else [self.depth])
        if any(int(e) <= 0 for e in extents):
            raise ValueError(f"board extents must be positive, got {extents}")
        if self.initial_interval <= 0:
            raise ValueError("initial_interval must be positive")
        if self.high_score < 0:
            raise ValueError("high_score cannot be negative")

    @property
    def ndim(self) -> int:
        return 2 if self.depth is None else 3

    @property
    def dims(self) -> Tuple[int, ...]:
        if self.depth is None:
            return (self.height, self.width)
        return (self.depth, self.height, self.width)

    @classmethod
    def classic(cls, **overrides: Any) -> "GameConfig":
        """Plain 10x20 board: rotation without kicks, no hold."""
        return cls(**overrides)

    @classmethod
    def canvas(cls, **overrides: Any) -> "GameConfig":
        """10x20 board with hold and wall kicks."""
        params: Dict[str, Any] = {"hold_enabled": True, "kicks_enabled": True}
        params.update(overrides)
        return cls(**params)

    @classmethod
    def volumetric(cls, **overrides: Any) -> "GameConfig":
        """10x20x10 volume with slower initial gravity."""
        params: Dict[str, Any] = {"depth": 10, "initial_interval": 1000}
        params.update(overrides)
        return cls(**params)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session, safe to hand to a renderer."""

    board: np.ndarray
    active: Optional[Piece]
    next_piece: Optional[Piece]
    stored: Optional[Piece]
    ghost: Optional[Piece]
    score: int
    level: int
    lines_cleared: int
    gravity_interval: int
    high_score: int
    can_store: bool
    game_over: bool


class GameSession:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        catalog: Optional[ShapeCatalog] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.dims)
        self.catalog = catalog or ShapeCatalog(self.config.ndim, self.rng)
        self.controller = PieceController(
            self.catalog,
            self.board,
            hold_enabled=self.config.hold_enabled,
            kicks_enabled=self.config.kicks_enabled,
        )
        self.score = 0
        self.level = 1
        self.gravity_interval = self.config.initial_interval
        self.lines_cleared_total = 0
        self.high_score = self.config.high_score
        self.game_over = False
        self.reset()

    def reset(self) -> None:
        self.board.reset()
        self.controller.reset()
        self.score = 0
        self.level = 1
        self.gravity_interval = self.config.initial_interval
        self.lines_cleared_total = 0
        self.game_over = False
        if not self.controller.spawn():
            self._end_game()

    @property
    def active_piece(self) -> Optional[Piece]:
        return self.controller.active

    @property
    def next_piece(self) -> Optional[Piece]:
        return self.controller.next_piece

    @property
    def stored_piece(self) -> Optional[Piece]:
        return self.controller.stored

    @property
    def can_store(self) -> bool:
        return self.controller.can_store

    def _playing(self) -> bool:
        return not self.game_over and self.controller.active is not None

    def _end_game(self) -> None:
        self.game_over = True
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines_cleared_total)

    def _lock_and_advance(self, dropped_rows: int = 0) -> int:
        piece = self.controller.release_active()
        if np.any(piece.cells()[:, self.board.ndim - 2] < 0):
            # landed while still poking out above the top row
            self._end_game()
            return 0
        self.board.lock(piece)
        lines = self.board.clear_full_lines()
        gained = self.rules.score_for_lock(lines, dropped_rows)
        self.score += gained
        self.lines_cleared_total += lines
        if self.score > self.high_score:
            self.high_score = self.score
        if self.rules.should_level_up(self.score, self.level):
            self.level += 1
            self.gravity_interval = self.rules.next_interval(self.gravity_interval)
            logger.info("level %d reached, gravity interval %d", self.level, self.gravity_interval)
        if not self.controller.advance():
            self._end_game()
        return gained

    # Intents -----------------------------------------------------------------
    def move_left(self) -> bool:
        return self._playing() and self.controller.move_left()

    def move_right(self) -> bool:
        return self._playing() and self.controller.move_right()

    def move_forward(self) -> bool:
        return self._playing() and self.controller.move_forward()

    def move_backward(self) -> bool:
        return self._playing() and self.controller.move_backward()

    def rotate(self, axis: Optional[str] = None) -> bool:
        return self._playing() and self.controller.rotate(axis)

    def move_down(self) -> bool:
        """One row of gravity; locks the piece when it cannot fall."""
        if not self._playing():
            return False
        if not self.controller.step_down():
            self._lock_and_advance()
        return True

    def advance_gravity(self) -> bool:
        return self.move_down()

    def hard_drop(self) -> bool:
        if not self._playing():
            return False
        dropped = self.controller.hard_drop()
        self._lock_and_advance(dropped_rows=dropped)
        return True

    def store(self) -> bool:
        if not self._playing():
            return False
        changed = self.controller.store()
        if self.controller.active is None:
            self._end_game()
        return changed

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, {}

        score_before = self.score
        handlers = {
            Action.LEFT: self.move_left,
            Action.RIGHT: self.move_right,
            Action.SOFT_DROP: self.move_down,
            Action.HARD_DROP: self.hard_drop,
            Action.ROTATE: self.rotate,
            Action.ROTATE_X: lambda: self.rotate("x"),
            Action.ROTATE_Y: lambda: self.rotate("y"),
            Action.FORWARD: self.move_forward,
            Action.BACKWARD: self.move_backward,
            Action.STORE: self.store,
        }
        handler = handlers.get(Action(action))
        changed = handler() if handler is not None else False

        info = {
            "score": self.score,
            "level": self.level,
            "lines_cleared_total": self.lines_cleared_total,
            "changed": changed,
        }
        return self.get_state(), self.score - score_before, self.game_over, info

    # Outbound views ---------------------------------------------------------
    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board for observation
        state = self.board.clone_state()
        piece = self.controller.active
        if piece is not None and not self.game_over:
            for coord in piece.cells():
                if self.board.is_inside(tuple(coord)):
                    # Use negative to indicate falling piece overlay
                    state[tuple(coord)] = -piece.color_id
        return state

    def snapshot(self) -> Snapshot:
        board = self.board.clone_state()
        board.setflags(write=False)
        return Snapshot(
            board=board,
            active=self.controller.active,
            next_piece=self.controller.next_piece,
            stored=self.controller.stored,
            ghost=None if self.game_over else self.controller.ghost(),
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared_total,
            gravity_interval=self.gravity_interval,
            high_score=self.high_score,
            can_store=self.controller.can_store,
            game_over=self.game_over,
        )
