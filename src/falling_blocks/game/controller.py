from __future__ import annotations

import logging
from typing import Optional

from .board import Board
from .collision import KICKS, drop_distance, drop_position, is_valid, try_rotate
from .pieces import Piece
from .shapes import ShapeCatalog


logger = logging.getLogger(__name__)


class PieceController:
    """Owns the active, next and stored pieces.

    Every intent returns ``True`` when it changed the active piece and
    ``False`` when it was rejected; a rejected intent leaves everything as it
    was. ``active`` is ``None`` only after a spawn failed to fit, which the
    session treats as game over.
    """

    def __init__(
        self,
        catalog: ShapeCatalog,
        board: Board,
        hold_enabled: bool = False,
        kicks_enabled: bool = False,
    ) -> None:
        if catalog.ndim != board.ndim:
            raise ValueError("catalog and board dimensionality differ")
        self.catalog = catalog
        self.board = board
        self.hold_enabled = hold_enabled
        self.kicks_enabled = kicks_enabled
        self.active: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.stored: Optional[Piece] = None
        self.can_store = True

    def reset(self) -> None:
        self.active = None
        self.next_piece = None
        self.stored = None
        self.can_store = True

    @property
    def vertical_axis(self) -> int:
        return self.board.ndim - 2

    def _draw(self) -> Piece:
        return self.catalog.new_piece(self.board.shape)

    def spawn(self) -> bool:
        """Promote the next piece (drawing one if there is none) to active."""
        candidate = self.next_piece if self.next_piece is not None else self._draw()
        if not is_valid(candidate, self.board):
            self.active = None
            logger.debug("spawn blocked at %s", candidate.position)
            return False
        self.active = candidate
        self.next_piece = self._draw()
        return True

    def advance(self) -> bool:
        """Spawn after a lock; re-arms the hold when the new piece fits."""
        if not self.spawn():
            return False
        self.can_store = True
        return True

    def release_active(self) -> Piece:
        assert self.active is not None, "no active piece to release"
        piece, self.active = self.active, None
        return piece

    def _try(self, candidate: Piece) -> bool:
        if not is_valid(candidate, self.board):
            return False
        self.active = candidate
        return True

    def shift(self, axis: int, delta: int) -> bool:
        if self.active is None:
            return False
        return self._try(self.active.moved(axis, delta))

    def move_left(self) -> bool:
        return self.shift(self.board.ndim - 1, -1)

    def move_right(self) -> bool:
        return self.shift(self.board.ndim - 1, 1)

    def move_forward(self) -> bool:
        if self.board.ndim != 3:
            return False
        return self.shift(0, -1)

    def move_backward(self) -> bool:
        if self.board.ndim != 3:
            return False
        return self.shift(0, 1)

    def step_down(self) -> bool:
        return self.shift(self.vertical_axis, 1)

    def rotate(self, axis: Optional[str] = None) -> bool:
        if self.active is None:
            return False
        if self.board.ndim == 2:
            axis = None
        kicks = KICKS if self.kicks_enabled else ()
        rotated = try_rotate(self.active, self.board, axis=axis, kicks=kicks)
        if rotated is None:
            return False
        self.active = rotated
        return True

    def hard_drop(self) -> int:
        """Move the active piece to its landing row; returns rows travelled."""
        if self.active is None:
            return 0
        distance = drop_distance(self.active, self.board)
        self.active = self.active.moved(self.vertical_axis, distance)
        return distance

    def ghost(self) -> Optional[Piece]:
        if self.active is None:
            return None
        return drop_position(self.active, self.board)

    def store(self) -> bool:
        if not self.hold_enabled or not self.can_store or self.active is None:
            return False
        # the attempt uses up the hold for this piece even if the swap is blocked
        self.can_store = False
        if self.stored is None:
            self.stored = self.release_active()
            self.spawn()
            return True
        restored = self.stored.at(self.catalog.spawn_position(self.stored.shape, self.board.shape))
        if not is_valid(restored, self.board):
            return False
        self.stored, self.active = self.active, restored
        return True
