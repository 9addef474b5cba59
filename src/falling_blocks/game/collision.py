"""Collision checks, rotation and drop projection.

Everything here is a pure function of a piece and a board; nothing mutates
either. The piece controller is the only caller that acts on the results.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from .board import Board
from .pieces import Piece, Shape


# (dx, dy) offsets tried in order when a plain rotation is blocked
KICKS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, -1),
    (1, -1),
    (-1, -1),
)

# axes (from, to) of the quarter turn for each rotation axis of a (z, y, x) shape
_ROTATION_PLANES = {
    "x": (1, 0),
    "y": (2, 0),
    "z": (2, 1),
}


def is_valid(piece: Piece, board: Board) -> bool:
    """Whether ``piece`` fits on ``board`` at its current position.

    Cells above the top row (negative y) are only checked against the
    horizontal and depth bounds.
    """
    if piece.ndim != board.ndim:
        return False
    coords = piece.cells()
    if coords.size == 0:
        return True
    vertical = board.ndim - 2
    for axis, extent in enumerate(board.shape):
        column = coords[:, axis]
        if axis == vertical:
            if np.any(column >= extent):
                return False
        elif np.any(column < 0) or np.any(column >= extent):
            return False
    visible = coords[coords[:, vertical] >= 0]
    if visible.size == 0:
        return True
    return not np.any(board.cells[tuple(visible.T)] != 0)


def rotate_shape(shape: Shape, axis: Optional[str] = None) -> Shape:
    """Quarter-turn a shape clockwise.

    Flat shapes ignore ``axis``. Volumetric shapes turn about ``"x"``, ``"y"``
    or ``"z"`` (default) and the result is flattened back onto a single depth
    layer, so turning about x or y projects the piece rather than tipping it.
    """
    if shape.ndim == 2:
        result = np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))
    else:
        plane = _ROTATION_PLANES.get(axis or "z")
        if plane is None:
            raise ValueError(f"unknown rotation axis {axis!r}")
        turned = np.rot90(shape, 1, axes=plane)
        result = np.any(turned != 0, axis=0, keepdims=True).astype(shape.dtype)
    result.setflags(write=False)
    return result


def kick_offsets(ndim: int, kicks: Sequence[Tuple[int, int]]) -> Tuple[Tuple[int, ...], ...]:
    """Turn (dx, dy) kicks into position offsets in the board's axis order."""
    if ndim == 2:
        return tuple((dy, dx) for dx, dy in kicks)
    return tuple((0, dy, dx) for dx, dy in kicks)


def try_rotate(
    piece: Piece,
    board: Board,
    axis: Optional[str] = None,
    kicks: Sequence[Tuple[int, int]] = (),
) -> Optional[Piece]:
    """Rotated piece, kicked if needed, or ``None`` when nothing fits."""
    rotated = piece.with_shape(rotate_shape(piece.shape, axis))
    if is_valid(rotated, board):
        return rotated
    for offset in kick_offsets(piece.ndim, kicks):
        kicked = rotated.offset(offset)
        if is_valid(kicked, board):
            return kicked
    return None


def drop_distance(piece: Piece, board: Board) -> int:
    """Rows the piece can fall before hitting the stack or the floor."""
    vertical = board.ndim - 2
    distance = 0
    # bounded by board height plus however far the piece starts above row 0
    limit = board.height - piece.y
    while distance < limit and is_valid(piece.moved(vertical, distance + 1), board):
        distance += 1
    return distance


def drop_position(piece: Piece, board: Board) -> Piece:
    return piece.moved(board.ndim - 2, drop_distance(piece, board))
