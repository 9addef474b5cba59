from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .pieces import Piece, Position, Shape


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    Z = 6
    S = 7


def _template(rows: Sequence[Sequence[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _template([[1, 1, 1, 1]]),
    TetrominoType.O: _template([[1, 1], [1, 1]]),
    TetrominoType.T: _template([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.L: _template([[1, 1, 1], [1, 0, 0]]),
    TetrominoType.J: _template([[1, 1, 1], [0, 0, 1]]),
    TetrominoType.Z: _template([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.S: _template([[0, 1, 1], [1, 1, 0]]),
}

COLORS: Dict[int, str] = {
    TetrominoType.I: "#00FFFF",
    TetrominoType.O: "#FFFF00",
    TetrominoType.T: "#800080",
    TetrominoType.L: "#0000FF",
    TetrominoType.J: "#FFA500",
    TetrominoType.Z: "#00FF00",
    TetrominoType.S: "#FF0000",
}

NUM_COLORS = len(TetrominoType)


def color_rgb(color_id: int) -> Tuple[int, int, int]:
    """Resolve a cell value to an RGB triple for renderers."""
    hex_code = COLORS[TetrominoType(color_id)].lstrip("#")
    return int(hex_code[0:2], 16), int(hex_code[2:4], 16), int(hex_code[4:6], 16)


class ShapeCatalog:
    """The seven tetromino templates for a board with ``ndim`` spatial axes.

    Volumetric boards (``ndim == 3``) get the same 2D templates embedded in a
    single depth layer. Selection is uniform; there is no bag.
    """

    def __init__(self, ndim: int = 2, rng: Optional[random.Random] = None) -> None:
        if ndim not in (2, 3):
            raise ValueError(f"ndim must be 2 or 3, got {ndim}")
        self.ndim = ndim
        self.rng = rng or random.Random()

    def template(self, kind: TetrominoType) -> Shape:
        base = BASE_SHAPES[TetrominoType(kind)]
        if self.ndim == 3:
            return base[np.newaxis, :, :]
        return base

    def random_template(self) -> Tuple[Shape, int]:
        kind = self.rng.choice(list(TetrominoType))
        return self.template(kind), int(kind)

    @staticmethod
    def spawn_position(shape: Shape, board_shape: Sequence[int]) -> Position:
        if shape.ndim != len(board_shape):
            raise ValueError("shape and board dimensionality differ")
        width = board_shape[-1]
        x = width // 2 - shape.shape[-1] // 2
        if len(board_shape) == 2:
            return (0, x)
        depth = board_shape[0]
        z = depth // 2 - shape.shape[0] // 2
        return (z, 0, x)

    def new_piece(self, board_shape: Sequence[int]) -> Piece:
        shape, color_id = self.random_template()
        return Piece(shape=shape, position=self.spawn_position(shape, board_shape), color_id=color_id)
