from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np


Shape = np.ndarray
# Numpy axis order: (y, x) on flat boards, (z, y, x) on volumetric boards.
Position = Tuple[int, ...]


@dataclass(frozen=True, eq=False)
class Piece:
    shape: Shape
    position: Position
    color_id: int

    @property
    def ndim(self) -> int:
        return self.shape.ndim

    @property
    def x(self) -> int:
        return self.position[-1]

    @property
    def y(self) -> int:
        return self.position[-2]

    @property
    def z(self) -> int:
        return self.position[0] if self.ndim == 3 else 0

    def moved(self, axis: int, delta: int) -> "Piece":
        pos = list(self.position)
        pos[axis] += delta
        return replace(self, position=tuple(pos))

    def offset(self, offsets: Position) -> "Piece":
        return replace(self, position=tuple(p + d for p, d in zip(self.position, offsets)))

    def with_shape(self, shape: Shape) -> "Piece":
        return replace(self, shape=shape)

    def at(self, position: Position) -> "Piece":
        return replace(self, position=tuple(position))

    def cells(self) -> np.ndarray:
        """Board coordinates of the occupied sub-cells, one row per cell."""
        return np.argwhere(self.shape != 0) + np.asarray(self.position, dtype=np.int64)

    def same_as(self, other: "Piece") -> bool:
        return (
            self.color_id == other.color_id
            and tuple(self.position) == tuple(other.position)
            and np.array_equal(self.shape, other.shape)
        )
