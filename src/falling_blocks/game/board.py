from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidPlacementError
from .pieces import Piece


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, ...]


def clear_full_lines(cells: np.ndarray) -> Tuple[np.ndarray, int]:
    """Remove every full row and top-pad with empty rows.

    Works on ``(height, width)`` grids and on ``(depth, height, width)``
    volumes, where each depth layer is compacted independently. The input is
    left untouched; the returned array always has the input's shape.
    """
    if cells.ndim == 2:
        return _clear_layer(cells)
    layers = []
    total = 0
    for layer in cells:
        cleared, count = _clear_layer(layer)
        layers.append(cleared)
        total += count
    return np.stack(layers), total


def _clear_layer(layer: np.ndarray) -> Tuple[np.ndarray, int]:
    full_rows = np.where(np.all(layer != 0, axis=1))[0]
    if full_rows.size == 0:
        return layer.copy(), 0
    num = int(full_rows.size)
    kept = np.delete(layer, full_rows, axis=0)
    new_rows = np.zeros((num, layer.shape[1]), dtype=layer.dtype)
    return np.vstack((new_rows, kept)), num


class Board:
    """Fixed-extent grid of cell values.

    ``dims`` is ``(height, width)`` for flat boards or
    ``(depth, height, width)`` for volumetric ones. 0 is empty and positive
    integers are shape-catalog colour ids.
    """

    def __init__(self, dims: Sequence[int]) -> None:
        dims = tuple(int(d) for d in dims)
        if len(dims) not in (2, 3):
            raise ValueError(f"board needs 2 or 3 extents, got {len(dims)}")
        if any(d <= 0 for d in dims):
            raise ValueError(f"board extents must be positive, got {dims}")
        self.cells = np.zeros(dims, dtype=np.int8)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.cells.shape

    @property
    def ndim(self) -> int:
        return self.cells.ndim

    @property
    def height(self) -> int:
        return self.cells.shape[-2]

    @property
    def width(self) -> int:
        return self.cells.shape[-1]

    @property
    def depth(self) -> int:
        return self.cells.shape[0] if self.ndim == 3 else 1

    def reset(self) -> None:
        self.cells.fill(0)

    def is_inside(self, coord: Coordinate) -> bool:
        return len(coord) == self.ndim and all(0 <= c < n for c, n in zip(coord, self.shape))

    def is_occupied(self, coord: Coordinate) -> bool:
        if not self.is_inside(coord):
            return False
        return bool(self.cells[tuple(coord)] != 0)

    def lock(self, piece: Piece) -> None:
        """Write the piece's colour into every cell it covers."""
        if piece.ndim != self.ndim:
            raise InvalidPlacementError("piece and board dimensionality differ")
        coords = piece.cells()
        shape = np.asarray(self.shape)
        if np.any(coords < 0) or np.any(coords >= shape):
            raise InvalidPlacementError(f"piece at {piece.position} extends outside the board")
        index = tuple(coords.T)
        if np.any(self.cells[index] != 0):
            raise InvalidPlacementError(f"piece at {piece.position} overlaps locked cells")
        self.cells[index] = piece.color_id
        logger.debug("locked colour %d at %s", piece.color_id, piece.position)

    def clear_full_lines(self) -> int:
        self.cells, count = clear_full_lines(self.cells)
        if count:
            logger.debug("cleared %d line(s)", count)
        return count

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty row across all layers
        occupied = self.cells != 0
        if occupied.ndim == 3:
            occupied = occupied.any(axis=0)
        non_empty_rows = np.where(np.any(occupied, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        occupied = self.cells != 0
        layers = occupied if occupied.ndim == 3 else occupied[np.newaxis]
        # a hole is an empty cell with a filled cell somewhere above it
        covered = np.maximum.accumulate(layers, axis=1)
        return int(np.sum(covered & ~layers))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
