from __future__ import annotations

import itertools
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from falling_blocks.game import GameConfig, GameSession, ShapeCatalog, TetrominoType


class FixedCatalog(ShapeCatalog):
    """Catalog that deals a fixed, repeating sequence of piece types."""

    def __init__(self, kinds: Sequence[TetrominoType], ndim: int = 2) -> None:
        super().__init__(ndim)
        self._kinds = itertools.cycle(kinds)

    def random_template(self) -> Tuple[np.ndarray, int]:
        kind = next(self._kinds)
        return self.template(kind), int(kind)


def make_session(
    kinds: Sequence[TetrominoType] = (TetrominoType.I,),
    config: Optional[GameConfig] = None,
) -> GameSession:
    config = config or GameConfig.canvas()
    return GameSession(config, catalog=FixedCatalog(kinds, ndim=config.ndim))


def fill_row(cells: np.ndarray, row: int, skip: Iterable[int] = (), value: int = 7) -> None:
    """Occupy every column of ``row`` except those in ``skip``."""
    cells[..., row, :] = value
    for col in skip:
        cells[..., row, col] = 0
