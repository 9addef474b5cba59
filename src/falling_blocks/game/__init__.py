"""Rules engine for falling-block puzzles on flat and volumetric boards.

Exports the core game engine and supporting classes:
- ShapeCatalog / TetrominoType: the seven piece templates and spawn placement
- Board: fixed-extent cell grid with locking and line clearing
- Piece: immutable shape + position + colour value
- PieceController: active/next/stored pieces and movement intents
- ScoringRules: score, level and gravity progression
- GameSession: the top-level state machine, with GameConfig presets
"""

from .board import Board, clear_full_lines
from .collision import KICKS, drop_position, is_valid, rotate_shape, try_rotate
from .controller import PieceController
from .core import Action, GameConfig, GameSession, Snapshot
from .errors import InvalidPlacementError
from .pieces import Piece
from .rules import ScoringRules
from .shapes import COLORS, ShapeCatalog, TetrominoType, color_rgb

__all__ = [
    "Action",
    "Board",
    "COLORS",
    "GameConfig",
    "GameSession",
    "InvalidPlacementError",
    "KICKS",
    "Piece",
    "PieceController",
    "ScoringRules",
    "ShapeCatalog",
    "Snapshot",
    "TetrominoType",
    "clear_full_lines",
    "color_rgb",
    "drop_position",
    "is_valid",
    "rotate_shape",
    "try_rotate",
]
