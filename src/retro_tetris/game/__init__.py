"""Game module for Retro Tetris.

Exports the core game engine and supporting classes:
- GameGrid: Board of locked cells and row clearing
- Piece: Falling tetromino with 4x4 shape and anchor
- TetrominoType: Enum of available piece kinds
- PieceRandomizer: Uniform random piece source
- ScoringRules / GravityRules: Scoring law and speed curve
- TetrisGame: Engine, command surface and mode state machine
"""

from .grid import GameGrid
from .pieces import Piece, TetrominoType, TEMPLATES, rotate_shape
from .randomizer import PieceRandomizer
from .rules import GravityRules, ScoringRules
from .core import Action, GameConfig, GameMode, LockResult, TetrisGame

__all__ = [
    "GameGrid",
    "Piece",
    "TetrominoType",
    "TEMPLATES",
    "rotate_shape",
    "PieceRandomizer",
    "GravityRules",
    "ScoringRules",
    "Action",
    "GameConfig",
    "GameMode",
    "LockResult",
    "TetrisGame",
]
