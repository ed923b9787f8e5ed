"""Game module for Tetris RL.

Exports the core game engine and supporting classes:
- grid operations: intersect, merge, check_removing (ClearResult)
- TetrominoType / PieceShapes: the seven pieces and their rotation tables
- BagRandomizer: 7-bag piece supply with lookahead
- ActivePiece: falling-piece state machine
- Board: grid owner orchestrating spawn, move, lock and clear
- ScoringRules / Score / LevelManager: scoring and level progression
- TetrisGame: tick loop, hard drop and hold on top of Board
"""

from .config import GameConfig
from .grid import ClearResult, check_removing, intersect, merge
from .pieces import PieceShapes, TetrominoType
from .supply import BagRandomizer
from .controller import ActivePiece
from .board import Board, ViewData
from .rules import Score, ScoringRules
from .progression import LevelManager, LevelUpdate
from .core import Action, DownResult, EventSource, HoldSlot, TetrisGame

__all__ = [
    "GameConfig",
    "ClearResult",
    "check_removing",
    "intersect",
    "merge",
    "PieceShapes",
    "TetrominoType",
    "BagRandomizer",
    "ActivePiece",
    "Board",
    "ViewData",
    "Score",
    "ScoringRules",
    "LevelManager",
    "LevelUpdate",
    "Action",
    "DownResult",
    "EventSource",
    "HoldSlot",
    "TetrisGame",
]
