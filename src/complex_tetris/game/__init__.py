"""Game module for Complex Tetris.

Exports the state machine and supporting pieces:
- ShapeType, SHAPES, PIECE_COLORS: piece templates as complex offsets
- create_empty_board, is_valid_position, lock_piece, clear_lines: board rules
- ScoringRules, calculate_score: line-clear scoring and levels
- GameState, GameConfig, TetrisMachine, Action: immutable state transitions
- TetrisGame, PieceSnapshot: command driver with piece observers
"""

from .pieces import (
    PIECE_COLORS,
    SHAPES,
    ShapeType,
    random_shape_picker,
    rotate_piece,
    transform_piece,
    translate_piece,
)
from .grid import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    LineClearResult,
    clear_lines,
    complex_to_board,
    create_empty_board,
    is_valid_position,
    lock_piece,
)
from .rules import ScoringRules, calculate_score, drop_interval_ms, level_for_lines
from .core import Action, GameConfig, GameState, Position, TetrisMachine
from .session import PieceSnapshot, TetrisGame

__all__ = [
    "PIECE_COLORS",
    "SHAPES",
    "ShapeType",
    "random_shape_picker",
    "rotate_piece",
    "transform_piece",
    "translate_piece",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "LineClearResult",
    "clear_lines",
    "complex_to_board",
    "create_empty_board",
    "is_valid_position",
    "lock_piece",
    "ScoringRules",
    "calculate_score",
    "drop_interval_ms",
    "level_for_lines",
    "Action",
    "GameConfig",
    "GameState",
    "Position",
    "TetrisMachine",
    "PieceSnapshot",
    "TetrisGame",
]
