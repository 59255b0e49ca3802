from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from complex_tetris.complexlib import Complex

from .pieces import snap


BOARD_WIDTH = 10
BOARD_HEIGHT = 20

EMPTY = 0

Coordinate = Tuple[int, int]


@dataclass
class LineClearResult:
    board: np.ndarray
    lines_cleared: int


def create_empty_board(width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> np.ndarray:
    """Board of `height` rows by `width` columns.

    0 is an empty cell and positive integers are colour codes of locked
    blocks (see `pieces.color_code`).
    """
    return np.zeros((height, width), dtype=np.int8)


def complex_to_board(pos: Complex, anchor: Tuple[int, int]) -> Coordinate:
    x, y = anchor
    return x + int(snap(pos.re)), y + int(snap(pos.im))


def _is_finite(pos: Complex) -> bool:
    return math.isfinite(pos.re) and math.isfinite(pos.im)


def piece_cells(piece: Iterable[Complex], anchor: Tuple[int, int]) -> List[Coordinate]:
    return [complex_to_board(pos, anchor) for pos in piece]


def is_valid_position(piece: Iterable[Complex], anchor: Tuple[int, int], board: np.ndarray) -> bool:
    """Every cell must be inside the columns, above the floor and on an empty cell.

    Rows above the top edge (y < 0) are allowed so pieces can spawn partly
    out of view.
    """
    height, width = board.shape
    for pos in piece:
        if not _is_finite(pos):
            return False
        x, y = complex_to_board(pos, anchor)
        if x < 0 or x >= width or y >= height:
            return False
        if y >= 0 and board[y, x] != EMPTY:
            return False
    return True


def lock_piece(piece: Iterable[Complex], anchor: Tuple[int, int], board: np.ndarray, color: int) -> np.ndarray:
    """Return a copy of `board` with the piece merged in.

    Cells outside the visible board are skipped.
    """
    new_board = board.copy()
    height, width = new_board.shape
    for pos in piece:
        if not _is_finite(pos):
            continue
        x, y = complex_to_board(pos, anchor)
        if 0 <= y < height and 0 <= x < width:
            new_board[y, x] = color
    return new_board


def clear_lines(board: np.ndarray) -> LineClearResult:
    full_rows = np.where(np.all(board != EMPTY, axis=1))[0]
    if full_rows.size == 0:
        return LineClearResult(board=board.copy(), lines_cleared=0)
    num = int(full_rows.size)
    # Remove full rows and add empty rows at the top
    kept = np.delete(board, full_rows, axis=0)
    new_rows = np.zeros((num, board.shape[1]), dtype=board.dtype)
    return LineClearResult(board=np.vstack((new_rows, kept)), lines_cleared=num)

