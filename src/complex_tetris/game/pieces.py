from __future__ import annotations

import math
import random
from enum import IntEnum
from typing import Callable, Dict, Optional, Tuple

from complex_tetris.complexlib import Complex, ComplexFunction, add, apply_function, rotate_by_i


class ShapeType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


# Four offsets around the logical centre (complex origin)
Offsets = Tuple[Complex, Complex, Complex, Complex]

ShapePicker = Callable[[], ShapeType]


def _offsets(*pairs: Tuple[int, int]) -> Offsets:
    return tuple(Complex(re, im) for re, im in pairs)  # type: ignore[return-value]


SHAPES: Dict[ShapeType, Offsets] = {
    ShapeType.I: _offsets((-1, 0), (0, 0), (1, 0), (2, 0)),
    ShapeType.O: _offsets((0, 0), (1, 0), (0, 1), (1, 1)),
    ShapeType.T: _offsets((-1, 0), (0, 0), (1, 0), (0, 1)),
    ShapeType.S: _offsets((0, 0), (1, 0), (-1, 1), (0, 1)),
    ShapeType.Z: _offsets((-1, 0), (0, 0), (0, 1), (1, 1)),
    ShapeType.J: _offsets((-1, 1), (-1, 0), (0, 0), (1, 0)),
    ShapeType.L: _offsets((1, 1), (-1, 0), (0, 0), (1, 0)),
}

PIECE_COLORS: Dict[ShapeType, str] = {
    ShapeType.I: "#00f0f0",
    ShapeType.O: "#f0f000",
    ShapeType.T: "#a000f0",
    ShapeType.S: "#00f000",
    ShapeType.Z: "#f00000",
    ShapeType.J: "#0000f0",
    ShapeType.L: "#f0a000",
}


def color_code(kind: ShapeType) -> int:
    """Board marker written for a locked cell of this shape."""
    return int(kind)


def snap(value: float) -> float:
    """Round half up to the integer lattice; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def snap_to_grid(z: Complex) -> Complex:
    return Complex(snap(z.re), snap(z.im))


def rotate_piece(piece: Offsets) -> Offsets:
    return tuple(rotate_by_i(pos) for pos in piece)  # type: ignore[return-value]


def translate_piece(piece: Offsets, offset: Complex) -> Offsets:
    return tuple(add(pos, offset) for pos in piece)  # type: ignore[return-value]


def transform_piece(piece: Offsets, kind: ComplexFunction | str) -> Offsets:
    """Apply a complex function to every offset and snap the result to the grid.

    Non-rigid functions can fold two offsets onto the same cell; the piece
    keeps four offsets regardless.
    """
    return tuple(snap_to_grid(apply_function(kind, pos)) for pos in piece)  # type: ignore[return-value]


def random_shape_picker(rng: Optional[random.Random] = None) -> ShapePicker:
    rng = rng or random.Random()
    kinds = list(ShapeType)

    def pick() -> ShapeType:
        return rng.choice(kinds)

    return pick
