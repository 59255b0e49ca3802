"""Complex-number engine for Complex Tetris.

Exports the immutable value type and the pure functions built on it:
- Complex, Polar: value types
- add, subtract, multiply, divide, magnitude, phase: arithmetic
- rotate_by_i, rotate, exp, square, reciprocal: transforms
- to_polar, from_polar: polar conversion
- ComplexFunction, apply_function: tag-based dispatch with identity fallback
"""

from .core import (
    I,
    ONE,
    ZERO,
    Complex,
    Polar,
    add,
    divide,
    exp,
    from_polar,
    magnitude,
    multiply,
    phase,
    reciprocal,
    rotate,
    rotate_by_i,
    square,
    subtract,
    to_polar,
)
from .functions import ComplexFunction, apply_function, function_label, parse_function

__all__ = [
    "I",
    "ONE",
    "ZERO",
    "Complex",
    "Polar",
    "add",
    "subtract",
    "multiply",
    "divide",
    "magnitude",
    "phase",
    "rotate_by_i",
    "rotate",
    "exp",
    "square",
    "reciprocal",
    "to_polar",
    "from_polar",
    "ComplexFunction",
    "apply_function",
    "function_label",
    "parse_function",
]
