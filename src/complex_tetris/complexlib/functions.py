from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Union

from .core import Complex, exp, reciprocal, rotate_by_i, square


class ComplexFunction(str, Enum):
    ROTATION = "rotation"
    SQUARE = "square"
    EXP = "exp"
    RECIPROCAL = "reciprocal"


_DISPATCH: Dict[ComplexFunction, Callable[[Complex], Complex]] = {
    ComplexFunction.ROTATION: rotate_by_i,
    ComplexFunction.SQUARE: square,
    ComplexFunction.EXP: exp,
    ComplexFunction.RECIPROCAL: reciprocal,
}

_LABELS: Dict[ComplexFunction, str] = {
    ComplexFunction.ROTATION: "f(z) = i·z",
    ComplexFunction.SQUARE: "f(z) = z²",
    ComplexFunction.EXP: "f(z) = eᶻ",
    ComplexFunction.RECIPROCAL: "f(z) = 1/z",
}


def parse_function(kind: Union[ComplexFunction, str, None]) -> ComplexFunction | None:
    """Map a tag onto a known function, or None for anything unrecognised."""
    if isinstance(kind, ComplexFunction):
        return kind
    try:
        return ComplexFunction(kind)
    except ValueError:
        return None


def apply_function(kind: Union[ComplexFunction, str, None], z: Complex) -> Complex:
    """Apply the named function to z.

    Unknown tags fall through to the identity so callers can pass any
    selector value without guarding.
    """
    func = parse_function(kind)
    if func is None:
        return z
    return _DISPATCH[func](z)


def function_label(kind: Union[ComplexFunction, str, None]) -> str:
    func = parse_function(kind)
    if func is None:
        return "f(z) = z"
    return _LABELS[func]
