from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Complex:
    """Immutable complex value (re + im*i).

    Operators route through the module functions so that division by a
    zero-magnitude value yields infinities instead of raising.
    """

    re: float
    im: float = 0.0

    def __add__(self, other: "Complex") -> "Complex":
        return add(self, other)

    def __sub__(self, other: "Complex") -> "Complex":
        return subtract(self, other)

    def __mul__(self, other: "Complex") -> "Complex":
        return multiply(self, other)

    def __truediv__(self, other: "Complex") -> "Complex":
        return divide(self, other)

    def __neg__(self) -> "Complex":
        return Complex(-self.re, -self.im)

    def __abs__(self) -> float:
        return magnitude(self)

    def to_builtin(self) -> complex:
        return complex(self.re, self.im)

    @classmethod
    def from_builtin(cls, value: complex) -> "Complex":
        return cls(value.real, value.imag)


class Polar(NamedTuple):
    r: float
    theta: float


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
I = Complex(0.0, 1.0)


def _cos(angle: float) -> float:
    # math.cos raises on +-inf
    return math.cos(angle) if not math.isinf(angle) else math.nan


def _sin(angle: float) -> float:
    return math.sin(angle) if not math.isinf(angle) else math.nan


def add(z1: Complex, z2: Complex) -> Complex:
    return Complex(z1.re + z2.re, z1.im + z2.im)


def subtract(z1: Complex, z2: Complex) -> Complex:
    return Complex(z1.re - z2.re, z1.im - z2.im)


def multiply(z1: Complex, z2: Complex) -> Complex:
    return Complex(z1.re * z2.re - z1.im * z2.im, z1.re * z2.im + z1.im * z2.re)


def divide(z1: Complex, z2: Complex) -> Complex:
    """Return z1 / z2, or (inf, inf) when z2 has zero magnitude."""
    denominator = z2.re * z2.re + z2.im * z2.im
    if denominator == 0:
        return Complex(math.inf, math.inf)
    return Complex(
        (z1.re * z2.re + z1.im * z2.im) / denominator,
        (z1.im * z2.re - z1.re * z2.im) / denominator,
    )


def magnitude(z: Complex) -> float:
    return math.hypot(z.re, z.im)


def phase(z: Complex) -> float:
    """Angle of z in (-pi, pi]; the origin has phase 0."""
    if z.re == 0 and z.im == 0:
        return 0.0
    theta = math.atan2(z.im, z.re)
    # atan2(-0.0, x<0) gives -pi
    if theta == -math.pi:
        return math.pi
    return theta


def rotate_by_i(z: Complex) -> Complex:
    """Multiply by i: a quarter turn counterclockwise with the imaginary axis up.

    On a screen whose y axis points down this reads as a clockwise turn.
    """
    return Complex(-z.im, z.re)


def rotate(z: Complex, angle: float) -> Complex:
    cos = _cos(angle)
    sin = _sin(angle)
    return Complex(z.re * cos - z.im * sin, z.re * sin + z.im * cos)


def exp(z: Complex) -> Complex:
    try:
        scale = math.exp(z.re)
    except OverflowError:
        scale = math.inf
    return Complex(scale * _cos(z.im), scale * _sin(z.im))


def square(z: Complex) -> Complex:
    return multiply(z, z)


def reciprocal(z: Complex) -> Complex:
    return divide(ONE, z)


def to_polar(z: Complex) -> Polar:
    return Polar(magnitude(z), phase(z))


def from_polar(r: float, theta: float) -> Complex:
    return Complex(r * _cos(theta), r * _sin(theta))
