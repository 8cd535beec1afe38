"""
Exact Coordinates
=================
Points, the coordinate capability and the exact number ring.

Why is this file needed?
------------------------
1. Exactness: Every predicate in this package is a sign test. The ring used
   here is Python's `int` together with `fractions.Fraction`, so equality and
   sign are always exact. Floats are accepted but converted to the exact
   rational value they store; no tolerance is ever applied.
2. Decoupling: Points are opaque to the algorithms. Coordinates are read
   through a `CoordinateProvider`, so callers can classify their own point
   type by supplying a provider with a `get(point)` method.

Classes:
    HomogeneousPoint: Default point value type (x, y, w) with w > 0.
    CoordinateProvider: Protocol of the coordinate capability.
    HomogeneousCoordinates: Default provider for HomogeneousPoint and tuples.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Protocol, Union, runtime_checkable

import numpy as np

# Element of the exact ring
Exact = Union[int, Fraction]
HomogeneousTriple = tuple[Exact, Exact, Exact]


def to_exact(value: Any) -> Exact:
    """
    Convert a number into the exact ring.

    Args:
        value: An integer, a rational (e.g. Fraction) or a finite float.

    Raises:
        TypeError: If `value` is not a real number.
        ValueError: If `value` is a non-finite float.

    Returns:
        An `int` for integral input, a `Fraction` otherwise.
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not coordinates.")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Rational):
        return Fraction(int(value.numerator), int(value.denominator))
    if isinstance(value, (float, np.floating)):
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be finite, got {value}.")
        return Fraction(float(value))
    raise TypeError(f"Unsupported coordinate type: {type(value).__name__}")


def sign(value: Exact) -> int:
    """Sign of an exact number as -1, 0 or 1."""
    return (value > 0) - (value < 0)


@dataclass(frozen=True, eq=False)
class HomogeneousPoint:
    """
    A planar point in homogeneous coordinates, representing (x/w, y/w).

    Two points are equal when they represent the same planar point,
    e.g. HomogeneousPoint(1, 2, 1) == HomogeneousPoint(2, 4, 2).
    """
    x: Exact
    y: Exact
    w: Exact = 1

    def __post_init__(self) -> None:
        x, y, w = to_exact(self.x), to_exact(self.y), to_exact(self.w)
        if w <= 0:
            raise ValueError(f"Homogeneous weight must be positive, got {w}.")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "w", w)

    @classmethod
    def from_cartesian(cls, x: Any, y: Any) -> HomogeneousPoint:
        """Build a point with integer homogeneous coordinates from (x, y)."""
        fx, fy = Fraction(to_exact(x)), Fraction(to_exact(y))
        w = fx.denominator * fy.denominator // math.gcd(fx.denominator, fy.denominator)
        return cls(int(fx * w), int(fy * w), w)

    @property
    def cartesian(self) -> tuple[Fraction, Fraction]:
        """Cartesian coordinates (x/w, y/w)."""
        return Fraction(self.x, 1) / self.w, Fraction(self.y, 1) / self.w

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HomogeneousPoint):
            return NotImplemented
        return (self.x * other.w == other.x * self.w) and (self.y * other.w == other.y * self.w)

    def __hash__(self) -> int:
        return hash(self.cartesian)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.x}, {self.y}, {self.w})"


@runtime_checkable
class CoordinateProvider(Protocol):
    """Coordinate capability: homogeneous coordinates of a point in the exact ring."""

    def get(self, point: Any) -> HomogeneousTriple:
        ...


class HomogeneousCoordinates:
    """
    Default coordinate provider.

    Understands `HomogeneousPoint` as well as plain (x, y) and (x, y, w) sequences.
    """

    def get(self, point: Any) -> HomogeneousTriple:
        if isinstance(point, HomogeneousPoint):
            return point.x, point.y, point.w

        if isinstance(point, (tuple, list, np.ndarray)):
            if len(point) == 2:
                return to_exact(point[0]), to_exact(point[1]), 1
            if len(point) == 3:
                w = to_exact(point[2])
                if w <= 0:
                    raise ValueError(f"Homogeneous weight must be positive, got {w}.")
                return to_exact(point[0]), to_exact(point[1]), w
            raise ValueError(f"Expected 2 or 3 coordinates, got {len(point)}.")

        raise TypeError(f"Cannot read coordinates of {type(point).__name__}.")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


DEFAULT_COORDINATES = HomogeneousCoordinates()
