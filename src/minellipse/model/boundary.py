"""
Boundary Ellipse (Classifier State)
===================================
This module defines the state of the smallest enclosing ellipse while it is
being built by an incremental algorithm, and the point classification
against it.

Why is this file needed?
------------------------
1. State Management: Between 0 and 5 boundary points define the current
   ellipse. Each count has its own payload, modelled as one dataclass per
   state so that, e.g., a 4-point state without its gradient cannot exist.
2. Classification: `BoundaryEllipse.bounded_side` answers whether a point is
   inside, on or outside the ellipse, exactly, for every state.
3. Driver surface: `MinEllipseTraits` bundles the orientation test and a
   fresh `BoundaryEllipse` for an external incremental driver.

Classes:
    NoPoints, OnePoint, TwoPoints, ThreePointConic, FourPointPencil,
    FivePointConic: The six boundary states.
    BoundaryEllipse: The classifier owning the current state.
    MinEllipseTraits: Traits bundle for the incremental driver.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union, TYPE_CHECKING

from minellipse.model.conic import Conic
from minellipse.model.coordinates import CoordinateProvider, DEFAULT_COORDINATES
from minellipse.model.enums import BoundedSide, Orientation
from minellipse.model.predicates import are_ordered_along_line, have_equal_coordinates, orientation

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MAX_BOUNDARY_POINTS = 5


# ------------------------------------------------------------------------------
# Boundary states
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class NoPoints:
    """No ellipse yet; every point is outside."""
    n: ClassVar[int] = 0

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        return BoundedSide.ON_UNBOUNDED_SIDE


@dataclass(frozen=True, eq=False)
class OnePoint:
    """The ellipse degenerates to a single point."""
    n: ClassVar[int] = 1
    point: Any

    def same_points(self, other: OnePoint, coordinates: CoordinateProvider) -> bool:
        return have_equal_coordinates(self.point, other.point, coordinates)

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        if have_equal_coordinates(p, self.point, coordinates):
            return BoundedSide.ON_BOUNDARY
        return BoundedSide.ON_UNBOUNDED_SIDE


@dataclass(frozen=True, eq=False)
class TwoPoints:
    """The ellipse degenerates to the segment between two points."""
    n: ClassVar[int] = 2
    first: Any
    second: Any

    def same_points(self, other: TwoPoints, coordinates: CoordinateProvider) -> bool:
        """Unordered comparison of the two endpoints."""
        def same(a: Any, b: Any) -> bool:
            return have_equal_coordinates(a, b, coordinates)

        return ((same(self.first, other.first) and same(self.second, other.second))
                or (same(self.first, other.second) and same(self.second, other.first)))

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        if (have_equal_coordinates(p, self.first, coordinates)
                or have_equal_coordinates(p, self.second, coordinates)
                or are_ordered_along_line(self.first, p, self.second, coordinates)):
            return BoundedSide.ON_BOUNDARY
        return BoundedSide.ON_UNBOUNDED_SIDE


@dataclass(frozen=True)
class ThreePointConic:
    """The smallest ellipse through three points."""
    n: ClassVar[int] = 3
    conic: Conic

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        return self.conic.convex_side(p)


@dataclass(frozen=True, eq=False)
class FourPointPencil:
    """
    The smallest ellipse through four points, known only implicitly.

    `first` and `second` span the pencil of conics through the four points,
    `gradient` is the pencil direction used by the area derivative test.
    """
    n: ClassVar[int] = 4
    first: Conic
    second: Conic
    gradient: npt.NDArray[np.object_] = field(repr=False)

    @classmethod
    def from_conics(cls, first: Conic, second: Conic) -> FourPointPencil:
        return cls(first, second, Conic.gradient_direction(first, second))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FourPointPencil):
            return NotImplemented
        return ((self.first == other.first and self.second == other.second)
                or (self.first == other.second and self.second == other.first))

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        conic = Conic.through_pencil_and_point(self.first, self.second, p)
        if conic.is_ellipse:
            return BoundedSide(conic.vol_derivative(self.gradient, p))

        # p is a base point, or no ellipse of the pencil passes through it;
        # then p is inside all ellipses of the pencil or outside all of them
        return Conic.pencil_ellipse(self.first, self.second).convex_side(p)


@dataclass(frozen=True)
class FivePointConic:
    """The unique ellipse through five points."""
    n: ClassVar[int] = 5
    conic: Conic

    def bounded_side(self, p: Any, coordinates: CoordinateProvider) -> BoundedSide:
        return self.conic.convex_side(p)


BoundaryState = Union[NoPoints, OnePoint, TwoPoints, ThreePointConic, FourPointPencil, FivePointConic]


# ------------------------------------------------------------------------------
# Classifier
# ------------------------------------------------------------------------------
class BoundaryEllipse:
    """
    The current ellipse of the smallest enclosing ellipse algorithm,
    defined by 0 to 5 boundary points.

    Points are opaque values; their coordinates are read through the
    coordinate provider given at construction.
    """

    def __init__(self, coordinates: CoordinateProvider = DEFAULT_COORDINATES) -> None:
        """
        Initialize an empty boundary (no points).

        Args:
            coordinates: The coordinate capability, see `CoordinateProvider`.
        """
        self.coordinates = coordinates
        self.state: BoundaryState = NoPoints()

    @classmethod
    def from_state(
        cls,
        state: BoundaryState,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> BoundaryEllipse:
        ellipse = cls(coordinates)
        ellipse.state = state
        return ellipse

    def __repr__(self) -> str:
        """Pretty form: number of boundary points followed by the payload."""
        state = self.state
        if isinstance(state, NoPoints):
            payload = []
        elif isinstance(state, OnePoint):
            payload = [state.point]
        elif isinstance(state, (TwoPoints, FourPointPencil)):
            payload = [state.first, state.second]
        else:
            payload = [state.conic]
        return f"{self.__class__.__name__}({', '.join(repr(x) for x in [state.n, *payload])})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundaryEllipse):
            return NotImplemented
        if isinstance(self.state, (OnePoint, TwoPoints)):
            return type(self.state) is type(other.state) and self.state.same_points(other.state, self.coordinates)
        return self.state == other.state

    @property
    def number_of_boundary_points(self) -> int:
        return self.state.n

    def set(self, *points: Any) -> None:
        """
        Replace the boundary by the given points.

        Args:
            *points: 0 to 5 points. Three points must not be collinear, four or
                     five points must be in convex position, and five points must
                     lie on an ellipse; these preconditions are not checked.
        """
        n = len(points)
        assert 0 <= n <= MAX_BOUNDARY_POINTS, f"A boundary has at most 5 points, got {n}."

        if n == 0:
            state: BoundaryState = NoPoints()
        elif n == 1:
            state = OnePoint(copy.copy(points[0]))
        elif n == 2:
            state = TwoPoints(copy.copy(points[0]), copy.copy(points[1]))
        elif n == 3:
            state = ThreePointConic(Conic.through_three_points(*points, coordinates=self.coordinates))
        elif n == 4:
            state = FourPointPencil.from_conics(*Conic.two_line_pairs(*points, coordinates=self.coordinates))
        else:
            first, second = Conic.two_line_pairs(*points[:4], coordinates=self.coordinates)
            conic = Conic.through_pencil_and_point(first, second, points[4])
            assert conic.is_ellipse, f"Five boundary points must define an ellipse, got {conic}."
            state = FivePointConic(conic)

        self.state = state
        logger.debug(f"Boundary set to {n} point(s): {self!r}")

    # --------------------------------------------------------------------------
    # Predicates
    # --------------------------------------------------------------------------
    def bounded_side(self, p: Any) -> BoundedSide:
        """Side of p relative to the current ellipse."""
        return self.state.bounded_side(p, self.coordinates)

    def has_on_bounded_side(self, p: Any) -> bool:
        return self.bounded_side(p) == BoundedSide.ON_BOUNDED_SIDE

    def has_on_boundary(self, p: Any) -> bool:
        return self.bounded_side(p) == BoundedSide.ON_BOUNDARY

    def has_on_unbounded_side(self, p: Any) -> bool:
        return self.bounded_side(p) == BoundedSide.ON_UNBOUNDED_SIDE

    def is_empty(self) -> bool:
        return isinstance(self.state, NoPoints)

    def is_degenerate(self) -> bool:
        """True while the ellipse is a point, a segment or nothing."""
        return self.state.n < 3


class MinEllipseTraits:
    """
    What an incremental smallest enclosing ellipse driver needs:
    the orientation test and the ellipse under construction.
    """

    def __init__(self, coordinates: CoordinateProvider = DEFAULT_COORDINATES) -> None:
        self.coordinates = coordinates
        self.ellipse = BoundaryEllipse(coordinates)

    def orientation(self, p: Any, q: Any, r: Any) -> Orientation:
        return orientation(p, q, r, self.coordinates)
