"""
Conic Algebra
=============
Exact conics in homogeneous form

    r*x^2 + s*x*y + t*y^2 + u*x*w + v*y*w + w*w^2 = 0

used by the boundary classifier of the smallest enclosing ellipse.

Why is this file needed?
------------------------
1. Construction: Conics through 3 points (smallest ellipse), the pencil of
   conics through 4 points (two line pairs) and the member of that pencil
   through a 5th point.
2. Analysis: The affine type (ellipse, parabola, hyperbola), degeneracy and
   emptiness of a conic, computed once and cached.
3. Predicates: Side of a point relative to an ellipse and the sign of the
   area derivative along a pencil, which locates a point relative to the
   smallest ellipse through 4 points without solving the cubic that defines it.

The coefficients are stored in a read-only numpy object array, so all
arithmetic stays in the exact ring of the coordinate provider.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

import numpy as np

from minellipse.model.coordinates import CoordinateProvider, DEFAULT_COORDINATES, Exact, sign
from minellipse.model.enums import BoundedSide, ConicType, Orientation
from minellipse.model.predicates import orientation

if TYPE_CHECKING:
    import numpy.typing as npt

# Index of each coefficient in the coefficient vector
R, S, T, U, V, W = range(6)


def _exact_array(values: Any) -> npt.NDArray[np.object_]:
    array = np.array(list(values), dtype=object)
    array.flags.writeable = False
    return array


def _monomials(x: Exact, y: Exact, w: Exact) -> npt.NDArray[np.object_]:
    return np.array([x*x, x*y, y*y, x*w, y*w, w*w], dtype=object)


def _line_through(p: Any, q: Any, coordinates: CoordinateProvider) -> npt.NDArray[np.object_]:
    """Coefficients (a, b, c) of the line a*x + b*y + c*w = 0 through p and q."""
    phx, phy, phw = coordinates.get(p)
    qhx, qhy, qhw = coordinates.get(q)
    return np.array([
        phy*qhw - phw*qhy,
        phw*qhx - phx*qhw,
        phx*qhy - phy*qhx
    ], dtype=object)


def _line_product(a: npt.NDArray[np.object_], b: npt.NDArray[np.object_]) -> npt.NDArray[np.object_]:
    """Coefficients of the conic formed by the product of two lines."""
    return np.array([
        a[0]*b[0],
        a[0]*b[1] + a[1]*b[0],
        a[1]*b[1],
        a[0]*b[2] + a[2]*b[0],
        a[1]*b[2] + a[2]*b[1],
        a[2]*b[2]
    ], dtype=object)


@dataclass(frozen=True)
class ConicAnalysis:
    """Result of `Conic.analyse`."""
    conic_type: ConicType
    degenerate: bool
    empty: bool


class Conic:
    """
    A conic with exact coefficients and a cached analysis.

    Conics are immutable; every construction returns a new instance.
    """

    def __init__(
        self,
        r: Exact = 0,
        s: Exact = 0,
        t: Exact = 0,
        u: Exact = 0,
        v: Exact = 0,
        w: Exact = 0,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> None:
        """
        Initialize the conic from its six coefficients.

        Args:
            r, s, t, u, v, w: Coefficients of x^2, xy, y^2, xw, yw and w^2.
            coordinates: The coordinate capability used to read query points.
        """
        self._coefficients = _exact_array((r, s, t, u, v, w))
        self.coordinates = coordinates
        self._analysis: Optional[ConicAnalysis] = None

    @classmethod
    def from_coefficients(
        cls,
        coefficients: Any,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> Conic:
        values = list(coefficients)
        if len(values) != 6:
            raise ValueError(f"A conic has 6 coefficients, got {len(values)}.")
        return cls(*values, coordinates=coordinates)

    def __repr__(self) -> str:
        """String representation of the conic."""
        values = ", ".join(str(c) for c in self._coefficients)
        return f"{self.__class__.__name__}({values})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conic):
            return NotImplemented
        return bool(np.array_equal(self._coefficients, other._coefficients))

    # --------------------------------------------------------------------------
    # Coefficients
    # --------------------------------------------------------------------------
    @property
    def coefficients(self) -> npt.NDArray[np.object_]:
        """Read-only coefficient vector (r, s, t, u, v, w)."""
        return self._coefficients

    @property
    def r(self) -> Exact:
        return self._coefficients[R]

    @property
    def s(self) -> Exact:
        return self._coefficients[S]

    @property
    def t(self) -> Exact:
        return self._coefficients[T]

    @property
    def u(self) -> Exact:
        return self._coefficients[U]

    @property
    def v(self) -> Exact:
        return self._coefficients[V]

    @property
    def w(self) -> Exact:
        return self._coefficients[W]

    @property
    def discriminant(self) -> Exact:
        """4rt - s^2; positive for ellipses, zero for parabolas, negative for hyperbolas."""
        r, s, t = self._coefficients[R], self._coefficients[S], self._coefficients[T]
        return 4*r*t - s*s

    @property
    def half_determinant(self) -> Exact:
        """Half the determinant of the symmetric 3x3 matrix of the conic."""
        r, s, t, u, v, w = self._coefficients
        return 4*r*t*w - r*v*v - s*s*w + s*u*v - t*u*u

    # --------------------------------------------------------------------------
    # Construction
    # --------------------------------------------------------------------------
    @classmethod
    def linear_combination(cls, a1: Exact, c1: Conic, a2: Exact, c2: Conic) -> Conic:
        """The conic a1*c1 + a2*c2."""
        return cls.from_coefficients(a1 * c1.coefficients + a2 * c2.coefficients, c1.coordinates)

    @classmethod
    def through_three_points(
        cls,
        p1: Any,
        p2: Any,
        p3: Any,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> Conic:
        """
        The smallest-area ellipse through three non-collinear points.

        This is the Steiner circumellipse, centred at the centroid. With
        barycentric coordinates (a, b, c) of the triangle its equation is
        a*b + b*c + c*a = 0. Each barycentric coordinate is, up to a common
        factor, the line through the opposite edge scaled by the weight of the
        opposite vertex.

        Collinear input is not detected; the result is then not an ellipse.
        """
        w1, w2, w3 = coordinates.get(p1)[2], coordinates.get(p2)[2], coordinates.get(p3)[2]
        a = w1 * _line_through(p2, p3, coordinates)
        b = w2 * _line_through(p3, p1, coordinates)
        c = w3 * _line_through(p1, p2, coordinates)
        coefficients = _line_product(a, b) + _line_product(b, c) + _line_product(c, a)
        return cls.from_coefficients(coefficients, coordinates)

    @classmethod
    def line_pair(
        cls,
        p1: Any,
        p2: Any,
        p3: Any,
        p4: Any,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> Conic:
        """The degenerate conic made of the lines p1p2 and p3p4."""
        return cls.from_coefficients(
            _line_product(_line_through(p1, p2, coordinates), _line_through(p3, p4, coordinates)),
            coordinates
        )

    @classmethod
    def two_line_pairs(
        cls,
        p1: Any,
        p2: Any,
        p3: Any,
        p4: Any,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES
    ) -> tuple[Conic, Conic]:
        """
        Two line pairs spanning the pencil of conics through four points.

        The points are first put into their cyclic order around the convex
        hull, then each pair is made of two opposite sides of the
        quadrilateral. Relabelling the same four points therefore yields the
        same two conics, possibly swapped.
        """
        side1_24 = orientation(p2, p4, p1, coordinates)
        side3_24 = orientation(p2, p4, p3, coordinates)
        if side1_24 != side3_24:
            # p2p4 is a diagonal
            a, b, c, d = p1, p2, p3, p4
        elif orientation(p3, p4, p1, coordinates) != orientation(p3, p4, p2, coordinates):
            # p3p4 is a diagonal
            a, b, c, d = p1, p3, p2, p4
        else:
            a, b, c, d = p1, p2, p4, p3
        return (cls.line_pair(a, b, c, d, coordinates),
                cls.line_pair(b, c, d, a, coordinates))

    @classmethod
    def through_pencil_and_point(cls, c1: Conic, c2: Conic, p: Any) -> Conic:
        """
        The member of the pencil spanned by c1 and c2 that passes through p.

        If p is a common point of c1 and c2 the result is the zero conic.
        """
        return cls.linear_combination(c2.evaluate(p), c1, -c1.evaluate(p), c2)

    @classmethod
    def _pencil_ellipse_candidate(cls, c1: Conic, c2: Conic) -> Conic:
        """
        The member of the pencil spanned by c1 and c2 with positive
        discriminant, if the pencil has one.

        The discriminant of l*c1 + m*c2 is the quadratic form
        a*l^2 + 2*b*l*m + c*m^2; a positive value of it is picked exactly.
        """
        a = c1.discriminant
        c = c2.discriminant
        b = 2*(c1.r*c2.t + c2.r*c1.t) - c1.s*c2.s

        if c > 0:
            lam, mu = 0, 1
        elif a > 0:
            lam, mu = 1, 0
        elif c < 0:
            lam, mu = c, -b
        elif a < 0:
            lam, mu = -b, a
        else:
            lam, mu = b, 1

        return cls.linear_combination(lam, c1, mu, c2)

    @classmethod
    def pencil_ellipse(cls, c1: Conic, c2: Conic) -> Conic:
        """
        Some proper ellipse of the pencil spanned by c1 and c2.

        The pencil must contain an ellipse, i.e. for two line pairs their four
        common points must be in convex position.
        """
        ellipse = cls._pencil_ellipse_candidate(c1, c2)
        assert ellipse.is_ellipse, "The pencil contains no ellipse; are the points in convex position?"
        return ellipse

    @classmethod
    def pencil_contains_ellipse(cls, c1: Conic, c2: Conic) -> bool:
        return cls._pencil_ellipse_candidate(c1, c2).is_ellipse

    @staticmethod
    def are_proportional(c1: Conic, c2: Conic) -> bool:
        """True if c1 and c2 are the same conic up to a factor, or one of them is zero."""
        a, b = c1.coefficients, c2.coefficients
        return all(a[i]*b[j] == a[j]*b[i] for i in range(6) for j in range(i + 1, 6))

    @staticmethod
    def gradient_direction(c1: Conic, c2: Conic) -> npt.NDArray[np.object_]:
        """
        The pencil direction r1*c2 - r2*c1.

        Its x^2 coefficient is zero, so it is never proportional to an ellipse
        of the pencil.
        """
        return _exact_array(c1.r * c2.coefficients - c2.r * c1.coefficients)

    # --------------------------------------------------------------------------
    # Analysis
    # --------------------------------------------------------------------------
    def analyse(self) -> ConicAnalysis:
        """Classify the conic. The result is cached on the instance."""
        if self._analysis is not None:
            return self._analysis

        r, s, t, u, v, w = self._coefficients
        d = self.discriminant
        z = self.half_determinant
        degenerate = z == 0

        if d > 0:
            conic_type = ConicType.ELLIPSE
            # real ellipse iff the centre value -z/d has the opposite sign of r
            empty = (not degenerate) and sign(r) == sign(z)
        elif d == 0:
            conic_type = ConicType.PARABOLA
            # a degenerate parabola is a pair of parallel lines, possibly imaginary
            empty = degenerate and (4*r*w - u*u) + (4*t*w - v*v) > 0
        else:
            conic_type = ConicType.HYPERBOLA
            empty = False

        self._analysis = ConicAnalysis(conic_type=conic_type, degenerate=degenerate, empty=empty)
        return self._analysis

    @property
    def conic_type(self) -> ConicType:
        return self.analyse().conic_type

    @property
    def is_degenerate(self) -> bool:
        return self.analyse().degenerate

    @property
    def is_empty(self) -> bool:
        return self.analyse().empty

    @property
    def is_ellipse(self) -> bool:
        """True for proper (real, non-degenerate) ellipses."""
        analysis = self.analyse()
        return analysis.conic_type is ConicType.ELLIPSE and not analysis.degenerate and not analysis.empty

    @property
    def is_hyperbola(self) -> bool:
        analysis = self.analyse()
        return analysis.conic_type is ConicType.HYPERBOLA and not analysis.degenerate

    @property
    def is_parabola(self) -> bool:
        analysis = self.analyse()
        return analysis.conic_type is ConicType.PARABOLA and not analysis.degenerate

    @property
    def orientation(self) -> Orientation:
        """
        Orientation of an ellipse: COUNTERCLOCKWISE when its interior
        evaluates negative, CLOCKWISE when it evaluates positive.
        """
        assert self.is_ellipse, "Only ellipses have an orientation."
        return Orientation(sign(self.r))

    # --------------------------------------------------------------------------
    # Predicates
    # --------------------------------------------------------------------------
    def evaluate(self, p: Any) -> Exact:
        """Value of the conic polynomial at the homogeneous coordinates of p."""
        return np.dot(self._coefficients, _monomials(*self.coordinates.get(p)))

    def has_on(self, p: Any) -> bool:
        return self.evaluate(p) == 0

    def convex_side(self, p: Any) -> BoundedSide:
        """
        Side of p relative to this ellipse.

        The interior is where r times the polynomial is negative, which does
        not depend on the scaling of the coefficients.
        """
        assert self.is_ellipse, "convex_side is only defined for proper ellipses."
        return BoundedSide(-sign(self.r) * sign(self.evaluate(p)))

    def vol_derivative(self, direction: npt.NDArray[np.object_], p: Any) -> int:
        """
        Locate p relative to the smallest-area ellipse of a pencil.

        This conic must be the proper ellipse of the pencil through p, and
        `direction` another member of the pencil (see `gradient_direction`).
        Along E + tau*direction the squared area is proportional to Z^2 / d^3
        with d the discriminant and Z the half determinant. The sign of its
        derivative at tau = 0 tells on which side of E the minimum lies, and
        the sign of direction(p) tells on which side p is inside.

        Returns:
            1 if p lies inside the smallest ellipse, 0 if on it, -1 if outside.
        """
        r, s, t, u, v, w = self._coefficients
        dr, ds, dt, du, dv, dw = direction

        d = 4*r*t - s*s
        d_prime = 4*(r*dt + dr*t) - 2*s*ds
        z = 4*r*t*w - r*v*v - s*s*w + s*u*v - t*u*u
        z_gradient = np.array([
            4*t*w - v*v,
            u*v - 2*s*w,
            4*r*w - u*u,
            s*v - 2*t*u,
            s*u - 2*r*v,
            d
        ], dtype=object)
        z_prime = np.dot(z_gradient, direction)

        side = np.dot(direction, _monomials(*self.coordinates.get(p)))
        return sign(3*d_prime*z - 2*d*z_prime) * sign(side)
