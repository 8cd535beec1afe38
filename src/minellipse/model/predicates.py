from __future__ import annotations

from typing import Any

from minellipse.model.coordinates import CoordinateProvider, DEFAULT_COORDINATES, Exact, sign
from minellipse.model.enums import Orientation


def _determinant(
    phx: Exact, phy: Exact, phw: Exact,
    qhx: Exact, qhy: Exact, qhw: Exact,
    rhx: Exact, rhy: Exact, rhw: Exact
) -> Exact:
    """Homogeneous 3x3 determinant of p, q, r, expanded relative to r."""
    return ((phx*rhw - rhx*phw) * (qhy*rhw - rhy*qhw)
            - (phy*rhw - rhy*phw) * (qhx*rhw - rhx*qhw))


def orientation(
    p: Any,
    q: Any,
    r: Any,
    coordinates: CoordinateProvider = DEFAULT_COORDINATES
) -> Orientation:
    """
    Orientation of the point triple (p, q, r).

    Args:
        p, q, r: Points readable by `coordinates`.
        coordinates: The coordinate capability.

    Returns:
        LEFT_TURN if r lies left of the directed line pq, RIGHT_TURN if it lies
        right of it, COLLINEAR otherwise.
    """
    return Orientation(sign(_determinant(*coordinates.get(p), *coordinates.get(q), *coordinates.get(r))))


def are_ordered_along_line(
    p: Any,
    q: Any,
    r: Any,
    coordinates: CoordinateProvider = DEFAULT_COORDINATES
) -> bool:
    """
    Check whether q lies between p and r on a common line, endpoints included.

    The comparison is done along the x-axis, or along the y-axis when p and r
    share their x-coordinate, using cross-multiplied homogeneous coordinates.

    Returns:
        False whenever p, q, r are not collinear.
    """
    phx, phy, phw = coordinates.get(p)
    qhx, qhy, qhw = coordinates.get(q)
    rhx, rhy, rhw = coordinates.get(r)

    if _determinant(phx, phy, phw, qhx, qhy, qhw, rhx, rhy, rhw) != 0:
        return False

    if phx*rhw != rhx*phw:
        return (((phx*qhw <= qhx*phw) and (qhx*rhw <= rhx*qhw))
                or ((rhx*qhw <= qhx*rhw) and (qhx*phw <= phx*qhw)))
    # p and r on a vertical line: compare y instead of x
    return (((phy*qhw <= qhy*phw) and (qhy*rhw <= rhy*qhw))
            or ((rhy*qhw <= qhy*rhw) and (qhy*phw <= phy*qhw)))


def have_equal_coordinates(
    p: Any,
    q: Any,
    coordinates: CoordinateProvider = DEFAULT_COORDINATES
) -> bool:
    """Check whether p and q represent the same planar point, whatever their weights."""
    phx, phy, phw = coordinates.get(p)
    qhx, qhy, qhw = coordinates.get(q)
    return phx*qhw == qhx*phw and phy*qhw == qhy*phw
