"""Exact boundary classification for the smallest enclosing ellipse."""
from minellipse.model.boundary import BoundaryEllipse, MinEllipseTraits
from minellipse.model.conic import Conic
from minellipse.model.coordinates import CoordinateProvider, HomogeneousCoordinates, HomogeneousPoint
from minellipse.model.enums import BoundedSide, ConicType, Orientation
from minellipse.model.predicates import are_ordered_along_line, orientation

__all__ = [
    "BoundaryEllipse",
    "MinEllipseTraits",
    "Conic",
    "CoordinateProvider",
    "HomogeneousCoordinates",
    "HomogeneousPoint",
    "BoundedSide",
    "ConicType",
    "Orientation",
    "are_ordered_along_line",
    "orientation",
]
