from enum import IntEnum, StrEnum


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Orientation(IntEnum):
    """Turn direction of three points, valued by the sign of their determinant."""
    RIGHT_TURN = -1
    COLLINEAR = 0
    LEFT_TURN = 1

    CLOCKWISE = -1
    COUNTERCLOCKWISE = 1


class BoundedSide(IntEnum):
    """Position of a point relative to a closed curve."""
    ON_UNBOUNDED_SIDE = -1
    ON_BOUNDARY = 0
    ON_BOUNDED_SIDE = 1


class ConicType(StrEnum):
    """Affine type of a conic, from the sign of 4rt - s^2."""
    HYPERBOLA = "hyperbola"
    PARABOLA = "parabola"
    ELLIPSE = "ellipse"
