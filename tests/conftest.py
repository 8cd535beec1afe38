import pytest

from minellipse.model.coordinates import HomogeneousPoint as P


@pytest.fixture
def square_corners() -> list[P]:
    """Corners of the square [-1, 1]^2; their smallest ellipse is x^2 + y^2 = 2."""
    return [P(1, 1), P(-1, 1), P(-1, -1), P(1, -1)]


@pytest.fixture
def right_triangle() -> list[P]:
    return [P(0, 0), P(4, 0), P(0, 4)]


@pytest.fixture
def circle_points() -> list[P]:
    """Five points on the circle x^2 + y^2 = 25."""
    return [P(5, 0), P(0, 5), P(-5, 0), P(0, -5), P(3, 4)]
