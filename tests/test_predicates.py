"""Tests for minellipse.model.predicates"""
import itertools

import pytest

from minellipse.model.coordinates import HomogeneousPoint as P
from minellipse.model.enums import Orientation
from minellipse.model.predicates import are_ordered_along_line, have_equal_coordinates, orientation


class TestOrientation:

    def test_left_turn(self):
        assert orientation(P(0, 0), P(1, 0), P(0, 1)) == Orientation.LEFT_TURN

    def test_right_turn(self):
        assert orientation(P(0, 0), P(0, 1), P(1, 0)) == Orientation.RIGHT_TURN

    def test_collinear(self):
        assert orientation(P(0, 0), P(1, 1), P(5, 5)) == Orientation.COLLINEAR

    def test_homogeneous_weights(self):
        assert orientation(P(0, 0, 1), P(2, 0, 2), P(0, 3, 3)) == Orientation.LEFT_TURN

    def test_tuples(self):
        assert orientation((0, 0), (1, 0), (0, 1)) == Orientation.LEFT_TURN

    @pytest.mark.parametrize("p, q, r", [
        (P(0, 0), P(3, 1), P(1, 4)),
        (P(-2, 5, 3), P(7, 1, 2), P(0, -1)),
        (P(1, 1), P(2, 2), P(3, 3)),
    ])
    def test_antisymmetric_in_q_and_r(self, p, q, r):
        assert orientation(p, q, r) == -orientation(p, r, q)

    def test_invariant_under_cyclic_shift(self):
        p, q, r = P(0, 0), P(3, 1), P(1, 4)
        assert orientation(p, q, r) == orientation(q, r, p) == orientation(r, p, q)


class TestAreOrderedAlongLine:

    @pytest.mark.parametrize("p, q, r", [
        (P(0, 0), P(1, 0), P(2, 0)),
        (P(2, 0), P(1, 0), P(0, 0)),
        (P(0, 0), P(0, 1), P(0, 2)),
        (P(0, 2), P(0, 1), P(0, 0)),
        (P(0, 0), P(1, 1), P(3, 3)),
        (P(0, 0, 1), P(2, 0, 2), P(4, 0, 2)),
    ])
    def test_ordered(self, p, q, r):
        assert are_ordered_along_line(p, q, r)

    @pytest.mark.parametrize("p, q, r", [
        (P(0, 0), P(3, 0), P(2, 0)),
        (P(0, 0), P(0, 3), P(0, 2)),
        (P(0, 0), P(-1, -1), P(3, 3)),
    ])
    def test_collinear_but_outside(self, p, q, r):
        assert not are_ordered_along_line(p, q, r)

    def test_endpoints_are_between(self):
        assert are_ordered_along_line(P(0, 0), P(0, 0), P(2, 0))
        assert are_ordered_along_line(P(0, 0), P(2, 0), P(2, 0))
        assert are_ordered_along_line(P(0, 0), P(0, 1), P(0, 2, 2))
        assert are_ordered_along_line(P(0, 0), P(0, 4, 2), P(0, 2))

    def test_not_collinear(self):
        assert not are_ordered_along_line(P(0, 0), P(1, 1), P(2, 0))

    def test_ordered_implies_collinear(self):
        points = [P(x, y) for x, y in itertools.product(range(-1, 2), repeat=2)]
        for p, q, r in itertools.permutations(points, 3):
            if are_ordered_along_line(p, q, r):
                assert orientation(p, q, r) == Orientation.COLLINEAR


class TestHaveEqualCoordinates:

    @pytest.mark.parametrize("p, q, expected", [
        (P(1, 2), P(2, 4, 2), True),
        ((1, 2), (3, 6, 3), True),
        ((0, 0), [0, 0, 1], True),
        (P(1, 2), P(2, 1), False),
        ((1, 2), (1, 2, 2), False),
    ])
    def test_values(self, p, q, expected):
        assert have_equal_coordinates(p, q) == expected
