"""Tests for minellipse.model.io"""
import json
import logging
from fractions import Fraction

import pytest

from minellipse.model.boundary import BoundaryEllipse, FourPointPencil
from minellipse.model.coordinates import HomogeneousPoint as P
from minellipse.model.enums import BoundedSide
from minellipse.model.io import StateIO, parse_number


def make(*points) -> BoundaryEllipse:
    ellipse = BoundaryEllipse()
    ellipse.set(*points)
    return ellipse


class TestParseNumber:

    @pytest.mark.parametrize("text, expected", [("3", 3), ("-3/4", Fraction(-3, 4)), ("0.5", Fraction(1, 2))])
    def test_valid(self, text, expected):
        assert parse_number(text) == expected

    def test_integers_stay_int(self):
        assert type(parse_number("6/3")) is int

    @pytest.mark.parametrize("text", ["abc", "1/0", ""])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_number(text)


class TestRoundTrip:

    @pytest.mark.parametrize("n", range(6))
    def test_every_state(self, circle_points, n):
        ellipse = make(*circle_points[:n])
        restored = StateIO.loads(StateIO.dumps(ellipse))
        assert restored == ellipse
        assert restored.number_of_boundary_points == n

    def test_classification_survives(self, square_corners):
        restored = StateIO.loads(StateIO.dumps(make(*square_corners)))
        assert isinstance(restored.state, FourPointPencil)
        assert restored.bounded_side(P(7, 1, 5)) == BoundedSide.ON_BOUNDARY
        assert restored.bounded_side(P(0, 0)) == BoundedSide.ON_BOUNDED_SIDE

    def test_fractions_are_exact(self):
        ellipse = make(P(Fraction(1, 3), 0))
        data = StateIO.to_dict(ellipse)
        assert data["points"] == [["1/3", "0", "1"]]
        assert StateIO.from_dict(data) == ellipse

    def test_layout(self, right_triangle):
        data = json.loads(StateIO.dumps(make(*right_triangle)))
        assert data["format"] == "minellipse.boundary"
        assert data["n"] == 3
        assert len(data["conics"]) == 1
        assert len(data["conics"][0]) == 6

    def test_save_and_load(self, tmp_path, caplog, circle_points):
        caplog.set_level(logging.INFO, logger="minellipse")
        path = tmp_path / "state.json"
        ellipse = make(*circle_points)
        StateIO.save(ellipse, str(path))
        assert StateIO.load(str(path)) == ellipse
        assert "Saving boundary state" in caplog.text


class TestInvalidDocuments:

    @pytest.mark.parametrize("data", [
        [],
        {"n": 6},
        {"n": -1},
        {"n": True},
        {"n": "2"},
        {"format": "other", "n": 0},
        {"n": 1},
        {"n": 1, "points": [["0", "0"]]},
        {"n": 2, "points": [["0", "0", "1"]]},
        {"n": 1, "points": [["x", "0", "1"]]},
        {"n": 1, "points": [["0", "0", "0"]]},
        {"n": 4, "conics": [["1", "0", "1", "0", "0", "-1"]]},
        # hyperbola xy = 1
        {"n": 3, "conics": [["0", "1", "0", "0", "0", "-1"]]},
        # parallel line pairs x^2 = 1 and x^2 = 4 span no ellipse
        {"n": 4, "conics": [["1", "0", "0", "0", "0", "-1"], ["1", "0", "0", "0", "0", "-4"]]},
        # the same line pair twice
        {"n": 4, "conics": [["0", "0", "1", "0", "0", "-1"], ["0", "0", "2", "0", "0", "-2"]]},
        # a circle is not a line pair
        {"n": 4, "conics": [["1", "0", "1", "0", "0", "-1"], ["0", "0", "1", "0", "0", "-1"]]},
    ])
    def test_rejected(self, data):
        with pytest.raises(ValueError):
            StateIO.from_dict(data)

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            StateIO.loads("{n: 1")

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            StateIO.load(str(tmp_path / "missing.json"))
