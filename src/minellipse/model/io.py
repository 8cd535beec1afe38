"""
Input/Output Manager (JSON)
Handles saving and loading a BoundaryEllipse for verification and debugging.

Layout of a document:

    {"format": "minellipse.boundary", "version": "...", "n": 2,
     "points": [["0", "0", "1"], ["2", "0", "1"]]}

States with 3, 4 or 5 points store "conics" (lists of six coefficients)
instead of "points". Numbers are written as strings ("3/4") so that
fractions survive the round trip exactly.
"""
import json
import logging
from fractions import Fraction
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Callable, Optional

from minellipse.config import FORMAT_NAME
from minellipse.model.boundary import (
    BoundaryEllipse, BoundaryState, NoPoints, OnePoint, TwoPoints,
    ThreePointConic, FourPointPencil, FivePointConic, MAX_BOUNDARY_POINTS
)
from minellipse.model.conic import Conic
from minellipse.model.coordinates import CoordinateProvider, DEFAULT_COORDINATES, Exact, HomogeneousPoint

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("minellipse")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

PointFactory = Callable[[Exact, Exact, Exact], Any]


def parse_number(text: Any) -> Exact:
    """Parse "3", "-3/4" or "0.5" into an int or an exact Fraction."""
    try:
        value = Fraction(str(text))
    except (ValueError, ZeroDivisionError) as e:
        raise ValueError(f"Invalid number '{text}': {e}") from e
    return value.numerator if value.denominator == 1 else value


class StateIO:

    @staticmethod
    def to_dict(ellipse: BoundaryEllipse) -> dict[str, Any]:
        """Convert a BoundaryEllipse into a JSON-compatible dictionary."""
        state = ellipse.state
        data: dict[str, Any] = {"format": FORMAT_NAME, "version": APP_VERSION, "n": state.n}

        def encode_point(p: Any) -> list[str]:
            return [str(c) for c in ellipse.coordinates.get(p)]

        def encode_conic(c: Conic) -> list[str]:
            return [str(x) for x in c.coefficients]

        if isinstance(state, OnePoint):
            data["points"] = [encode_point(state.point)]
        elif isinstance(state, TwoPoints):
            data["points"] = [encode_point(state.first), encode_point(state.second)]
        elif isinstance(state, (ThreePointConic, FivePointConic)):
            data["conics"] = [encode_conic(state.conic)]
        elif isinstance(state, FourPointPencil):
            data["conics"] = [encode_conic(state.first), encode_conic(state.second)]
        return data

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        coordinates: CoordinateProvider = DEFAULT_COORDINATES,
        point_factory: PointFactory = HomogeneousPoint
    ) -> BoundaryEllipse:
        """
        Rebuild a BoundaryEllipse from `to_dict` output.

        Args:
            data: The dictionary.
            coordinates: Coordinate provider of the restored ellipse.
            point_factory: Builds a point from (x, y, w); must be readable by `coordinates`.

        Raises:
            ValueError: If the dictionary is not a valid boundary document.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}.")
        if data.get("format", FORMAT_NAME) != FORMAT_NAME:
            raise ValueError(f"Unknown format: {data.get('format')}")

        n = data.get("n")
        if not isinstance(n, int) or isinstance(n, bool) or not 0 <= n <= MAX_BOUNDARY_POINTS:
            raise ValueError(f"Number of boundary points must be an integer in [0, 5], got {n!r}.")

        def decode_list(key: str, count: int, width: int) -> list[list[Exact]]:
            items = data.get(key)
            if not isinstance(items, list) or len(items) != count:
                raise ValueError(f"State with n={n} needs {count} entries in '{key}'.")
            decoded = []
            for item in items:
                if not isinstance(item, list) or len(item) != width:
                    raise ValueError(f"Each entry of '{key}' needs {width} numbers, got {item!r}.")
                decoded.append([parse_number(x) for x in item])
            return decoded

        def decode_conic(values: list[Exact]) -> Conic:
            return Conic.from_coefficients(values, coordinates)

        state: BoundaryState
        if n == 0:
            state = NoPoints()
        elif n == 1:
            (p,) = decode_list("points", 1, 3)
            state = OnePoint(point_factory(*p))
        elif n == 2:
            p, q = decode_list("points", 2, 3)
            state = TwoPoints(point_factory(*p), point_factory(*q))
        elif n == 4:
            first, second = (decode_conic(values) for values in decode_list("conics", 2, 6))
            if not (first.is_degenerate and second.is_degenerate):
                raise ValueError(f"A 4-point pencil must be spanned by two line pairs, got {first} and {second}.")
            if Conic.are_proportional(first, second):
                raise ValueError(f"The conics of a 4-point pencil must be independent, got {first} and {second}.")
            if not Conic.pencil_contains_ellipse(first, second):
                raise ValueError(f"The pencil of {first} and {second} contains no ellipse.")
            state = FourPointPencil.from_conics(first, second)
        else:
            (values,) = decode_list("conics", 1, 6)
            conic = decode_conic(values)
            state = ThreePointConic(conic) if n == 3 else FivePointConic(conic)

        if isinstance(state, (ThreePointConic, FivePointConic)) and not state.conic.is_ellipse:
            raise ValueError(f"Conic of a {n}-point state is not an ellipse: {state.conic}")

        return BoundaryEllipse.from_state(state, coordinates)

    @staticmethod
    def dumps(ellipse: BoundaryEllipse, indent: Optional[int] = None) -> str:
        return json.dumps(StateIO.to_dict(ellipse), indent=indent)

    @staticmethod
    def loads(
        text: str,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES,
        point_factory: PointFactory = HomogeneousPoint
    ) -> BoundaryEllipse:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e
        return StateIO.from_dict(data, coordinates, point_factory)

    @staticmethod
    def save(ellipse: BoundaryEllipse, filepath: str) -> None:
        logger.info(f"Saving boundary state to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(StateIO.to_dict(ellipse), f, indent=2)
        except Exception as e:
            logger.exception(f"Failed to save boundary state: {e}")
            raise e
        logger.info(f"Boundary state with {ellipse.number_of_boundary_points} point(s) saved.")

    @staticmethod
    def load(
        filepath: str,
        coordinates: CoordinateProvider = DEFAULT_COORDINATES,
        point_factory: PointFactory = HomogeneousPoint
    ) -> BoundaryEllipse:
        logger.info(f"Loading boundary state from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                text = f.read()
            ellipse = StateIO.loads(text, coordinates, point_factory)
        except Exception as e:
            logger.error(f"Failed to load boundary state: {e}")
            raise e
        logger.debug(f"Loaded {ellipse!r}")
        return ellipse
