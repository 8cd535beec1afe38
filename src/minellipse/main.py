"""
minellipse CLI - Main entry point.

Builds boundary states from points and classifies query points against
saved states.
"""
import argparse
import itertools
import logging
import sys
from typing import Optional, Sequence

from minellipse.logging_config import setup_logging
from minellipse.model.boundary import BoundaryEllipse, MAX_BOUNDARY_POINTS
from minellipse.model.coordinates import HomogeneousPoint
from minellipse.model.enums import Orientation
from minellipse.model.predicates import orientation
from minellipse.model.io import StateIO, parse_number

logger = logging.getLogger(__name__)


def parse_point(text: str) -> HomogeneousPoint:
    """
    Parse "x,y" or "x,y,w" into a point. Coordinates may be fractions like "1/3".

    Raises:
        argparse.ArgumentTypeError: If the text is not a valid point.
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Expected 'x,y' or 'x,y,w', got '{text}'.")
    try:
        return HomogeneousPoint(*(parse_number(part) for part in parts))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def format_point(p: HomogeneousPoint) -> str:
    return f"{p.x},{p.y},{p.w}"


def has_collinear_triple(points: Sequence[HomogeneousPoint]) -> bool:
    return any(orientation(p, q, r) == Orientation.COLLINEAR for p, q, r in itertools.combinations(points, 3))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minellipse",
        description="Exact inside/boundary/outside tests for the smallest enclosing ellipse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Boundary through two points, saved to a file
  minellipse build 0,0 2,0 -o segment.json

  # Classify points against it
  minellipse classify segment.json 1,0 1,1
        """
    )
    parser.add_argument("--log-level", default=None,
                        help="Logging level (DEBUG, INFO, ...); defaults to $MINELLIPSE_LOG_LEVEL")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build a boundary state from 0 to 5 points")
    build.add_argument("points", nargs="*", type=parse_point, help="Boundary points 'x,y[,w]'")
    build.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")

    classify = subparsers.add_parser("classify", help="Classify points against a saved state")
    classify.add_argument("state", help="State file written by 'build'")
    classify.add_argument("points", nargs="+", type=parse_point, help="Query points 'x,y[,w]'")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = None
    if args.log_level:
        level = logging.getLevelName(args.log_level.upper())
        if not isinstance(level, int):
            parser.error(f"Unknown log level: {args.log_level}")
    setup_logging(level=level, log_file=args.log_file)

    try:
        if args.command == "build":
            if len(args.points) > MAX_BOUNDARY_POINTS:
                parser.error(f"At most {MAX_BOUNDARY_POINTS} boundary points, got {len(args.points)}.")
            if len(args.points) >= 3 and has_collinear_triple(args.points):
                parser.error("No three boundary points may be collinear.")
            ellipse = BoundaryEllipse()
            ellipse.set(*args.points)
            if args.output:
                StateIO.save(ellipse, args.output)
            else:
                print(StateIO.dumps(ellipse, indent=2))
        else:
            ellipse = StateIO.load(args.state)
            for p in args.points:
                print(f"{format_point(p)} {ellipse.bounded_side(p).name}")
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0
