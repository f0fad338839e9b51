# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for the pathgraph diagnostic tool.
"""

from __future__ import annotations

import argparse

from . import __version__
from .core.constants import DEFAULT_ACCURACY


def _positive_float(value: str) -> float:
    """argparse type for strictly positive floats."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: '{value}'")
    if number <= 0.0:
        raise argparse.ArgumentTypeError(f"Must be greater than zero: '{value}'")
    return number


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the pathgraph-diag argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="pathgraph-diag",
        description="PathGraph - collide closed bezier paths and inspect the resulting graph",
        epilog="Paths are read from a JSON file: "
               '{"paths": [{"label": "a", "points": [[x, y], ...]}, '
               '{"label": "b", "start": [x, y], "segments": [[[x1, y1], [x2, y2], [x3, y3]], ...]}]}',
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"PathGraph {__version__}"
    )
    parser.add_argument("inputfile", help="JSON file describing the paths to collide")
    parser.add_argument(
        "-a", "--accuracy", type=_positive_float, default=DEFAULT_ACCURACY,
        help=f"Curve intersection accuracy (default: {DEFAULT_ACCURACY})"
    )
    parser.add_argument(
        "--self-collide", action="store_true",
        help="Also join edges of the merged graph that cross each other"
    )
    parser.add_argument(
        "--ray", nargs=4, type=float, action="append", default=[],
        metavar=("X1", "Y1", "X2", "Y2"),
        help="Cast a ray through (X1, Y1) and (X2, Y2) and list its collisions (may be repeated)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    return parser
