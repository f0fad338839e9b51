# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pathgraph-diag: load closed paths from a JSON file, collide them and print
the resulting graph, optionally followed by the collisions of one or more
rays with it.
"""

from __future__ import annotations

import json
import logging
import sys

from .cli_args import build_argument_parser
from .core.error import PathFormatError
from .core.geometry import Point
from .core.graph_path import GraphPath
from .core.intersection import Ray
from .core.path import BezierPath

logger = logging.getLogger(__name__)


def _point(value, what: str) -> Point:
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)):
        raise PathFormatError(f"{what} must be an [x, y] pair, got {value!r}")
    return Point(float(value[0]), float(value[1]))


def path_from_json(entry: dict, index: int) -> tuple[BezierPath, object]:
    """Turn one entry of the ``paths`` list into ``(path, label)``."""
    if not isinstance(entry, dict):
        raise PathFormatError(f"path {index} must be an object")
    label = entry.get("label", index)

    if "points" in entry:
        points = entry["points"]
        if not isinstance(points, list) or len(points) < 2:
            raise PathFormatError(f"path {index}: 'points' needs at least two points")
        return BezierPath.from_polygon([_point(p, f"path {index} point") for p in points]), label

    if "start" in entry and "segments" in entry:
        start = _point(entry["start"], f"path {index} start")
        segments = []
        for segment in entry["segments"]:
            if not isinstance(segment, list) or len(segment) != 3:
                raise PathFormatError(f"path {index}: each segment must be [cp1, cp2, end]")
            segments.append(tuple(_point(p, f"path {index} segment point") for p in segment))
        if not segments:
            raise PathFormatError(f"path {index}: 'segments' is empty")
        return BezierPath.from_points(start, segments), label

    raise PathFormatError(f"path {index} needs either 'points' or 'start' and 'segments'")


def load_paths(filename: str) -> list[tuple[BezierPath, object]]:
    """Read the paths described by a JSON file.

    Raises:
        OSError: if the file cannot be read.
        PathFormatError: if the content does not describe a list of paths.
    """
    with open(filename, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise PathFormatError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("paths"), list) or not data["paths"]:
        raise PathFormatError("expected an object with a non-empty 'paths' list")
    return [path_from_json(entry, index) for index, entry in enumerate(data["paths"])]


def build_graph(paths, accuracy: float, self_collide: bool = False) -> GraphPath:
    """Collide each path in turn into a single graph."""
    graph = GraphPath()
    for path, label in paths:
        graph = graph.collide(GraphPath.from_path(path, label), accuracy)
    if self_collide:
        graph.self_collide(accuracy)
    return graph


def format_ray_collisions(graph: GraphPath, ray: Ray) -> list[str]:
    collisions = graph.ray_collisions(ray)
    lines = [f"ray ({ray.p1.x:g}, {ray.p1.y:g}) -> ({ray.p2.x:g}, {ray.p2.y:g}): "
             f"{len(collisions)} collisions"]
    for collision in collisions:
        edge = graph.get_edge(collision.collision.edge)
        lines.append(f"    line_t={collision.line_t:.4f} curve_t={collision.curve_t:.4f} "
                     f"at ({collision.position.x:.4f}, {collision.position.y:.4f}) "
                     f"{collision.collision.kind.name.lower()} on "
                     f"{edge.start_point_index()} -> {edge.end_point_index()}")
    return lines


def main(argv=None) -> int:
    """
    Main entry point for pathgraph-diag.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        paths = load_paths(args.inputfile)
    except FileNotFoundError:
        print(f"PathGraph Error: Input file '{args.inputfile}' not found.")
        return 1
    except OSError as e:
        print(f"PathGraph Error: Cannot read '{args.inputfile}': {e}")
        return 1
    except PathFormatError as e:
        print(f"PathGraph Error: {e}")
        return 1

    logger.debug("loaded %d paths from %s", len(paths), args.inputfile)
    graph = build_graph(paths, args.accuracy, args.self_collide)

    print(repr(graph))
    print(graph.describe())

    for x1, y1, x2, y2 in args.ray:
        ray = Ray(Point(x1, y1), Point(x2, y2))
        for line in format_ray_collisions(graph, ray):
            print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
