# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Ray casting against path graphs.

Casts an infinite line through a :class:`RayPath` and returns the points
where it genuinely crosses the path, ordered along the ray. A plain
curve/ray intersection test is not enough for this: a ray passing through
a vertex hits both edges that meet there, a ray running along an edge hits
it everywhere, and a ray touching a vertex from one side does not cross
the path at all. The pipeline in :func:`ray_collisions` resolves these
cases so callers can count crossings for insideness tests.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import NamedTuple

from .constants import (
    GLANCING_SIDE,
    RAY_SECTION_T,
    RAY_T_END,
    RAY_T_START,
    SMALL_DISTANCE,
)
from .geometry import Curve, Point
from .intersection import Ray, curve_intersects_ray

logger = logging.getLogger(__name__)


class RayCollisionKind(enum.Enum):
    INTERSECTION = "intersection"   # At a point where the graph branches
    SINGLE_EDGE = "single_edge"     # On an edge (or a point with one way out)


class GraphRayCollision(NamedTuple):
    kind: RayCollisionKind
    edge: object                    # GraphEdgeRef of the edge that was hit

    @property
    def is_intersection(self) -> bool:
        return self.kind is RayCollisionKind.INTERSECTION


class RayCollision(NamedTuple):
    collision: GraphRayCollision
    curve_t: float
    line_t: float
    position: Point


class RayPath(ABC):
    """The view of a path graph needed by the ray casting algorithm.

    Edge references are objects with ``start_idx``, ``edge_idx`` and
    ``reverse`` attributes and a ``reversed()`` method; edges are curve-like
    (``start_point``, ``control_points``, ``end_point``).
    """

    @abstractmethod
    def num_points(self) -> int:
        ...

    @abstractmethod
    def num_edges(self, point_idx: int) -> int:
        """Number of edges leaving a point."""

    @abstractmethod
    def edge_refs_for_point(self, point_idx: int) -> list:
        """References to the edges leaving a point."""

    @abstractmethod
    def reverse_edge_refs_for_point(self, point_idx: int) -> list:
        """References (reversed) to the edges arriving at a point."""

    @abstractmethod
    def get_edge(self, edge_ref):
        ...

    @abstractmethod
    def point_position(self, point_idx: int) -> Point:
        ...

    @abstractmethod
    def edge_start_point_idx(self, edge_ref) -> int:
        ...

    @abstractmethod
    def edge_end_point_idx(self, edge_ref) -> int:
        ...

    @abstractmethod
    def edge_following_edge_idx(self, edge_ref) -> int:
        """Index of the edge at the end point that continues this edge's path."""

    def get_next_edge(self, edge_ref):
        """The edge following ``edge_ref`` as ``(ref, edge)``."""
        end_idx = self.edge_end_point_idx(edge_ref)
        next_ref = self.edge_refs_for_point(end_idx)[self.edge_following_edge_idx(edge_ref)]
        return next_ref, self.get_edge(next_ref)


# ---------------------------------------------------------------------------
# Edge tests
# ---------------------------------------------------------------------------

def _signum(v: float) -> float:
    return -1.0 if v < 0.0 else 1.0


def _side(point: Point, coeffs) -> float:
    a, b, c = coeffs
    return a * point.x + b * point.y + c


def _edge_points(edge):
    cp1, cp2 = edge.control_points()
    return (edge.start_point(), cp1, cp2, edge.end_point())


def _curve_is_collinear(edge, coeffs) -> bool:
    return all(abs(_side(p, coeffs)) < SMALL_DISTANCE for p in _edge_points(edge))


def _ray_can_intersect(edge, coeffs) -> bool:
    # All four points strictly on one side means the hull misses the ray
    side = sum(_signum(_side(p, coeffs)) for p in _edge_points(edge))
    return -3.99 <= side <= 3.99


def _all_edges(path: RayPath):
    for point_idx in range(path.num_points()):
        for edge_ref in path.edge_refs_for_point(point_idx):
            yield edge_ref, path.get_edge(edge_ref)


# ---------------------------------------------------------------------------
# Raw collisions
# ---------------------------------------------------------------------------

def _raw_ray_collisions(path: RayPath, ray: Ray, coeffs) -> list:
    collisions = []
    for edge_ref, edge in _all_edges(path):
        if _curve_is_collinear(edge, coeffs) or not _ray_can_intersect(edge, coeffs):
            continue
        for curve_t, line_t, position in curve_intersects_ray(edge, ray):
            collisions.append((edge_ref, curve_t, line_t, position))
    return collisions


def _collinear_sections(path: RayPath, coeffs) -> list[list[int]]:
    """Groups of points joined by edges lying along the ray."""
    section_with_point: list[int | None] = [None] * path.num_points()
    sections: list[list[int]] = []

    for edge_ref, edge in _all_edges(path):
        if not _curve_is_collinear(edge, coeffs):
            continue

        start_idx = path.edge_start_point_idx(edge_ref)
        end_idx = path.edge_end_point_idx(edge_ref)
        start_section = section_with_point[start_idx]
        end_section = section_with_point[end_idx]

        if start_section is not None and end_section is not None:
            if start_section != end_section:
                # Edge joins two sections
                for point_idx in sections[end_section]:
                    section_with_point[point_idx] = start_section
                sections[start_section].extend(sections[end_section])
                sections[end_section] = []
        elif start_section is not None:
            sections[start_section].append(end_idx)
            section_with_point[end_idx] = start_section
        elif end_section is not None:
            sections[end_section].append(start_idx)
            section_with_point[start_idx] = end_section
        else:
            section_with_point[start_idx] = len(sections)
            section_with_point[end_idx] = len(sections)
            sections.append([start_idx] if start_idx == end_idx else [start_idx, end_idx])

    return [section for section in sections if section]


def _crossing_edges(path: RayPath, coeffs, points: list[int]) -> list:
    """Edges leaving a collinear section on the other side of the ray from where they entered."""
    crossing = []

    for point_idx in points:
        for incoming_ref in path.reverse_edge_refs_for_point(point_idx):
            incoming_ref = incoming_ref.reversed()
            incoming = path.get_edge(incoming_ref)
            if _curve_is_collinear(incoming, coeffs):
                continue

            following_idx = path.edge_following_edge_idx(incoming_ref)
            leaving_ref = path.edge_refs_for_point(point_idx)[following_idx]
            leaving = path.get_edge(leaving_ref)

            # Skip along the collinear run; a run that loops back on itself never leaves the ray
            seen = {(leaving_ref.start_idx, leaving_ref.edge_idx)}
            while _curve_is_collinear(leaving, coeffs):
                leaving_ref, leaving = path.get_next_edge(leaving_ref)
                key = (leaving_ref.start_idx, leaving_ref.edge_idx)
                if path.edge_start_point_idx(leaving_ref) == point_idx or key in seen:
                    break
                seen.add(key)

            if _curve_is_collinear(leaving, coeffs):
                continue

            incoming_side = _side(incoming.control_points()[1], coeffs)
            leaving_side = _side(leaving.control_points()[0], coeffs)
            if _signum(incoming_side) != _signum(leaving_side):
                crossing.append(leaving_ref)

    return crossing


def _collinear_ray_collisions(path: RayPath, ray: Ray, coeffs) -> list:
    collisions = []
    for section in _collinear_sections(path, coeffs):
        for edge_ref in _crossing_edges(path, coeffs, section):
            position = path.point_position(path.edge_start_point_idx(edge_ref))
            collisions.append((edge_ref, 0.0, ray.pos_for_point(position), position))
    return collisions


# ---------------------------------------------------------------------------
# Clean-up passes
# ---------------------------------------------------------------------------

def _remove_collisions_before_or_after_collinear_section(path: RayPath, coeffs, collisions) -> list:
    # Crossings through collinear runs come from _collinear_ray_collisions instead
    result = []
    for collision in collisions:
        edge_ref, curve_t, _line_t, position = collision

        if curve_t > 1.0 - RAY_SECTION_T:
            point_idx = path.edge_end_point_idx(edge_ref)
            neighbours = path.edge_refs_for_point(point_idx)
        elif curve_t < RAY_SECTION_T:
            point_idx = path.edge_start_point_idx(edge_ref)
            neighbours = path.reverse_edge_refs_for_point(point_idx)
        else:
            result.append(collision)
            continue

        if (position.is_near_to(path.point_position(point_idx), SMALL_DISTANCE)
                and any(_curve_is_collinear(path.get_edge(ref), coeffs) for ref in neighbours)):
            continue
        result.append(collision)
    return result


def _move_collisions_at_end_to_beginning(path: RayPath, collisions) -> list:
    # A ray through a point hits both the edge arriving there and the edge leaving
    result = []
    for edge_ref, curve_t, line_t, position in collisions:
        if curve_t > RAY_T_END:
            end_idx = path.edge_end_point_idx(edge_ref)
            if path.point_position(end_idx).is_near_to(position, SMALL_DISTANCE):
                following_idx = path.edge_following_edge_idx(edge_ref)
                edge_ref = path.edge_refs_for_point(end_idx)[following_idx]
                curve_t = 0.0
        elif curve_t < RAY_T_START:
            if path.point_position(edge_ref.start_idx).is_near_to(position, SMALL_DISTANCE):
                curve_t = 0.0
        result.append((edge_ref, curve_t, line_t, position))
    return result


def _move_collinear_collisions_to_end(path: RayPath, coeffs, collisions) -> list:
    result = []
    for collision in collisions:
        edge_ref, curve_t, line_t, position = collision
        edge = path.get_edge(edge_ref)
        if not _curve_is_collinear(edge, coeffs):
            result.append(collision)
            continue

        seen = {(edge_ref.start_idx, edge_ref.edge_idx)}
        while _curve_is_collinear(edge, coeffs):
            edge_ref, edge = path.get_next_edge(edge_ref)
            key = (edge_ref.start_idx, edge_ref.edge_idx)
            if key in seen:
                break
            seen.add(key)

        if _curve_is_collinear(edge, coeffs):
            logger.debug("dropping ray collision on a fully collinear loop at point %d", edge_ref.start_idx)
            continue
        result.append((edge_ref, 0.0, line_t, edge.start_point()))
    return result


def _previous_edge(path: RayPath, edge_ref):
    for incoming_ref in path.reverse_edge_refs_for_point(edge_ref.start_idx):
        incoming_ref = incoming_ref.reversed()
        if path.edge_following_edge_idx(incoming_ref) == edge_ref.edge_idx:
            return incoming_ref
    return None


def _remove_glancing_collisions(path: RayPath, coeffs, collisions) -> list:
    result = []
    for collision in collisions:
        edge_ref, curve_t, _line_t, _position = collision
        if curve_t > 0.0:
            result.append(collision)
            continue

        previous_ref = _previous_edge(path, edge_ref)
        if previous_ref is None:
            logger.debug("no edge leads into ray collision at point %d", edge_ref.start_idx)
            result.append(collision)
            continue

        cp_in = path.get_edge(previous_ref).control_points()[1]
        cp_out = path.get_edge(edge_ref).control_points()[0]
        side_in = _side(cp_in, coeffs)
        side_out = _side(cp_out, coeffs)
        side_in = 0.0 if abs(side_in) < GLANCING_SIDE else _signum(side_in)
        side_out = 0.0 if abs(side_out) < GLANCING_SIDE else _signum(side_out)

        # Same side: the ray touches the path here without crossing it
        if side_in != side_out:
            result.append(collision)
    return result


def _remove_duplicate_collisions_at_start(collisions) -> list:
    seen = set()
    result = []
    for collision in collisions:
        edge_ref, curve_t, _line_t, _position = collision
        if curve_t <= 0.0:
            key = (edge_ref.start_idx, edge_ref.edge_idx)
            if key in seen:
                continue
            seen.add(key)
        result.append(collision)
    return result


def _flag_collisions_at_intersections(path: RayPath, collisions) -> list[RayCollision]:
    result = []
    for edge_ref, curve_t, line_t, position in collisions:
        if curve_t <= 0.0 and path.num_edges(edge_ref.start_idx) > 1:
            kind = RayCollisionKind.INTERSECTION
        else:
            kind = RayCollisionKind.SINGLE_EDGE
        result.append(RayCollision(GraphRayCollision(kind, edge_ref), curve_t, line_t, position))
    return result


def ray_collisions(path: RayPath, ray: Ray) -> list[RayCollision]:
    """All points where ``ray`` crosses ``path``, ordered along the ray.

    Ties on the ray position are ordered by start point and edge index so the
    result is deterministic.
    """
    coeffs = ray.coefficients()

    collinear = _collinear_ray_collisions(path, ray, coeffs)
    crossing = _raw_ray_collisions(path, ray, coeffs)
    crossing = _remove_collisions_before_or_after_collinear_section(path, coeffs, crossing)

    collisions = collinear + crossing
    collisions = _move_collisions_at_end_to_beginning(path, collisions)
    collisions = _move_collinear_collisions_to_end(path, coeffs, collisions)
    collisions = _remove_glancing_collisions(path, coeffs, collisions)
    collisions = _remove_duplicate_collisions_at_start(collisions)
    result = _flag_collisions_at_intersections(path, collisions)

    result.sort(key=lambda c: (c.line_t, c.collision.edge.start_idx, c.collision.edge.edge_idx))
    logger.debug("ray %r: %d collisions", ray, len(result))
    return result


# ---------------------------------------------------------------------------
# Insideness
# ---------------------------------------------------------------------------

def _crossing_direction(edge, curve_t: float, coeffs) -> int:
    curve = Curve.from_curve(edge)
    a, b, _c = coeffs
    tangent = curve.tangent_at_pos(curve_t)
    rate = a * tangent.x + b * tangent.y
    if abs(rate) < 1e-12:
        rate = _side(curve.end, coeffs) - _side(curve.start, coeffs)
    return 1 if rate > 0.0 else -1


def point_in_path(path: RayPath, point: Point, use_winding: bool = False) -> bool:
    """Ray-casting point-in-path test.

    Casts a horizontal ray from ``point`` towards +x and counts the
    crossings reported by :func:`ray_collisions`.

    Args:
        path: Any RayPath (usually a GraphPath).
        point: Test point.
        use_winding: True for nonzero winding rule, False for even-odd.

    Returns:
        True if the point is inside the path.
    """
    ray = Ray(point, Point(point.x + 1.0, point.y))
    coeffs = ray.coefficients()

    winding = 0
    crossings = 0
    for collision in ray_collisions(path, ray):
        if collision.line_t <= 0.0:
            continue
        crossings += 1
        if use_winding:
            edge = path.get_edge(collision.collision.edge)
            winding += _crossing_direction(edge, collision.curve_t, coeffs)

    if use_winding:
        return winding != 0
    else:
        return (crossings % 2) == 1
