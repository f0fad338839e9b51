# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Graph paths: the data structure behind path arithmetic.

A graph path is a set of points where each point can have any number of
outgoing edges. Building one from closed paths and colliding them turns
every place the paths cross into a shared point with branching edges.
Edges are then categorised as exterior (on the boundary of the result of a
path operation) or interior, and the exterior edges are traced back into
closed paths.

Points are stored in an arena and referred to by index. Edges belong to
their start point and are referred to by ``GraphEdgeRef``, which can also
describe traversing an edge backwards. Which edges a particular operation
keeps is decided by a caller supplied picking function passed to
:meth:`GraphPath.classify_exterior_edges`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple, Union

from .constants import CLIP_TOLERANCE, CLOSE_DISTANCE, DEFAULT_ACCURACY, T_ONE, T_ZERO
from .error import EdgeKindError
from .geometry import Curve, Point
from .intersection import curve_intersects_curve_clip
from .path import BezierPath
from .ray import RayPath, ray_collisions

logger = logging.getLogger(__name__)


class GraphPathEdgeKind(enum.Enum):
    UNCATEGORISED = "uncategorised"  # Not categorised yet
    EXTERIOR = "exterior"            # On the boundary of the result
    INTERIOR = "interior"            # Inside the result


@dataclass(frozen=True)
class GraphEdgeRef:
    """Reference to an edge; ``reverse`` traverses it from end to start."""
    start_idx: int
    edge_idx: int
    reverse: bool = False

    def reversed(self) -> GraphEdgeRef:
        return GraphEdgeRef(self.start_idx, self.edge_idx, not self.reverse)


class _GraphPathEdge:
    """An edge as stored by its start point."""

    __slots__ = ("label", "kind", "cp1", "cp2", "end_idx", "following_edge_idx")

    def __init__(self, kind, cp1, cp2, end_idx, label, following_edge_idx=0):
        self.label = label
        self.kind = kind
        self.cp1 = cp1
        self.cp2 = cp2
        self.end_idx = end_idx
        self.following_edge_idx = following_edge_idx

    def set_kind(self, kind: GraphPathEdgeKind) -> None:
        if kind is self.kind:
            return
        if self.kind is not GraphPathEdgeKind.UNCATEGORISED or kind is GraphPathEdgeKind.UNCATEGORISED:
            raise EdgeKindError(self.kind, kind)
        self.kind = kind

    def copy(self, offset: int = 0) -> _GraphPathEdge:
        return _GraphPathEdge(self.kind, self.cp1, self.cp2, self.end_idx + offset,
                              self.label, self.following_edge_idx)


class _GraphPathPoint:
    __slots__ = ("position", "forward_edges", "connected_from")

    def __init__(self, position: Point, forward_edges=None) -> None:
        self.position = position
        self.forward_edges: list[_GraphPathEdge] = forward_edges if forward_edges is not None else []
        self.connected_from: list[int] = []


class GraphEdge:
    """Read-only view of an edge in a graph, in the direction given by its reference."""

    __slots__ = ("graph", "edge_ref")

    def __init__(self, graph: GraphPath, edge_ref: GraphEdgeRef) -> None:
        self.graph = graph
        self.edge_ref = edge_ref

    def _edge(self) -> _GraphPathEdge:
        return self.graph._points[self.edge_ref.start_idx].forward_edges[self.edge_ref.edge_idx]

    @property
    def is_reversed(self) -> bool:
        return self.edge_ref.reverse

    @property
    def kind(self) -> GraphPathEdgeKind:
        return self._edge().kind

    @property
    def label(self):
        return self._edge().label

    def start_point_index(self) -> int:
        if self.edge_ref.reverse:
            return self._edge().end_idx
        return self.edge_ref.start_idx

    def end_point_index(self) -> int:
        if self.edge_ref.reverse:
            return self.edge_ref.start_idx
        return self._edge().end_idx

    def start_point(self) -> Point:
        return self.graph._points[self.start_point_index()].position

    def end_point(self) -> Point:
        return self.graph._points[self.end_point_index()].position

    def control_points(self) -> tuple[Point, Point]:
        edge = self._edge()
        if self.edge_ref.reverse:
            return (edge.cp2, edge.cp1)
        return (edge.cp1, edge.cp2)

    def to_curve(self) -> Curve:
        return Curve.from_curve(self)

    def point_at_pos(self, t: float) -> Point:
        return self.to_curve().point_at_pos(t)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GraphEdge):
            return NotImplemented
        return self.graph is other.graph and self.edge_ref == other.edge_ref

    def __hash__(self) -> int:
        return hash((id(self.graph), self.edge_ref))

    def __repr__(self) -> str:
        cp1, cp2 = self.control_points()
        direction = " (reversed)" if self.edge_ref.reverse else ""
        return (f"{self.start_point_index()} -> {self.end_point_index()}{direction} "
                f"({self.start_point()} -> {self.end_point()} ({cp1}, {cp2})) "
                f"{self.kind.name.lower()}")


def _as_edge_ref(edge) -> GraphEdgeRef:
    if isinstance(edge, GraphEdge):
        return edge.edge_ref
    return edge


def _stored_key(edge: GraphEdge) -> tuple[int, int]:
    """The stored edge behind a view, whichever way it is traversed."""
    return (edge.edge_ref.start_idx, edge.edge_ref.edge_idx)


def _t_is_zero(t: float) -> bool:
    return t < T_ZERO


def _t_is_one(t: float) -> bool:
    return t > T_ONE


def _t_is_inside(t: float) -> bool:
    return not _t_is_zero(t) and not _t_is_one(t)


def _split_pos(curve: Curve, position: Point, t: float) -> float:
    """Where ``curve`` passes closest to ``position``, searching from t.

    Keeps t if the closest point would snap onto an end of the curve.
    """
    fitted = curve.pos_for_point(position, t)
    return fitted if _t_is_inside(fitted) else t


class _Join(NamedTuple):
    """What joining two edges did to the graph."""
    point: int                              # Index of the collision point
    split1: tuple[float, int] | None        # (t, index of the appended second half) for edge 1
    split2: tuple[float, int] | None
    unified: tuple[int, int] | None         # (removed point, edge index offset at the collision point)


PickEdgeFn = Callable[["GraphPath", GraphEdge, "list[GraphEdge]"], Union[GraphEdge, GraphEdgeRef]]


class GraphPath(RayPath):
    """
    A path where each point can have more than one connected edge.

    Graphs are built from closed paths with :meth:`from_path`, combined with
    :meth:`merge` or :meth:`collide`, categorised with
    :meth:`classify_exterior_edges` and turned back into paths with
    :meth:`exterior_paths`.
    """

    def __init__(self, points: list[_GraphPathPoint] | None = None) -> None:
        self._points: list[_GraphPathPoint] = points if points is not None else []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_path(cls, path, label) -> GraphPath:
        """Graph with one point per vertex of ``path`` and every edge uncategorised.

        ``path`` is anything with ``start_point()`` and ``points()`` returning
        ``(cp1, cp2, end)`` triples. The path is closed: if it does not end at
        its start point a straight closing edge is added.
        """
        start_point = path.start_point()
        points = [_GraphPathPoint(start_point)]

        for idx, (cp1, cp2, end_point) in enumerate(path.points()):
            points.append(_GraphPathPoint(end_point))
            points[idx].forward_edges.append(
                _GraphPathEdge(GraphPathEdgeKind.UNCATEGORISED, cp1, cp2, idx + 1, label))

        last_point = len(points) - 1
        if last_point == 0:
            # A start point on its own has no edges to keep
            return cls()

        if start_point.distance_to(points[last_point].position) < CLOSE_DISTANCE:
            points.pop()
            points[last_point - 1].forward_edges[0].end_idx = 0
        else:
            close = Curve.line(points[last_point].position, start_point)
            points[last_point].forward_edges.append(
                _GraphPathEdge(GraphPathEdgeKind.UNCATEGORISED, close.cp1, close.cp2, 0, label))

        graph = cls(points)
        graph.recalculate_reverse_connections()
        return graph

    @classmethod
    def from_merged_paths(cls, paths) -> GraphPath:
        """Merge (without colliding) an iterable of ``(path, label)`` pairs."""
        merged = cls()
        for path, label in paths:
            merged = merged.merge(cls.from_path(path, label))
        return merged

    def recalculate_reverse_connections(self) -> None:
        """Rebuild the list of points with an edge into each point."""
        for point in self._points:
            point.connected_from = []

        for point_idx, point in enumerate(self._points):
            for edge in point.forward_edges:
                connected_from = self._points[edge.end_idx].connected_from
                if point_idx not in connected_from:
                    connected_from.append(point_idx)

    def merge(self, other: GraphPath) -> GraphPath:
        """Graph containing the points of this graph followed by those of ``other``.

        No collision detection is done: the two sets of edges are simply put
        side by side. The inputs are left unchanged.
        """
        offset = len(self._points)
        points = [_GraphPathPoint(p.position, [e.copy() for e in p.forward_edges]) for p in self._points]
        points.extend(_GraphPathPoint(p.position, [e.copy(offset) for e in p.forward_edges])
                      for p in other._points)

        merged = GraphPath(points)
        merged.recalculate_reverse_connections()
        return merged

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def num_points(self) -> int:
        return len(self._points)

    def num_edges(self, point_idx: int) -> int:
        return len(self._points[point_idx].forward_edges)

    def point_position(self, point_idx: int) -> Point:
        return self._points[point_idx].position

    def connected_from(self, point_idx: int) -> list[int]:
        return list(self._points[point_idx].connected_from)

    def all_edges(self):
        for point_idx in range(len(self._points)):
            yield from self.edges_for_point(point_idx)

    def edges_for_point(self, point_idx: int) -> list[GraphEdge]:
        return [GraphEdge(self, ref) for ref in self.edge_refs_for_point(point_idx)]

    def reverse_edges_for_point(self, point_idx: int) -> list[GraphEdge]:
        return [GraphEdge(self, ref) for ref in self.reverse_edge_refs_for_point(point_idx)]

    def get_edge(self, edge_ref: GraphEdgeRef) -> GraphEdge:
        return GraphEdge(self, edge_ref)

    # RayPath

    def edge_refs_for_point(self, point_idx: int) -> list[GraphEdgeRef]:
        return [GraphEdgeRef(point_idx, edge_idx)
                for edge_idx in range(len(self._points[point_idx].forward_edges))]

    def reverse_edge_refs_for_point(self, point_idx: int) -> list[GraphEdgeRef]:
        refs = []
        for from_idx in self._points[point_idx].connected_from:
            for edge_idx, edge in enumerate(self._points[from_idx].forward_edges):
                if edge.end_idx == point_idx:
                    refs.append(GraphEdgeRef(from_idx, edge_idx, True))
        return refs

    def edge_start_point_idx(self, edge_ref: GraphEdgeRef) -> int:
        return GraphEdge(self, edge_ref).start_point_index()

    def edge_end_point_idx(self, edge_ref: GraphEdgeRef) -> int:
        return GraphEdge(self, edge_ref).end_point_index()

    def edge_following_edge_idx(self, edge_ref: GraphEdgeRef) -> int:
        return self._stored_edge(edge_ref).following_edge_idx

    def _stored_edge(self, edge_ref: GraphEdgeRef) -> _GraphPathEdge:
        return self._points[edge_ref.start_idx].forward_edges[edge_ref.edge_idx]

    def _edge_curve(self, point_idx: int, edge_idx: int) -> Curve:
        edge = self._points[point_idx].forward_edges[edge_idx]
        return Curve(self._points[point_idx].position, edge.cp1, edge.cp2,
                     self._points[edge.end_idx].position)

    # ------------------------------------------------------------------
    # Collision detection
    # ------------------------------------------------------------------

    def _split_edge(self, point_idx: int, edge_idx: int, curve: Curve, t: float, collision_point: int) -> int:
        """Split an edge at t so it meets ``collision_point``; returns the index of the second half."""
        edge = self._points[point_idx].forward_edges[edge_idx]
        before, after = curve.subdivide(t)

        target = self._points[collision_point]
        new_idx = len(target.forward_edges)
        target.forward_edges.append(
            _GraphPathEdge(edge.kind, after.cp1, after.cp2, edge.end_idx, edge.label, edge.following_edge_idx))

        edge.cp1 = before.cp1
        edge.cp2 = before.cp2
        edge.end_idx = collision_point
        edge.following_edge_idx = new_idx
        return new_idx

    def _unify_points(self, old_idx: int, new_idx: int) -> int:
        """Make ``old_idx`` part of ``new_idx``; returns the offset applied to its edge indexes."""
        offset = len(self._points[new_idx].forward_edges)

        for point in self._points:
            for edge in point.forward_edges:
                if edge.end_idx == old_idx:
                    edge.end_idx = new_idx
                    edge.following_edge_idx += offset

        moved = self._points[old_idx].forward_edges
        self._points[old_idx].forward_edges = []
        self._points[new_idx].forward_edges.extend(moved)
        return offset

    def _join_edges_at_intersection(self, edge1: tuple[int, int], edge2: tuple[int, int],
                                    t1: float, t2: float) -> _Join | None:
        """Join two edges at a collision, returning what changed.

        A t near 0 or 1 collides at the existing end point of that edge,
        otherwise the edge is subdivided. When both collide at existing end
        points that differ, the two points are unified.
        """
        if edge1 == edge2:
            return None

        edge1_idx, edge1_edge_idx = edge1
        edge2_idx, edge2_edge_idx = edge2
        curve1 = self._edge_curve(edge1_idx, edge1_edge_idx)
        curve2 = self._edge_curve(edge2_idx, edge2_edge_idx)
        edge1_end_idx = self._points[edge1_idx].forward_edges[edge1_edge_idx].end_idx
        edge2_end_idx = self._points[edge2_idx].forward_edges[edge2_edge_idx].end_idx

        if _t_is_zero(t1):
            collision_point = edge1_idx
        elif _t_is_one(t1):
            collision_point = edge1_end_idx
        elif _t_is_zero(t2):
            collision_point = edge2_idx
        elif _t_is_one(t2):
            collision_point = edge2_end_idx
        else:
            # Mid-point of both edges: they meet here, so either curve gives the position
            collision_point = len(self._points)
            self._points.append(_GraphPathPoint(curve1.point_at_pos(t1)))

        # Split where each curve actually reaches the collision point, so the
        # halves end on it rather than near it
        position = self._points[collision_point].position
        split1 = split2 = unified = None
        if _t_is_inside(t1):
            t1 = _split_pos(curve1, position, t1)
            split1 = (t1, self._split_edge(edge1_idx, edge1_edge_idx, curve1, t1, collision_point))
        if _t_is_inside(t2):
            t2 = _split_pos(curve2, position, t2)
            split2 = (t2, self._split_edge(edge2_idx, edge2_edge_idx, curve2, t2, collision_point))
        else:
            edge2_point = edge2_idx if _t_is_zero(t2) else edge2_end_idx
            if edge2_point != collision_point:
                unified = (edge2_point, self._unify_points(edge2_point, collision_point))

        logger.debug("joined (%d, %d) at t=%.4f with (%d, %d) at t=%.4f at point %d",
                     edge1_idx, edge1_edge_idx, t1, edge2_idx, edge2_edge_idx, t2, collision_point)
        return _Join(collision_point, split1, split2, unified)

    @staticmethod
    def _update_pending(side: list, edge: tuple[int, int], join: _Join, split) -> bool:
        """Move a pending collision on a split edge onto the right half."""
        if split is None or (side[0], side[1]) != edge:
            return False
        t_split, new_idx = split
        if side[2] < t_split:
            side[2] /= t_split
        else:
            side[2] = (side[2] - t_split) / (1.0 - t_split)
            side[0] = join.point
            side[1] = new_idx
        return True

    def _detect_collisions(self, collide_from: range, collide_to: range, accuracy: float) -> None:
        """Find where edges from one range of points cross edges from another and join them there."""
        collide_to = list(collide_to)
        collisions = []
        tolerance = accuracy * CLIP_TOLERANCE

        # Each point may be the site of one collision exactly on it
        collided = [False] * len(self._points)

        for src_idx in collide_from:
            for src_edge_idx in range(len(self._points[src_idx].forward_edges)):
                for tgt_idx in collide_to:
                    for tgt_edge_idx in range(len(self._points[tgt_idx].forward_edges)):
                        if src_idx == tgt_idx and src_edge_idx == tgt_edge_idx:
                            continue

                        src_curve = self._edge_curve(src_idx, src_edge_idx)
                        tgt_curve = self._edge_curve(tgt_idx, tgt_edge_idx)
                        if not src_curve.fast_bounding_box().overlaps(tgt_curve.fast_bounding_box(), tolerance):
                            continue

                        for src_t, tgt_t in curve_intersects_curve_clip(src_curve, tgt_curve, accuracy):
                            src = self._collision_site(src_idx, src_edge_idx, src_t)
                            tgt = self._collision_site(tgt_idx, tgt_edge_idx, tgt_t)

                            # Both ends already meet at the same point
                            if _t_is_zero(src[2]) and _t_is_zero(tgt[2]) and src[0] == tgt[0]:
                                continue

                            if _t_is_zero(src[2]):
                                if collided[src[0]]:
                                    continue
                                collided[src[0]] = True
                            if _t_is_zero(tgt[2]):
                                if collided[tgt[0]]:
                                    continue
                                collided[tgt[0]] = True

                            collisions.append((src, tgt))

        logger.debug("found %d collisions", len(collisions))

        # Joining changes the edges later collisions refer to, so apply them one at a time
        while collisions:
            src, tgt = collisions.pop()
            src_edge = (src[0], src[1])
            tgt_edge = (tgt[0], tgt[1])
            join = self._join_edges_at_intersection(src_edge, tgt_edge, src[2], tgt[2])
            if join is None:
                continue

            for pending in collisions:
                for side in pending:
                    if self._update_pending(side, src_edge, join, join.split1):
                        continue
                    if self._update_pending(side, tgt_edge, join, join.split2):
                        continue
                    if join.unified is not None and side[0] == join.unified[0]:
                        side[0] = join.point
                        side[1] += join.unified[1]

        self.recalculate_reverse_connections()

    def _collision_site(self, point_idx: int, edge_idx: int, t: float) -> list:
        """``[point, edge, t]``, with a collision at the end of an edge moved to the start of the next."""
        if _t_is_one(t):
            edge = self._points[point_idx].forward_edges[edge_idx]
            return [edge.end_idx, edge.following_edge_idx, 0.0]
        return [point_idx, edge_idx, t]

    def collide(self, other: GraphPath, accuracy: float = DEFAULT_ACCURACY) -> GraphPath:
        """Merge with ``other`` and join the two graphs wherever their edges meet.

        Edge kinds are left as they were in the source graphs. Knowing where the
        paths cross is the first step towards path arithmetic: categorising the
        edges afterwards tells a hole cut into a shape from an overlap.
        """
        offset = len(self._points)
        merged = self.merge(other)
        merged._detect_collisions(range(0, offset), range(offset, len(merged._points)), accuracy)
        return merged

    def self_collide(self, accuracy: float = DEFAULT_ACCURACY) -> GraphPath:
        """Join every pair of edges of this graph that cross each other, in place."""
        everything = range(0, len(self._points))
        self._detect_collisions(everything, everything, accuracy)
        return self

    def ray_collisions(self, ray):
        """Where ``ray`` crosses this graph; see :func:`pathgraph.core.ray.ray_collisions`."""
        return ray_collisions(self, ray)

    # ------------------------------------------------------------------
    # Edge classification
    # ------------------------------------------------------------------

    def _mark_connected_edges_as_interior(self, start_point: int) -> None:
        visited = [False] * len(self._points)
        to_visit = [start_point]
        marked = 0

        while to_visit:
            point_idx = to_visit.pop()
            if visited[point_idx]:
                continue
            visited[point_idx] = True

            for edge in self._points[point_idx].forward_edges:
                to_visit.append(edge.end_idx)
                if edge.kind is GraphPathEdgeKind.UNCATEGORISED:
                    edge.set_kind(GraphPathEdgeKind.INTERIOR)
                    marked += 1

        logger.debug("marked %d edges as interior", marked)

    def classify_exterior_edges(self, start_edge, pick_exterior_edge: PickEdgeFn) -> None:
        """Mark a loop of edges starting at ``start_edge`` as exterior.

        The walk follows the only way on where there is one; where the path
        branches ``pick_exterior_edge(graph, last_edge, candidates)`` chooses
        among the uncategorised edges (forwards and reversed) leaving the
        current point. The walk ends on reaching an exterior edge again. Edges
        connected to the loop that were not picked are marked interior.
        """
        current = _as_edge_ref(start_edge)
        steps = 0

        while True:
            stored = self._stored_edge(current)
            if stored.kind is GraphPathEdgeKind.EXTERIOR:
                break
            stored.set_kind(GraphPathEdgeKind.EXTERIOR)
            steps += 1

            end_idx = current.start_idx if current.reverse else stored.end_idx
            end_point = self._points[end_idx]

            if not current.reverse and len(end_point.forward_edges) == 1:
                current = GraphEdgeRef(end_idx, 0)
            elif current.reverse and len(self.reverse_edge_refs_for_point(end_idx)) == 1:
                current = self.reverse_edge_refs_for_point(end_idx)[0]
            else:
                last_edge = GraphEdge(self, current)
                candidates = [edge for edge in self.edges_for_point(end_idx) + self.reverse_edges_for_point(end_idx)
                              if edge.kind is GraphPathEdgeKind.UNCATEGORISED]
                if not candidates:
                    logger.warning("exterior edge walk stopped at point %d: no uncategorised edges", end_idx)
                    break
                current = _as_edge_ref(pick_exterior_edge(self, last_edge, candidates))

        logger.debug("classified %d edges as exterior", steps)
        self._mark_connected_edges_as_interior(current.start_idx)

    def remove_interior_edges(self) -> None:
        """Physically remove every interior edge."""
        remap = []
        for point in self._points:
            mapping = {}
            kept = []
            for edge_idx, edge in enumerate(point.forward_edges):
                if edge.kind is not GraphPathEdgeKind.INTERIOR:
                    mapping[edge_idx] = len(kept)
                    kept.append(edge)
            point.forward_edges = kept
            remap.append(mapping)

        for point in self._points:
            for edge in point.forward_edges:
                edge.following_edge_idx = remap[edge.end_idx].get(edge.following_edge_idx, 0)

        self.recalculate_reverse_connections()

    # ------------------------------------------------------------------
    # Exterior path extraction
    # ------------------------------------------------------------------

    def _next_exterior_edge(self, current: GraphEdge, traced: set) -> GraphEdge | None:
        """An untraced exterior edge leaving the end of ``current``, forward edges first."""
        point_idx = current.end_point_index()
        for edge in self.edges_for_point(point_idx) + self.reverse_edges_for_point(point_idx):
            if edge.kind is GraphPathEdgeKind.EXTERIOR and _stored_key(edge) not in traced:
                return edge
        return None

    def exterior_paths(self, path_factory=BezierPath) -> list:
        """Trace the exterior edges into closed paths built with ``path_factory.from_points``.

        Every exterior edge is traced once. A walk starts on an untraced
        forward edge and follows untraced exterior edges until it is back at
        its own start point, so a walk reaching a point where the outline
        touches itself carries on through it.
        """
        paths = []
        traced = set()

        for point_idx in range(len(self._points)):
            for exterior_edge in self.edges_for_point(point_idx):
                if exterior_edge.kind is not GraphPathEdgeKind.EXTERIOR or _stored_key(exterior_edge) in traced:
                    continue

                start_point = exterior_edge.start_point()
                current = exterior_edge
                path_points = []

                while current is not None:
                    traced.add(_stored_key(current))
                    cp1, cp2 = current.control_points()
                    path_points.append((cp1, cp2, current.end_point()))
                    if current.end_point_index() == point_idx:
                        break
                    current = self._next_exterior_edge(current, traced)

                last_point = path_points[-1][2]
                if not last_point.is_near_to(start_point, CLOSE_DISTANCE):
                    logger.warning("exterior path from point %d does not close; adding a line back to its start",
                                   point_idx)
                    close = Curve.line(last_point, start_point)
                    path_points.append((close.cp1, close.cp2, start_point))

                paths.append(path_factory.from_points(start_point, path_points))

        logger.debug("found %d exterior paths", len(paths))
        return paths

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------

    def describe(self) -> str:
        """Multi-line listing of every point and its edges."""
        lines = []
        for point_idx, point in enumerate(self._points):
            lines.append(f"{point_idx}: ({point.position.x:g}, {point.position.y:g}) "
                         f"from {point.connected_from}")
            for edge in self.edges_for_point(point_idx):
                lines.append(f"    {edge.edge_ref.edge_idx}: {edge!r} label={edge.label!r}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        num_edges = sum(len(p.forward_edges) for p in self._points)
        return f"GraphPath(points={len(self._points)}, edges={num_edges})"
