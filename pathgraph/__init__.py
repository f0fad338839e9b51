# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PathGraph - planar path arithmetic.

Builds graphs from closed cubic bezier paths, joins them wherever they
cross, categorises the edges as exterior or interior under a caller
supplied policy and traces the exterior edges back into paths. Ray casting
against the graph provides the insideness information such policies need.
"""

__version__ = "0.1.0"

from .core.error import EdgeKindError, PathFormatError, PathGraphError
from .core.geometry import Bounds, Curve, Point
from .core.graph_path import GraphEdge, GraphEdgeRef, GraphPath, GraphPathEdgeKind
from .core.intersection import Ray, curve_intersects_curve_clip, curve_intersects_ray
from .core.path import BezierPath, ClosePath, CurveTo, LineTo, MoveTo
from .core.ray import (
    GraphRayCollision,
    RayCollision,
    RayCollisionKind,
    RayPath,
    point_in_path,
    ray_collisions,
)

__all__ = [
    "BezierPath",
    "Bounds",
    "ClosePath",
    "Curve",
    "CurveTo",
    "EdgeKindError",
    "GraphEdge",
    "GraphEdgeRef",
    "GraphPath",
    "GraphPathEdgeKind",
    "GraphRayCollision",
    "LineTo",
    "MoveTo",
    "PathFormatError",
    "PathGraphError",
    "Point",
    "Ray",
    "RayCollision",
    "RayCollisionKind",
    "RayPath",
    "curve_intersects_curve_clip",
    "curve_intersects_ray",
    "point_in_path",
    "ray_collisions",
]
