# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Curve intersection primitives.

Two routines are provided:

``curve_intersects_curve_clip(a, b, accuracy)``
    All intersections between two cubic curves as ``(t_a, t_b)`` pairs.
    Uses fat-line bezier clipping: each curve is alternately clipped against
    a band around the other until both sections are smaller than
    ``accuracy``. When clipping stops making progress (tangent or multiple
    intersections) the larger section is split in half and both halves are
    searched. Each hit is then polished with Newton steps so the two curves
    meet at the returned parameters. Straight lines are intersected
    analytically, which also resolves collinear overlaps.

``curve_intersects_ray(curve, ray)``
    Intersections of a curve with an infinite line as
    ``(curve_t, ray_t, point)`` triples, found by solving the cubic in the
    line's implicit equation.
"""

from __future__ import annotations

import logging
import math

from .constants import (
    CLIP_MIN_REDUCTION,
    CLIP_TOLERANCE,
    DEFAULT_ACCURACY,
    MAX_CLIP_DEPTH,
    MAX_REFINE_STEPS,
    SMALL_DISTANCE,
)
from .geometry import Curve, Point

logger = logging.getLogger(__name__)

_EPSILON = 1e-12


class Ray:
    """An infinite line through two points.

    The parameter along the ray is 0 at ``p1`` and 1 at ``p2``.
    """

    def __init__(self, p1: Point, p2: Point) -> None:
        self.p1 = p1
        self.p2 = p2

    def __repr__(self) -> str:
        return f"Ray({self.p1!r}, {self.p2!r})"

    def coefficients(self) -> tuple[float, float, float]:
        """Normalized ``(a, b, c)`` with ``a*x + b*y + c == 0`` on the line.

        With ``a*a + b*b == 1`` the value ``a*x + b*y + c`` is the signed
        distance of ``(x, y)`` from the line.
        """
        a = self.p1.y - self.p2.y
        b = self.p2.x - self.p1.x
        length = math.hypot(a, b)
        if length < _EPSILON:
            return (0.0, 0.0, 0.0)
        a /= length
        b /= length
        c = -(a * self.p1.x + b * self.p1.y)
        return (a, b, c)

    def point_at_pos(self, t: float) -> Point:
        return Point(self.p1.x + (self.p2.x - self.p1.x) * t,
                     self.p1.y + (self.p2.y - self.p1.y) * t)

    def pos_for_point(self, point: Point) -> float:
        """Parameter of the projection of ``point`` onto the ray."""
        d = self.p2 - self.p1
        len_sq = d.dot(d)
        if len_sq < _EPSILON:
            return 0.0
        return (point - self.p1).dot(d) / len_sq


# ---------------------------------------------------------------------------
# Straight lines
# ---------------------------------------------------------------------------

def _param_on_segment(point: Point, start: Point, end: Point) -> float:
    d = end - start
    len_sq = d.dot(d)
    if len_sq < _EPSILON:
        return 0.0
    return (point - start).dot(d) / len_sq


def _in_unit_range(t: float, slack: float) -> bool:
    return -slack <= t <= 1.0 + slack


def _clamp01(t: float) -> float:
    return min(1.0, max(0.0, t))


def _line_intersects_line(a: Curve, b: Curve) -> list[tuple[float, float]]:
    """Intersections of two straight curves (with linear parameterisation)."""
    d1 = a.end - a.start
    d2 = b.end - b.start
    len1 = d1.length()
    len2 = d2.length()
    if len1 < _EPSILON or len2 < _EPSILON:
        return []

    denom = d1.cross(d2)
    diff = b.start - a.start

    if abs(denom) <= _EPSILON * len1 * len2:
        # Parallel: only collinear lines can meet, and then along an overlap
        if abs(diff.cross(d1)) / len1 >= SMALL_DISTANCE:
            return []

        slack_a = SMALL_DISTANCE / len1
        slack_b = SMALL_DISTANCE / len2
        result = []
        for ta, point in ((0.0, a.start), (1.0, a.end)):
            tb = _param_on_segment(point, b.start, b.end)
            if _in_unit_range(tb, slack_b):
                result.append((ta, _clamp01(tb)))
        for tb, point in ((0.0, b.start), (1.0, b.end)):
            ta = _param_on_segment(point, a.start, a.end)
            if _in_unit_range(ta, slack_a):
                result.append((_clamp01(ta), tb))
        return _dedupe(a, result, SMALL_DISTANCE)

    ta = diff.cross(d2) / denom
    tb = diff.cross(d1) / denom
    if _in_unit_range(ta, SMALL_DISTANCE / len1) and _in_unit_range(tb, SMALL_DISTANCE / len2):
        return [(_clamp01(ta), _clamp01(tb))]
    return []


def _dedupe(curve: Curve, hits: list[tuple[float, float]], distance: float) -> list[tuple[float, float]]:
    """Drop hits whose position on ``curve`` repeats an earlier hit."""
    result = []
    positions = []
    for ta, tb in hits:
        pos = curve.point_at_pos(ta)
        if any(pos.is_near_to(other, distance) for other in positions):
            continue
        positions.append(pos)
        result.append((ta, tb))
    return result


# ---------------------------------------------------------------------------
# Fat line clipping
# ---------------------------------------------------------------------------

def _fat_line(curve: Curve, tolerance: float = 0.0) -> tuple[float, float, float, float, float] | None:
    """Line through the curve's end points plus the band containing the curve.

    The band is widened by ``tolerance`` on both sides: a straight curve has
    a band of no width, and rounding can leave the points it should catch
    just outside it.

    Returns ``(a, b, c, dmin, dmax)`` or None when the end points coincide.
    """
    a = curve.start.y - curve.end.y
    b = curve.end.x - curve.start.x
    length = math.hypot(a, b)
    if length < _EPSILON:
        return None
    a /= length
    b /= length
    c = -(a * curve.start.x + b * curve.start.y)

    d1 = a * curve.cp1.x + b * curve.cp1.y + c
    d2 = a * curve.cp2.x + b * curve.cp2.y + c
    factor = 3.0 / 4.0 if d1 * d2 > 0 else 4.0 / 9.0
    dmin = factor * min(0.0, d1, d2) - tolerance
    dmax = factor * max(0.0, d1, d2) + tolerance
    return (a, b, c, dmin, dmax)


def _clip_range(line, curve: Curve) -> tuple[float, float] | None:
    """Parameter range of ``curve`` that can lie inside the fat line.

    Works on the distance function ``(i/3, d_i)`` of the curve's control
    polygon: the range is bounded by hull vertices inside the band and by
    every crossing between the band limits and a polygon chord.
    """
    a, b, c, dmin, dmax = line
    dist = [a * p.x + b * p.y + c for p in curve.points()]

    candidates = []
    for i, d in enumerate(dist):
        if dmin <= d <= dmax:
            candidates.append(i / 3.0)

    for i in range(4):
        for j in range(i + 1, 4):
            di = dist[i]
            dj = dist[j]
            if abs(dj - di) < _EPSILON:
                continue
            for limit in (dmin, dmax):
                if (di - limit) * (dj - limit) <= 0.0:
                    s = (limit - di) / (dj - di)
                    candidates.append((i + s * (j - i)) / 3.0)

    if not candidates:
        return None
    return (_clamp01(min(candidates)), _clamp01(max(candidates)))


def _clip(fat_curve: Curve, curve: Curve, tolerance: float) -> tuple[float, float] | None:
    line = _fat_line(fat_curve, tolerance)
    if line is None:
        # A section that has shrunk to a point clips nothing
        return (0.0, 1.0)
    return _clip_range(line, curve)


def _section_size(curve: Curve) -> float:
    return curve.fast_bounding_box().size()


def _refine_hit(curve1: Curve, curve2: Curve, t1: float, t2: float) -> tuple[float, float, float]:
    """Polish a hit with Newton steps on ``curve1(t1) - curve2(t2)``.

    Returns the closest ``(t1, t2, distance)`` seen, which is the hit itself
    when the curves are parallel there.
    """
    best = (t1, t2, curve1.point_at_pos(t1).distance_to(curve2.point_at_pos(t2)))
    for _ in range(MAX_REFINE_STEPS):
        diff = curve1.point_at_pos(t1) - curve2.point_at_pos(t2)
        d1 = curve1.tangent_at_pos(t1)
        d2 = curve2.tangent_at_pos(t2)
        det = d1.cross(d2)
        if abs(det) <= _EPSILON * d1.length() * d2.length():
            break
        t1 = _clamp01(t1 - diff.cross(d2) / det)
        t2 = _clamp01(t2 - diff.cross(d1) / det)
        distance = curve1.point_at_pos(t1).distance_to(curve2.point_at_pos(t2))
        if distance < best[2]:
            best = (t1, t2, distance)
        if distance < 1e-14:
            break
    return best


def curve_intersects_curve_clip(curve1, curve2, accuracy: float = DEFAULT_ACCURACY) -> list[tuple[float, float]]:
    """Find where two curves intersect.

    Args:
        curve1, curve2: curves or curve-like objects (anything with
            start_point/control_points/end_point)
        accuracy: size at which a clipped section pair counts as a hit;
            hits whose curves end up further apart than this are dropped

    Returns:
        List of ``(t1, t2)`` parameter pairs, one per intersection.
    """
    curve1 = Curve.from_curve(curve1)
    curve2 = Curve.from_curve(curve2)
    tolerance = accuracy * CLIP_TOLERANCE

    if not curve1.fast_bounding_box().overlaps(curve2.fast_bounding_box(), tolerance):
        return []

    if curve1.is_linear() and curve2.is_linear():
        return _line_intersects_line(curve1, curve2)

    hits = []
    stack = [(0.0, 1.0, 0.0, 1.0, 0)]

    while stack:
        a0, a1, b0, b1, depth = stack.pop()
        section1 = curve1.section(a0, a1)
        section2 = curve2.section(b0, b1)

        if not section1.fast_bounding_box().overlaps(section2.fast_bounding_box(), tolerance):
            continue

        size1 = _section_size(section1)
        size2 = _section_size(section2)
        if (size1 < accuracy and size2 < accuracy) or depth > MAX_CLIP_DEPTH:
            hits.append(((a0 + a1) * 0.5, (b0 + b1) * 0.5))
            continue

        # Clip curve 2 against curve 1
        clip = _clip(section1, section2, tolerance)
        if clip is None:
            continue
        nb0 = b0 + (b1 - b0) * clip[0]
        nb1 = b0 + (b1 - b0) * clip[1]
        section2 = curve2.section(nb0, nb1)

        # ... and curve 1 against what is left of curve 2
        clip = _clip(section2, section1, tolerance)
        if clip is None:
            continue
        na0 = a0 + (a1 - a0) * clip[0]
        na1 = a0 + (a1 - a0) * clip[1]

        kept1 = (na1 - na0) / (a1 - a0) if a1 > a0 else 0.0
        kept2 = (nb1 - nb0) / (b1 - b0) if b1 > b0 else 0.0

        if kept1 > CLIP_MIN_REDUCTION or kept2 > CLIP_MIN_REDUCTION:
            # Not converging: split the larger section and search both halves
            if _section_size(curve1.section(na0, na1)) >= _section_size(section2):
                mid = (na0 + na1) * 0.5
                stack.append((mid, na1, nb0, nb1, depth + 1))
                stack.append((na0, mid, nb0, nb1, depth + 1))
            else:
                mid = (nb0 + nb1) * 0.5
                stack.append((na0, na1, mid, nb1, depth + 1))
                stack.append((na0, na1, nb0, mid, depth + 1))
        else:
            stack.append((na0, na1, nb0, nb1, depth + 1))

    refined = []
    for t1, t2 in hits:
        t1, t2, distance = _refine_hit(curve1, curve2, t1, t2)
        if distance <= accuracy:
            refined.append((t1, t2))
    refined.sort()
    result = _dedupe(curve1, refined, accuracy)
    logger.debug("curve clip found %d intersections (%d raw hits)", len(result), len(hits))
    return result


# ---------------------------------------------------------------------------
# Curve/ray intersection
# ---------------------------------------------------------------------------

def _real_cubic_roots(a: float, b: float, c: float, d: float) -> list[float]:
    """Real roots of ``a*t^3 + b*t^2 + c*t + d``."""
    scale = max(abs(a), abs(b), abs(c), abs(d))
    if scale < _EPSILON:
        return []

    if abs(a) < _EPSILON * scale:
        if abs(b) < _EPSILON * scale:
            if abs(c) < _EPSILON * scale:
                return []
            return [-d / c]
        disc = c * c - 4.0 * b * d
        if disc < 0.0:
            return []
        sq = math.sqrt(disc)
        return [(-c - sq) / (2.0 * b), (-c + sq) / (2.0 * b)]

    # Depressed cubic t = x - b/3a: x^3 + p*x + q = 0
    b /= a
    c /= a
    d /= a
    p = c - b * b / 3.0
    q = 2.0 * b * b * b / 27.0 - b * c / 3.0 + d
    offset = -b / 3.0

    disc = (q * q) / 4.0 + (p * p * p) / 27.0
    if disc > _EPSILON:
        sq = math.sqrt(disc)
        u = math.copysign(abs(-q / 2.0 + sq) ** (1.0 / 3.0), -q / 2.0 + sq)
        v = math.copysign(abs(-q / 2.0 - sq) ** (1.0 / 3.0), -q / 2.0 - sq)
        return [u + v + offset]
    if disc >= -_EPSILON and abs(p) < _EPSILON:
        return [offset]
    if p >= 0.0:
        # Only reachable through rounding: treat as a double root
        u = math.copysign(abs(q / 2.0) ** (1.0 / 3.0), -q / 2.0)
        return [2.0 * u + offset, -u + offset]

    r = math.sqrt(-p / 3.0)
    arg = max(-1.0, min(1.0, (3.0 * q) / (2.0 * p * r)))
    phi = math.acos(arg) / 3.0
    return [2.0 * r * math.cos(phi - 2.0 * math.pi * k / 3.0) + offset for k in range(3)]


def _polish_root(coeffs: tuple[float, float, float, float], t: float) -> float:
    a, b, c, d = coeffs
    for _ in range(4):
        f = ((a * t + b) * t + c) * t + d
        df = (3.0 * a * t + 2.0 * b) * t + c
        if abs(df) < _EPSILON:
            break
        step = f / df
        t -= step
        if abs(step) < 1e-14:
            break
    return t


def curve_intersects_ray(curve, ray: Ray) -> list[tuple[float, float, Point]]:
    """Find where a curve crosses or touches an infinite line.

    Returns ``(curve_t, ray_t, point)`` triples ordered by ``curve_t``.
    """
    curve = Curve.from_curve(curve)
    a, b, c = ray.coefficients()
    d0, d1, d2, d3 = (a * p.x + b * p.y + c for p in curve.points())

    # Distance from the line as a cubic in power basis
    coeffs = (-d0 + 3.0 * d1 - 3.0 * d2 + d3,
              3.0 * d0 - 6.0 * d1 + 3.0 * d2,
              -3.0 * d0 + 3.0 * d1,
              d0)

    roots = []
    if abs(d0) < _EPSILON:
        roots.append(0.0)
    if abs(d3) < _EPSILON:
        roots.append(1.0)

    for t in _real_cubic_roots(*coeffs):
        t = _polish_root(coeffs, t)
        if -1e-9 <= t <= 1.0 + 1e-9:
            roots.append(_clamp01(t))

    roots.sort()
    result = []
    for t in roots:
        if result and abs(result[-1][0] - t) < 1e-9:
            continue
        point = curve.point_at_pos(t)
        result.append((t, ray.pos_for_point(point), point))
    return result
