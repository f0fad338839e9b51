# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PathGraph Constants Module

Numerical tolerances shared by the graph, intersection and ray casting
algorithms. Callers wanting different behaviour for curve intersection pass
a different ``accuracy``; the remaining values define how degenerate geometry
(coincident points, collinear runs, glancing touches) is resolved.
"""

# Path construction
CLOSE_DISTANCE = 0.01                       # Start/end closer than this means the path is already closed

# Geometry
SMALL_DISTANCE = 0.001                      # Points closer than this are treated as the same point
LINEAR_TOLERANCE = 1e-6                     # Max control point drift for a curve to count as a straight line

# Collision detection: parameter snapping onto edge end points
T_ZERO = 0.01                               # t below this is the start of the edge
T_ONE = 0.99                                # t above this is the end of the edge

# Curve intersection
DEFAULT_ACCURACY = 0.01                     # Default size at which clipped curve sections count as a hit
MAX_CLIP_DEPTH = 48                         # Recursion limit for the clipping intersection search
CLIP_MIN_REDUCTION = 0.8                    # Subdivide when a clip keeps more than this fraction
CLIP_TOLERANCE = 0.1                        # Fraction of the accuracy added around fat lines and section bounds
MAX_REFINE_STEPS = 8                        # Newton steps used to polish each intersection

# Ray casting
RAY_T_END = 0.99999                         # Collisions beyond this are moved to the following edge
RAY_T_START = 0.00001                       # Collisions below this are snapped onto the edge start
RAY_SECTION_T = 0.1                         # Collisions this close to an edge end may touch a collinear run
GLANCING_SIDE = 0.001                       # Side values smaller than this are treated as on the ray
