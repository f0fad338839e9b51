"""Shape builders, picking policies and graph checks shared by the test suite."""

from pathgraph import BezierPath, CurveTo, GraphPath, GraphPathEdgeKind, LineTo, MoveTo, Point, point_in_path


def square(x, y, size):
    return BezierPath.from_polygon([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


def rectangle(x0, y0, x1, y1):
    return BezierPath.from_polygon([(x0, y0), (x1, y0), (x1, y1), (x0, y1)])


def plus_sign(cx, cy, half_width=1.0, arm=3.0):
    """A '+' made of two bars of width 2*half_width reaching arm from the centre."""
    w, a = half_width, arm
    outline = [
        (-w, -a), (w, -a), (w, -w), (a, -w), (a, w), (w, w),
        (w, a), (-w, a), (-w, w), (-a, w), (-a, -w), (-w, -w),
    ]
    return BezierPath.from_polygon([(cx + x, cy + y) for x, y in outline])


def diamond(size=2.0):
    return BezierPath.from_polygon([(0, -size), (size, 0), (0, size), (-size, 0)])


def wave():
    """A box whose top is an S curve rising to y=3.73 and dipping to y=0.27 between (0, 2) and (6, 2).

    The S has evenly spaced control point x values, so x = 6t along it.
    """
    return BezierPath.from_elements([
        MoveTo(0, 2),
        CurveTo(2, 8, 4, -4, 6, 2),
        LineTo(6, -6),
        LineTo(0, -6),
    ])


# Scenarios: {label: path}

def overlapping_squares():
    return {"a": square(0, 0, 4), "b": square(2, 2, 4)}


def square_and_rectangle():
    """[0,4]^2 and a bar crossing both of its vertical sides."""
    return {"a": square(0, 0, 4), "b": rectangle(-1, 1, 5, 2)}


def overlapping_plus_signs():
    return {"a": plus_sign(0, 0), "b": plus_sign(2.5, 1.5)}


def disjoint_plus_signs():
    return {"a": plus_sign(0, 0), "b": plus_sign(7, 0)}


def collide_labelled(paths_by_label, accuracy=0.01):
    graph = GraphPath()
    for label, path in paths_by_label.items():
        graph = graph.collide(GraphPath.from_path(path, label), accuracy)
    return graph


def count_kinds(graph):
    counts = {kind: 0 for kind in GraphPathEdgeKind}
    for edge in graph.all_edges():
        counts[edge.kind] += 1
    return counts


def check_reverse_connections(graph):
    """connected_from[q] holds exactly the points with an edge ending at q."""
    for q in range(graph.num_points()):
        expected = {edge.start_point_index() for p in range(graph.num_points())
                    for edge in graph.edges_for_point(p) if edge.end_point_index() == q}
        actual = graph.connected_from(q)
        assert set(actual) == expected
        assert len(actual) == len(set(actual))


def _originals(paths_by_label):
    return {label: GraphPath.from_path(path, label) for label, path in paths_by_label.items()}


def union_picker(paths_by_label):
    """Picking policy for union: follow an edge that is not inside any other input path."""
    originals = _originals(paths_by_label)

    def pick(graph, last_edge, candidates):
        for edge in candidates:
            if edge.is_reversed:
                continue
            midpoint = edge.point_at_pos(0.5)
            inside_other = any(point_in_path(original, midpoint)
                               for label, original in originals.items() if label != edge.label)
            if not inside_other:
                return edge
        return candidates[0]

    return pick


def subtract_picker(paths_by_label, removed_label):
    """Picking policy for cutting one input path out of the others.

    Kept paths are followed forwards where they lie outside the removed
    path; the removed path is followed backwards where it lies inside a
    kept one.
    """
    originals = _originals(paths_by_label)
    removed = originals.pop(removed_label)

    def pick(graph, last_edge, candidates):
        for edge in candidates:
            midpoint = edge.point_at_pos(0.5)
            if edge.label == removed_label:
                if edge.is_reversed and any(point_in_path(kept, midpoint) for kept in originals.values()):
                    return edge
            elif not edge.is_reversed and not point_in_path(removed, midpoint):
                return edge
        return candidates[0]

    return pick


def never_called(graph, last_edge, candidates):
    raise AssertionError("picking function should not be called for a path without branches")


def following_chain(graph, start_ref):
    """Edges visited by following each edge's following edge until back at the start."""
    edge_count = sum(1 for _ in graph.all_edges())
    chain = [start_ref]
    ref, _edge = graph.get_next_edge(start_ref)
    while ref != start_ref:
        chain.append(ref)
        assert len(chain) <= edge_count, "following edges do not loop"
        ref, _edge = graph.get_next_edge(ref)
    return chain


def same_point(a, b, tolerance=1e-6):
    return a.distance_to(b) <= tolerance


def has_point(points, target, tolerance=1e-6):
    return any(same_point(p, target, tolerance) for p in points)


def positions(graph):
    return [graph.point_position(idx) for idx in range(graph.num_points())]


def P(x, y):
    return Point(float(x), float(y))
