"""Tests for categorising graph edges and tracing exterior paths."""

import unittest

from pathgraph import BezierPath, GraphEdge, GraphEdgeRef, GraphPath, GraphPathEdgeKind

from helpers import (
    P,
    collide_labelled,
    count_kinds,
    disjoint_plus_signs,
    has_point,
    never_called,
    overlapping_plus_signs,
    overlapping_squares,
    plus_sign,
    square,
    square_and_rectangle,
    subtract_picker,
    union_picker,
)


def path_vertices(path):
    return [end for _, _, end in path.segments]


class TestSinglePath(unittest.TestCase):
    """A path with no branches is exterior all the way round."""

    def test_single_path_is_all_exterior(self):
        graph = GraphPath.from_path(square(0, 0, 4), "a")
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), never_called)

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 4)
        self.assertEqual(counts[GraphPathEdgeKind.UNCATEGORISED], 0)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        self.assertEqual(paths[0].start_point(), P(0, 0))
        self.assertEqual(path_vertices(paths[0]), [P(4, 0), P(4, 4), P(0, 4), P(0, 0)])

    def test_walking_backwards(self):
        graph = GraphPath.from_path(square(0, 0, 4), "a")
        graph.classify_exterior_edges(GraphEdgeRef(0, 0, True), never_called)
        self.assertEqual(count_kinds(graph)[GraphPathEdgeKind.EXTERIOR], 4)

    def test_start_edge_may_be_a_graph_edge(self):
        graph = GraphPath.from_path(square(0, 0, 4), "a")
        graph.classify_exterior_edges(graph.get_edge(GraphEdgeRef(2, 0)), never_called)
        self.assertEqual(count_kinds(graph)[GraphPathEdgeKind.EXTERIOR], 4)


class TestPicking(unittest.TestCase):
    """How the picking function is consulted at branches."""

    def setUp(self):
        self.shapes = overlapping_squares()
        self.graph = collide_labelled(self.shapes)

    def test_picker_is_given_the_choices(self):
        pick = union_picker(self.shapes)
        calls = []

        def recording_picker(graph, last_edge, candidates):
            self.assertIs(graph, self.graph)
            self.assertIsInstance(last_edge, GraphEdge)
            self.assertIs(last_edge.kind, GraphPathEdgeKind.EXTERIOR)
            for edge in candidates:
                self.assertIs(edge.kind, GraphPathEdgeKind.UNCATEGORISED)
                self.assertEqual(edge.start_point_index(), last_edge.end_point_index())
            calls.append((len(candidates), sum(1 for edge in candidates if edge.is_reversed)))
            return pick(graph, last_edge, candidates)

        self.graph.classify_exterior_edges(GraphEdgeRef(0, 0), recording_picker)

        # One decision at each of the two crossings
        self.assertEqual(calls, [(3, 1), (3, 1)])

    def test_picker_may_return_an_edge_ref(self):
        pick = union_picker(self.shapes)
        self.graph.classify_exterior_edges(GraphEdgeRef(0, 0), lambda g, last, edges: pick(g, last, edges).edge_ref)
        self.assertEqual(count_kinds(self.graph)[GraphPathEdgeKind.EXTERIOR], 8)

    def test_walk_with_no_way_on_stops(self):
        # Close off every way out of the crossing at (4, 2)
        self.graph._stored_edge(GraphEdgeRef(9, 0)).set_kind(GraphPathEdgeKind.INTERIOR)
        self.graph._stored_edge(GraphEdgeRef(9, 1)).set_kind(GraphPathEdgeKind.INTERIOR)
        self.graph._stored_edge(GraphEdgeRef(4, 0)).set_kind(GraphPathEdgeKind.INTERIOR)

        with self.assertLogs("pathgraph.core.graph_path", level="WARNING") as logs:
            self.graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(self.shapes))

        self.assertIn("no uncategorised edges", "\n".join(logs.output))
        counts = count_kinds(self.graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 2)
        self.assertEqual(counts[GraphPathEdgeKind.UNCATEGORISED], 0)


class TestUnion(unittest.TestCase):
    """Union: keep every edge that is not inside another input path."""

    def test_overlapping_squares(self):
        shapes = overlapping_squares()
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(shapes))

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 8)
        self.assertEqual(counts[GraphPathEdgeKind.INTERIOR], 4)
        self.assertEqual(counts[GraphPathEdgeKind.UNCATEGORISED], 0)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        vertices = path_vertices(paths[0])
        self.assertEqual(len(vertices), 8)
        for target in (P(0, 0), P(4, 0), P(4, 2), P(6, 2), P(6, 6), P(2, 6), P(2, 4), P(0, 4)):
            self.assertTrue(has_point(vertices, target), target)
        self.assertFalse(has_point(vertices, P(4, 4)))
        self.assertFalse(has_point(vertices, P(2, 2)))

    def test_square_and_rectangle(self):
        shapes = square_and_rectangle()
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(shapes))

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 12)
        self.assertEqual(counts[GraphPathEdgeKind.INTERIOR], 4)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        vertices = path_vertices(paths[0])
        self.assertEqual(len(vertices), 12)
        for target in (P(-1, 1), P(5, 1), P(5, 2), P(-1, 2), P(0, 0), P(4, 4)):
            self.assertTrue(has_point(vertices, target), target)

    def test_overlapping_plus_signs(self):
        shapes = overlapping_plus_signs()
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(shapes))

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 20)
        self.assertEqual(counts[GraphPathEdgeKind.INTERIOR], 8)
        self.assertEqual(counts[GraphPathEdgeKind.UNCATEGORISED], 0)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        vertices = path_vertices(paths[0])
        self.assertEqual(len(vertices), 20)
        self.assertTrue(has_point(vertices, P(1, 2.5)))
        self.assertTrue(has_point(vertices, P(1.5, -1)))
        # Corners buried inside the other shape are gone
        self.assertFalse(has_point(vertices, P(3, 1)))
        self.assertFalse(has_point(vertices, P(-0.5, 0.5)))

    def test_disjoint_plus_signs_give_two_paths(self):
        graph = collide_labelled(disjoint_plus_signs())
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), never_called)
        graph.classify_exterior_edges(GraphEdgeRef(12, 0), never_called)

        self.assertEqual(count_kinds(graph)[GraphPathEdgeKind.EXTERIOR], 24)

        paths = graph.exterior_paths()
        self.assertEqual([len(path.segments) for path in paths], [12, 12])
        self.assertEqual(paths[0].start_point(), P(-1, -3))
        self.assertEqual(paths[1].start_point(), P(6, -3))

    def test_keeps_curved_edges(self):
        shapes = {"a": square(0, 0, 4), "b": BezierPath.circle(P(4, 4), 2)}
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(shapes))

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 7)
        self.assertEqual(counts[GraphPathEdgeKind.INTERIOR], 3)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        curves = list(paths[0].curves())
        self.assertEqual(len(curves), 7)
        self.assertEqual(sum(1 for curve in curves if not curve.is_linear()), 3)

    def test_shapes_touching_at_a_point_give_one_path(self):
        """A triangle whose tip touches the square's side: the outline passes through the tip twice."""
        shapes = {"a": square(0, 0, 4), "b": BezierPath.from_polygon([(4, 2), (6, 0), (6, 4)])}
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), union_picker(shapes))
        self.assertEqual(count_kinds(graph)[GraphPathEdgeKind.EXTERIOR], 8)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        path = paths[0]
        self.assertEqual(len(path.segments), 8)

        # Every segment is an edge of the graph: no chords across the shape
        edges = {(edge.start_point(), edge.end_point()) for edge in graph.all_edges()}
        start = path.start_point()
        for _, _, end in path.segments:
            self.assertIn((start, end), edges)
            start = end
        self.assertEqual(start, path.start_point())
        self.assertEqual(path_vertices(path).count(P(4, 2)), 2)


class TestSubtract(unittest.TestCase):
    """Subtraction: keep the outside of the removed path and the parts of it inside the others."""

    def test_overlapping_squares(self):
        shapes = overlapping_squares()
        graph = collide_labelled(shapes)
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), subtract_picker(shapes, "b"))

        counts = count_kinds(graph)
        self.assertEqual(counts[GraphPathEdgeKind.EXTERIOR], 6)
        self.assertEqual(counts[GraphPathEdgeKind.INTERIOR], 6)

        paths = graph.exterior_paths()
        self.assertEqual(len(paths), 1)
        vertices = path_vertices(paths[0])
        self.assertEqual(len(vertices), 6)
        for target in (P(4, 0), P(4, 2), P(2, 2), P(2, 4), P(0, 4), P(0, 0)):
            self.assertTrue(has_point(vertices, target), target)
        self.assertFalse(has_point(vertices, P(4, 4)))

    def test_hole_gives_two_paths(self):
        """A '+' cut out of the middle of a circle leaves an outline and a hole."""
        shapes = {"outer": BezierPath.circle(P(0, 0), 10), "hole": plus_sign(0, 0)}
        graph = collide_labelled(shapes)
        self.assertEqual(graph.num_points(), 16)

        pick = subtract_picker(shapes, "hole")
        graph.classify_exterior_edges(GraphEdgeRef(0, 0), pick)
        graph.classify_exterior_edges(GraphEdgeRef(4, 0, True), pick)
        self.assertEqual(count_kinds(graph)[GraphPathEdgeKind.EXTERIOR], 16)

        paths = graph.exterior_paths()
        self.assertEqual([len(path.segments) for path in paths], [4, 12])
        self.assertFalse(any(curve.is_linear() for curve in paths[0].curves()))
        self.assertTrue(all(curve.is_linear() for curve in paths[1].curves()))
