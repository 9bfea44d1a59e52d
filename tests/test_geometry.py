import unittest

from Common.errors import DegenerateEdgeError
from Service.skeleton_modules.geometry import (
    Edge,
    EdgeType,
    Point,
    Vertex,
    VertexRegistry,
    canonical_pair,
)


class PointTests(unittest.TestCase):
    def test_exact_equality_and_hash(self):
        self.assertEqual(Point(1.0, 2.0), Point(1, 2))
        self.assertEqual(hash(Point(1.0, 2.0)), hash(Point(1, 2)))
        self.assertNotEqual(Point(1.0, 2.0), Point(1.0, 2.0 + 1e-12))

    def test_negative_zero_is_normalised(self):
        self.assertEqual(Point(-0.0, 0.0), Point(0.0, -0.0))
        self.assertEqual(len({Point(-0.0, 0.0), Point(0.0, 0.0)}), 1)

    def test_lexicographic_order(self):
        self.assertLess(Point(0.0, 5.0), Point(1.0, -5.0))
        self.assertLess(Point(1.0, -5.0), Point(1.0, 0.0))
        self.assertEqual(canonical_pair(Point(3, 0), Point(1, 9)), (Point(1, 9), Point(3, 0)))

    def test_of_accepts_tuple_and_point(self):
        p = Point(1, 2)
        self.assertIs(Point.of(p), p)
        self.assertEqual(Point.of((1, 2)), p)


class VertexEdgeTests(unittest.TestCase):
    def test_edge_registers_on_both_endpoints(self):
        a, b = Vertex(Point(0, 0)), Vertex(Point(1, 0))
        edge = Edge(a, b, EdgeType.BORDER)
        self.assertEqual(a.edges, (edge,))
        self.assertEqual(b.edges, (edge,))
        self.assertEqual(edge.positions, (Point(0, 0), Point(1, 0)))

    def test_vertex_rejects_foreign_edge(self):
        a, b, c = Vertex(Point(0, 0)), Vertex(Point(1, 0)), Vertex(Point(2, 0))
        edge = Edge(a, b, EdgeType.SKELETON)
        with self.assertRaises(ValueError):
            c.add(edge)

    def test_degenerate_edge_rejected(self):
        a = Vertex(Point(0, 0))
        with self.assertRaises(DegenerateEdgeError):
            Edge(a, a, EdgeType.SPOKE)
        with self.assertRaises(DegenerateEdgeError):
            Edge(a, Vertex(Point(0, 0)), EdgeType.SPOKE)
        self.assertEqual(a.degree, 0)

    def test_vertex_does_not_own_edges(self):
        a, b = Vertex(Point(0, 0)), Vertex(Point(1, 0))
        Edge(a, b, EdgeType.BORDER)
        # 엣지에 대한 강한 참조가 없으므로 인접 목록에서 사라짐
        self.assertEqual(a.degree, 0)

    def test_key_is_orientation_independent(self):
        a, b = Vertex(Point(5, 0)), Vertex(Point(1, 1))
        forward = Edge(a, b, EdgeType.SKELETON)
        backward = Edge(b, a, EdgeType.SKELETON)
        self.assertEqual(forward.key, backward.key)


class VertexRegistryTests(unittest.TestCase):
    def test_intern_returns_same_instance(self):
        registry = VertexRegistry()
        v1 = registry.intern(Point(1, 1))
        v2 = registry.intern(Point(1.0, 1.0))
        self.assertIs(v1, v2)
        self.assertEqual(len(registry), 1)
        self.assertIn(Point(1, 1), registry)
        self.assertIsNone(registry.get(Point(2, 2)))


if __name__ == "__main__":
    unittest.main()
