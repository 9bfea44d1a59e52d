import unittest

from _support import SQUARE, RecordingLogger, flatten

from Common.errors import DegenerateEdgeError, MalformedResultError
from Service.config import BorderStrategy, SkeletonConfig
from Service.skeleton_modules.classifier import EdgeClassifier, iter_segments, materialize
from Service.skeleton_modules.geometry import EdgeType, Point
from Service.skeleton_modules.ring_packer import RingPacker

CENTER = (0.0, 0.0)
SQUARE_SPOKES = [(p, CENTER) for p in SQUARE]


class EdgeClassifierTests(unittest.TestCase):
    def setUp(self):
        self.logger = RecordingLogger()
        self.packed = RingPacker(self.logger).pack(SQUARE)

    def _classifier(self, strategy=BorderStrategy.RING_ADJACENCY):
        return EdgeClassifier(self.logger, SkeletonConfig(border_strategy=strategy))

    def test_spokes_are_oriented_input_first(self):
        reversed_spokes = [(CENTER, p) for p in SQUARE]
        classified = self._classifier().classify(self.packed, (), flatten(reversed_spokes))

        self.assertEqual(len(classified.spokes), 4)
        for start, end in classified.spokes:
            self.assertIn(start, classified.input_points)
            self.assertEqual(end, Point(0, 0))

    def test_ring_adjacency_borders_cover_every_ring_pair(self):
        classified = self._classifier().classify(self.packed, (), flatten(SQUARE_SPOKES))

        ring = [Point.of(p) for p in SQUARE]
        expected = {frozenset((ring[i], ring[(i + 1) % 4])) for i in range(4)}
        self.assertEqual({frozenset(s) for s in classified.borders}, expected)

    def test_kernel_border_candidates_ignored_in_ring_adjacency(self):
        diagonal = [(SQUARE[0], SQUARE[2])]
        classified = self._classifier().classify(self.packed, flatten(diagonal), flatten(SQUARE_SPOKES))

        self.assertEqual(len(classified.borders), 4)
        self.assertTrue(any("무시" in m for m in self.logger.messages("DEBUG")))

    def test_kernel_segments_strategy_uses_kernel_borders(self):
        contour = [(SQUARE[0], SQUARE[1]), (SQUARE[1], SQUARE[0])]
        classified = self._classifier(BorderStrategy.KERNEL_SEGMENTS).classify(
            self.packed, flatten(contour), flatten(SQUARE_SPOKES)
        )
        self.assertEqual(classified.borders, ((Point.of(SQUARE[0]), Point.of(SQUARE[1])),))

    def test_duplicates_removed_regardless_of_direction(self):
        skeleton = [((1.0, 0.0), (-1.0, 0.0)), ((-1.0, 0.0), (1.0, 0.0)), ((1.0, 0.0), (-1.0, 0.0))]
        classified = self._classifier().classify(self.packed, flatten(skeleton), ())
        self.assertEqual(len(classified.skeleton), 1)

    def test_stream_mismatch_logged_as_warning(self):
        classified = self._classifier().classify(self.packed, flatten(SQUARE_SPOKES), ())

        self.assertEqual(len(classified.spokes), 4)
        self.assertTrue(self.logger.messages("WARNING"))

    def test_degenerate_segment_rejected(self):
        with self.assertRaises(DegenerateEdgeError):
            self._classifier().classify(self.packed, (1.0, 1.0, 1.0, 1.0), ())

    def test_malformed_buffers_rejected(self):
        with self.assertRaises(MalformedResultError):
            self._classifier().classify(self.packed, (1.0, 2.0, 3.0), ())
        with self.assertRaises(MalformedResultError):
            self._classifier().classify(self.packed, (), (0.0, float("nan"), 1.0, 1.0))


class MaterializeTests(unittest.TestCase):
    def test_shared_registry_and_input_vertices(self):
        logger = RecordingLogger()
        packed = RingPacker(logger).pack(SQUARE)
        classified = EdgeClassifier(logger, SkeletonConfig()).classify(packed, (), flatten(SQUARE_SPOKES))

        built = materialize(classified)
        self.assertEqual(len(built.registry), 5)
        self.assertEqual({v.position for v in built.input_vertices}, {Point.of(p) for p in SQUARE})

        center = built.registry.get(Point(0, 0))
        self.assertEqual(center.degree, 4)
        for edge_type, edges in built.edges.items():
            for edge in edges:
                self.assertIs(edge.edge_type, edge_type)
                self.assertIs(built.registry.get(edge.start.position), edge.start)

    def test_iter_segments_yields_points(self):
        self.assertEqual(
            list(iter_segments((0, 1, 2, 3), "skeleton")),
            [(Point(0, 1), Point(2, 3))],
        )


if __name__ == "__main__":
    unittest.main()
