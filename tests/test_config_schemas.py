import math
import os
import unittest
from unittest import mock

from pydantic import ValidationError

from Common.errors import InvalidArgumentError
from Service.config import BorderStrategy, SkeletonConfig
from Service.schemas import OffsetRequest, RingSetRequest, parse_request
from Service.skeleton_modules.geometry import Point


class SkeletonConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = SkeletonConfig(_env_file=None)
        self.assertEqual(config.border_strategy, BorderStrategy.RING_ADJACENCY)
        self.assertTrue(config.validate_result)
        self.assertFalse(config.kernel_emit_contour_edges)

    def test_env_prefix(self):
        env = {"SKELETON_BORDER_STRATEGY": "kernel_segments", "SKELETON_VALIDATE_RESULT": "false"}
        with mock.patch.dict(os.environ, env):
            config = SkeletonConfig(_env_file=None)
        self.assertEqual(config.border_strategy, BorderStrategy.KERNEL_SEGMENTS)
        self.assertFalse(config.validate_result)

    def test_out_of_range_values_rejected(self):
        with self.assertRaises(ValidationError):
            SkeletonConfig(_env_file=None, kernel_tolerance=0.0)
        with self.assertRaises(ValidationError):
            SkeletonConfig(_env_file=None, offset_mitre_limit=0.5)


class RequestSchemaTests(unittest.TestCase):
    def test_ring_set_accepts_points_and_none_holes(self):
        request = parse_request(RingSetRequest, outer=[Point(0, 0), (1, 0), (1, 1)], holes=None)
        self.assertEqual(request.outer, [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])
        self.assertEqual(request.holes, [])

    def test_ring_set_rejects_non_finite(self):
        with self.assertRaises(InvalidArgumentError):
            parse_request(RingSetRequest, outer=[(0, 0), (math.nan, 0), (1, 1)])

    def test_ring_set_rejects_consecutive_duplicates_including_wrap(self):
        square = [(0, 0), (0, 1), (1, 1), (1, 0)]
        with self.assertRaises(InvalidArgumentError):
            parse_request(RingSetRequest, outer=[(0, 0), (0, 1), (0, 1), (1, 1)])
        with self.assertRaises(InvalidArgumentError):
            parse_request(RingSetRequest, outer=square + [(0, 0)])
        with self.assertRaises(InvalidArgumentError):
            parse_request(RingSetRequest, outer=square, holes=[[(0.2, 0.2), (0.2, 0.2), (0.5, 0.8), (0.8, 0.2)]])
        self.assertEqual(len(parse_request(RingSetRequest, outer=square).outer), 4)

    def test_offset_distance_must_be_positive_and_finite(self):
        self.assertEqual(parse_request(OffsetRequest, distance=2).distance, 2.0)
        for distance in (0, -0.5, math.inf, math.nan):
            with self.subTest(distance=distance):
                with self.assertRaises(InvalidArgumentError):
                    parse_request(OffsetRequest, distance=distance)


if __name__ == "__main__":
    unittest.main()
