import math
import unittest

from _support import FakeKernel, RecordingLogger

from Common.errors import InvalidArgumentError, MalformedResultError, ResourceError
from Service.skeleton_modules.geometry import Point
from Service.skeleton_modules.offset import OffsetExtractor


class OffsetExtractorTests(unittest.TestCase):
    def _extractor(self, kernel):
        return OffsetExtractor(RecordingLogger(), kernel)

    def test_invalid_distances_rejected_before_kernel_call(self):
        kernel = FakeKernel()
        extractor = self._extractor(kernel)
        for distance in (0.0, -1.0, math.nan, math.inf):
            with self.subTest(distance=distance):
                with self.assertRaises(InvalidArgumentError):
                    extractor.extract("h1", distance)
        self.assertEqual(kernel.offset_calls, 0)

    def test_polygons_split_by_lengths(self):
        kernel = FakeKernel(
            offset_points=(0, 0, 1, 0, 1, 1, 5, 5, 6, 5, 6, 6, 5, 6),
            offset_lengths=(3, 4),
        )
        polygons = self._extractor(kernel).extract("h1", 1.0)

        self.assertEqual(polygons[0], [Point(0, 0), Point(1, 0), Point(1, 1)])
        self.assertEqual(len(polygons[1]), 4)
        self.assertEqual(len(kernel.released_offsets), 1)

    def test_empty_result_is_valid(self):
        kernel = FakeKernel()
        self.assertEqual(self._extractor(kernel).extract("h1", 100.0), [])
        self.assertEqual(len(kernel.released_offsets), 1)

    def test_length_mismatch_still_releases_result(self):
        kernel = FakeKernel(offset_points=(0, 0, 1, 0), offset_lengths=(3,))
        with self.assertRaises(MalformedResultError):
            self._extractor(kernel).extract("h1", 1.0)
        self.assertEqual(len(kernel.released_offsets), 1)

    def test_negative_length_rejected(self):
        kernel = FakeKernel(offset_points=(), offset_lengths=(2, -2))
        with self.assertRaises(MalformedResultError):
            self._extractor(kernel).extract("h1", 1.0)
        self.assertEqual(len(kernel.released_offsets), 1)

    def test_kernel_failure_becomes_resource_error(self):
        kernel = FakeKernel(fail_offset=True)
        with self.assertRaises(ResourceError):
            self._extractor(kernel).extract("h1", 1.0)
        self.assertEqual(kernel.released_offsets, [])


if __name__ == "__main__":
    unittest.main()
