import unittest

from _support import CENTER_HOLE, SQUARE, RecordingLogger

from Common.errors import InvalidArgumentError
from Service.skeleton_modules.geometry import Point
from Service.skeleton_modules.ring_packer import RingDescriptor, RingPacker


class RingPackerTests(unittest.TestCase):
    def setUp(self):
        self.packer = RingPacker(RecordingLogger())

    def test_outer_is_reversed_and_holes_kept(self):
        packed = self.packer.pack(SQUARE, [CENTER_HOLE])

        self.assertEqual(packed.rings, (RingDescriptor(0, 4), RingDescriptor(4, 4)))
        self.assertEqual(packed.rings[0].slice(packed.points), tuple(Point.of(p) for p in reversed(SQUARE)))
        self.assertEqual(packed.rings[1].slice(packed.points), tuple(Point.of(p) for p in CENTER_HOLE))
        self.assertEqual(len(packed.flat_coordinates()), 16)

    def test_caller_rings_keep_original_order(self):
        packed = self.packer.pack(SQUARE, [CENTER_HOLE])
        self.assertEqual(packed.caller_rings[0], tuple(Point.of(p) for p in SQUARE))
        self.assertEqual(len(packed.caller_rings), 2)

    def test_none_holes_means_no_holes(self):
        packed = self.packer.pack(SQUARE, None)
        self.assertEqual(len(packed.rings), 1)
        self.assertEqual(packed.holes, ())

    def test_missing_or_empty_outer_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            self.packer.pack(None)
        with self.assertRaises(InvalidArgumentError):
            self.packer.pack([])

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            self.packer.pack([])


if __name__ == "__main__":
    unittest.main()
