import unittest

from Service.network_modules.model import LandmarkStore
from Service.network_modules.repair import CrossingDetector, intersection_point


class CrossingDetectorTests(unittest.TestCase):
    def setUp(self):
        self.store = LandmarkStore()
        self.detector = CrossingDetector(self.store, precision=3)

    def _mark(self, x, y):
        return self.store[self.store.insert_or_get(x, y)]

    def test_diagonals_cross_at_center(self):
        a1, a2 = self._mark(0, 0), self._mark(10, 10)
        b1, b2 = self._mark(0, 10), self._mark(10, 0)

        crossing = self.detector.detect(a1, a2, b1, b2)

        self.assertIsNotNone(crossing)
        self.assertEqual(crossing.xy, (5.0, 5.0))
        self.assertEqual(len(self.store), 5)

    def test_parallel_segments_have_no_crossing(self):
        a1, a2 = self._mark(0, 0), self._mark(10, 0)
        b1, b2 = self._mark(0, 1), self._mark(10, 1)
        self.assertIsNone(self.detector.detect(a1, a2, b1, b2))

    def test_collinear_overlap_is_not_a_crossing(self):
        a1, a2 = self._mark(0, 0), self._mark(10, 0)
        b1, b2 = self._mark(5, 0), self._mark(15, 0)
        self.assertIsNone(self.detector.detect(a1, a2, b1, b2))
        self.assertEqual(len(self.store), 4)

    def test_line_intersection_outside_segment_is_rejected(self):
        a1, a2 = self._mark(0, 0), self._mark(1, 1)
        b1, b2 = self._mark(0, 10), self._mark(10, 0)
        self.assertIsNone(self.detector.detect(a1, a2, b1, b2))

    def test_endpoint_touch_reuses_existing_landmark(self):
        a1, a2 = self._mark(0, 0), self._mark(5, 5)
        b1, b2 = self._mark(0, 10), self._mark(10, 0)

        crossing = self.detector.detect(a1, a2, b1, b2)

        self.assertEqual(crossing.id, a2.id)
        self.assertEqual(len(self.store), 4)

    def test_nearby_landmark_is_reused(self):
        existing = self._mark(5.00004, 4.99996)
        a1, a2 = self._mark(0, 0), self._mark(10, 10)
        b1, b2 = self._mark(0, 10), self._mark(10, 0)

        self.assertEqual(self.detector.detect(a1, a2, b1, b2).id, existing.id)

    def test_crossing_coordinates_are_rounded(self):
        self.assertEqual(intersection_point((0, 0), (3, 1), (1, 0), (1, 3)), (1.0, 0.333))

    def test_result_always_inside_both_bounding_boxes(self):
        segments = [
            ((0, 0), (4, 7)), ((1, 6), (5, -2)), ((-3, 2), (8, 3)), ((2, -1), (2.5, 9)),
        ]
        for i, (a1, a2) in enumerate(segments):
            for b1, b2 in segments[i + 1:]:
                point = intersection_point(a1, a2, b1, b2)
                if point is None:
                    continue
                for p1, p2 in ((a1, a2), (b1, b2)):
                    self.assertTrue(min(p1[0], p2[0]) <= point[0] <= max(p1[0], p2[0]))
                    self.assertTrue(min(p1[1], p2[1]) <= point[1] <= max(p1[1], p2[1]))


if __name__ == "__main__":
    unittest.main()
