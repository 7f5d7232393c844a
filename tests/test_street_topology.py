import unittest

from Service.network_modules.model import LandmarkStore, StreetTopology, TopologyIntegrityError


class StreetTopologyTests(unittest.TestCase):
    def setUp(self):
        self.topology = StreetTopology()
        self.topology.add_street(10, [1, 2, 3])
        self.topology.add_street(11, [3, 4])

    def test_insert_landmark_at_position(self):
        self.assertTrue(self.topology.insert_landmark_at(10, 1, 9))
        self.assertEqual(self.topology.landmarks_of(10), (1, 9, 2, 3))
        self.assertEqual(self.topology.streets_referencing(9), [10])

    def test_insert_rejects_landmark_already_in_street(self):
        self.assertFalse(self.topology.insert_landmark_at(10, 1, 3))
        self.assertEqual(self.topology.landmarks_of(10), (1, 2, 3))

    def test_insert_out_of_range_raises(self):
        with self.assertRaises(IndexError):
            self.topology.insert_landmark_at(11, 5, 8)

    def test_remove_streets_referencing_drops_whole_streets(self):
        self.assertEqual(self.topology.remove_streets_referencing(3), 2)
        self.assertEqual(len(self.topology), 0)
        self.assertEqual(self.topology.referenced_landmarks(), set())
        self.assertEqual(self.topology.remove_streets_referencing(3), 0)

    def test_segments_report_insert_position(self):
        self.assertEqual(list(self.topology.segments(10)), [(10, 1, 1, 2), (10, 2, 2, 3)])
        self.assertEqual(len(list(self.topology.iter_segments())), 3)

    def test_single_landmark_street_has_no_segments(self):
        self.topology.add_street(12, [7])
        self.assertEqual(list(self.topology.segments(12)), [])

    def test_completeness_check_fails_fast_with_context(self):
        store = LandmarkStore()
        for i in range(1, 4):
            store.insert_or_get(float(i), 0.0)

        with self.assertRaises(TopologyIntegrityError) as ctx:
            self.topology.check_completeness(store)

        self.assertEqual(ctx.exception.street_id, 11)
        self.assertEqual(ctx.exception.landmark_id, 4)

    def test_completeness_check_passes_when_all_landmarks_exist(self):
        store = LandmarkStore()
        for i in range(1, 5):
            store.insert_or_get(float(i), 0.0)
        self.topology.check_completeness(store)


if __name__ == "__main__":
    unittest.main()
