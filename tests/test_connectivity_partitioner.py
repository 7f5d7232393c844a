import unittest
from unittest import mock

import networkx as nx

from Service.config import NetworkConfig
from Service.network_modules.graph import ConnectivityPartitioner, build_connectivity_graph
from Service.network_modules.model import LandmarkStore, StreetTopology


class _RecordingLogger:
    def __init__(self):
        self.records = []

    def log(self, msg, level="DEBUG", create_log=False):
        self.records.append((level, msg))


def _network(streets):
    store = LandmarkStore()
    topology = StreetTopology()
    for street_id, coords in enumerate(streets):
        topology.add_street(street_id, [store.insert_or_get(x, y) for x, y in coords])
    return store, topology


class ConnectivityPartitionerTests(unittest.TestCase):
    def setUp(self):
        self.partitioner = ConnectivityPartitioner(_RecordingLogger(), NetworkConfig())

    def test_smaller_partition_is_removed(self):
        store, topology = _network([
            [(0, 0), (10, 0), (20, 0)],
            [(20, 0), (20, 10)],
            [(100, 100), (110, 100)],
        ])

        report = self.partitioner.execute(store, topology)

        self.assertTrue(report.connected)
        self.assertEqual(report.iterations, 2)
        self.assertEqual(report.removed_landmarks, 2)
        self.assertEqual(report.removed_streets, 1)
        self.assertEqual(topology.ids(), [0, 1])
        self.assertIsNone(store.find_near(100, 100))
        self.assertEqual(nx.number_connected_components(build_connectivity_graph(store, topology)), 1)

    def test_equal_partitions_keep_lowest_landmark_id(self):
        store, topology = _network([[(50, 50), (60, 50)], [(0, 0), (10, 0)]])

        self.partitioner.execute(store, topology)

        self.assertEqual(topology.ids(), [0])
        self.assertEqual(store.ids(), [1, 2])

    def test_unreferenced_landmark_is_pruned(self):
        store, topology = _network([[(0, 0), (10, 0)]])
        orphan = store.insert_or_get(500, 500)

        report = self.partitioner.execute(store, topology)

        self.assertNotIn(orphan, store)
        self.assertEqual(report.removed_streets, 0)
        self.assertEqual(len(topology), 1)

    def test_analyze_only_mode_keeps_everything(self):
        store, topology = _network([[(0, 0), (10, 0)], [(50, 50), (60, 50)]])

        report = self.partitioner.execute(store, topology, prune=False)

        self.assertFalse(report.connected)
        self.assertEqual(report.iterations, 1)
        self.assertEqual(len(store), 4)
        self.assertEqual(len(topology), 2)

    def test_iteration_cap_rechecks_last_removal(self):
        logger = _RecordingLogger()
        partitioner = ConnectivityPartitioner(logger, NetworkConfig(simplify_max_iterations=1))
        store, topology = _network([[(0, 0), (10, 0), (20, 0)], [(50, 50), (60, 50)]])

        report = partitioner.execute(store, topology)

        self.assertEqual(report.iterations, 1)
        self.assertTrue(report.connected)
        self.assertEqual(report.removed_streets, 1)
        self.assertFalse(any(level == "WARNING" for level, _ in logger.records))

    def test_iteration_cap_warns_when_still_disconnected(self):
        logger = _RecordingLogger()
        partitioner = ConnectivityPartitioner(logger, NetworkConfig(simplify_max_iterations=2))
        store, topology = _network([[(0, 0), (10, 0)], [(50, 50), (60, 50)]])

        with mock.patch.object(partitioner, "simplify_once", return_value=(False, 0, 0)) as once:
            report = partitioner.execute(store, topology)

        self.assertEqual(once.call_count, 2)
        self.assertEqual(report.iterations, 2)
        self.assertFalse(report.connected)
        self.assertTrue(any(level == "WARNING" for level, _ in logger.records))

    def test_empty_network_counts_as_connected(self):
        report = self.partitioner.execute(LandmarkStore(), StreetTopology())
        self.assertTrue(report.connected)
        self.assertEqual(report.iterations, 1)

    def test_unweighted_view_keeps_parallel_edges(self):
        store, topology = _network([[(0, 0), (10, 0)], [(10, 0), (0, 0)]])
        graph = build_connectivity_graph(store, topology)
        self.assertEqual(graph.number_of_edges(), 2)

    def test_prune_graph_restricts_view_to_largest_component(self):
        graph = nx.Graph()
        graph.add_edge(1, 2, weight=3.0)
        graph.add_edge(2, 3, weight=4.0)
        graph.add_edge(7, 8, weight=2.0)
        graph.add_node(9)

        removed = self.partitioner.prune_graph(graph, keep=[1, 2, 3, 7, 8])

        self.assertEqual(removed, 3)
        self.assertEqual(sorted(graph.nodes), [1, 2, 3])


if __name__ == "__main__":
    unittest.main()
