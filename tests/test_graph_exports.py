import tempfile
import unittest
from pathlib import Path

import networkx as nx

from Service.network_modules.graph import ExportFormat, GraphExporter


class _RecordingLogger:
    def __init__(self):
        self.records = []

    def log(self, msg, level="DEBUG", create_log=False):
        self.records.append((level, msg))


class GraphExportTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.destination = Path(self._tmp.name) / "map.wkt"
        self.exporter = GraphExporter(_RecordingLogger())
        self.graph = nx.Graph()
        self.graph.add_edge(1, 5, weight=7.071)
        self.graph.add_edge(5, 2, weight=7.071)
        self.graph.add_node(9)

    def tearDown(self):
        self._tmp.cleanup()

    def test_naeto_carries_edge_lengths(self):
        target = self.exporter.export(self.graph, self.destination, ExportFormat.NAETO)

        self.assertEqual(target.name, "map.wkt.SNA_NAETO.dat")
        text = target.read_text(encoding="utf-8")
        self.assertTrue(text.startswith("graph G {\n"))
        self.assertIn("  9;\n", text)
        self.assertIn("  1 -- 5  [len=7.071];", text)
        self.assertTrue(text.rstrip().endswith("}"))

    def test_dot_lists_vertices_and_edges(self):
        target = self.exporter.export(self.graph, self.destination, ExportFormat.DOT)

        text = target.read_text(encoding="utf-8")
        self.assertIn("  1 -- 5;", text)
        self.assertNotIn("len=", text)

    def test_graphml_round_trips_weights(self):
        target = self.exporter.export(self.graph, self.destination, ExportFormat.GRAPHML)

        loaded = nx.read_graphml(target)

        self.assertEqual(target.name, "map.wkt.SNA_GraphML.dat")
        self.assertEqual(loaded.number_of_nodes(), 3)
        self.assertEqual(loaded.number_of_edges(), 2)
        self.assertAlmostEqual(loaded["1"]["5"]["weight"], 7.071)

    def test_export_all_accepts_format_names(self):
        paths = self.exporter.export_all(self.graph, self.destination, ["dot", "graphml"])
        self.assertEqual([p.name for p in paths], ["map.wkt.SNA_DOT.dat", "map.wkt.SNA_GraphML.dat"])

    def test_unknown_format_is_rejected(self):
        with self.assertRaises(ValueError):
            self.exporter.export_all(self.graph, self.destination, ["gexf"])


if __name__ == "__main__":
    unittest.main()
