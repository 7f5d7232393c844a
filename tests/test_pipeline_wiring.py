import ast
from pathlib import Path
import unittest


class PipelineWiringTests(unittest.TestCase):
    def _module(self, rel_path: str):
        src = Path(rel_path).read_text(encoding="utf-8")
        return src, ast.parse(src)

    def test_container_injects_every_stage(self):
        src, tree = self._module("Service/container.py")
        calls = {
            node.func.id
            for node in ast.walk(tree)
            if isinstance(node, ast.Call) and isinstance(node.func, ast.Name)
        }
        required = {
            "NetworkIO",
            "CoordinateProjector",
            "CompletenessRepairer",
            "ConnectivityPartitioner",
            "WeightedGraphBuilder",
            "BogusEdgeFilter",
            "GraphExporter",
            "NetworkDiagnostics",
            "ResultValidator",
            "NetworkService",
        }
        self.assertTrue(required.issubset(calls))
        self.assertIn("network_config = config or NetworkConfig()", src)

    def test_pipeline_filters_before_second_simplification(self):
        src, _ = self._module("Service/network_service.py")
        build = src.index("self._graph_builder.build(store, topology)")
        filt = src.index("self._edge_filter.execute(weighted)")
        second_repair = src.index('if source_format == "wkt" and request.repair_crossings:')
        prune = src.index("self._partitioner.prune_graph(weighted, keep=store.ids())")
        save = src.index("self._io.save(store, topology, save_request)")
        self.assertLess(build, filt)
        self.assertLess(filt, second_repair)
        self.assertLess(second_repair, prune)
        self.assertLess(prune, save)

    def test_projection_only_for_geographic_input(self):
        src, _ = self._module("Service/network_service.py")
        self.assertIn('if source_format == "osm":\n            self._projector.execute(store)', src)

    def test_cli_decides_repair_before_pipeline(self):
        src, _ = self._module("main.py")
        self.assertIn("repair_crossings=repair", src)
        self.assertIn("confirm_repair()", src)
        self.assertNotIn("input(", Path("Service/network_service.py").read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
