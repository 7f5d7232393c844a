"""
Service/network_modules/graph/__init__.py

연결성 분석, 가중 그래프 생성/정제, 진단 및 내보내기 모듈들을 외부로 노출합니다.
"""
from .partitioner import ConnectivityPartitioner, SimplifyReport, build_connectivity_graph
from .weighted import WeightedGraphBuilder
from .filters import BogusEdgeFilter
from .exports import ExportFormat, GraphExporter
from .diagnostics import NetworkDiagnostics

__all__ = [
    "ConnectivityPartitioner",
    "SimplifyReport",
    "build_connectivity_graph",
    "WeightedGraphBuilder",
    "BogusEdgeFilter",
    "ExportFormat",
    "GraphExporter",
    "NetworkDiagnostics",
]
