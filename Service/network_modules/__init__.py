"""
Service/network_modules/__init__.py

도로망 위상 복구 파이프라인 구성에 필요한 주요 모듈들을 외부로 노출합니다.
"""
from .network_io import NetworkIO
from .projection import CoordinateProjector
from .validator import ResultValidator
from .model import Landmark, LandmarkStore, StreetTopology, TopologyIntegrityError
from .repair import CompletenessRepairer, CrossingDetector
from .graph import (
    ConnectivityPartitioner,
    WeightedGraphBuilder,
    BogusEdgeFilter,
    GraphExporter,
    NetworkDiagnostics,
)

__all__ = [
    "NetworkIO",
    "CoordinateProjector",
    "ResultValidator",
    "Landmark",
    "LandmarkStore",
    "StreetTopology",
    "TopologyIntegrityError",
    "CompletenessRepairer",
    "CrossingDetector",
    "ConnectivityPartitioner",
    "WeightedGraphBuilder",
    "BogusEdgeFilter",
    "GraphExporter",
    "NetworkDiagnostics",
]
