"""
Service/container.py

파이프라인의 모든 객체를 생성하고 의존성을 주입하여 실행 가능한 상태로 조립합니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from Common.log import Log

from Service.config import NetworkConfig
from Service.network_modules import (
    NetworkIO,
    CoordinateProjector,
    ResultValidator,
    CompletenessRepairer,
    ConnectivityPartitioner,
    WeightedGraphBuilder,
    BogusEdgeFilter,
    GraphExporter,
    NetworkDiagnostics,
)
from Service.network_service import NetworkService


@dataclass(frozen=True)
class BuiltApp:
    """조립이 완료된 애플리케이션 서비스 객체 묶음입니다."""
    config: NetworkConfig
    network_service: NetworkService


def build_app(logger: Log, config: Optional[NetworkConfig] = None) -> BuiltApp:
    """
    설정 로드 및 모든 내부 모듈의 의존성을 주입하여 BuiltApp 객체를 생성합니다.
    """
    network_config = config or NetworkConfig()

    network_io = NetworkIO(logger, network_config)
    projector = CoordinateProjector(logger, network_config)

    repairer = CompletenessRepairer(logger, network_config)
    partitioner = ConnectivityPartitioner(logger, network_config)
    graph_builder = WeightedGraphBuilder(logger, network_config)
    edge_filter = BogusEdgeFilter(logger, network_config)
    exporter = GraphExporter(logger)
    diagnostics = NetworkDiagnostics(logger)

    validator = ResultValidator(logger, network_config)

    network_service = NetworkService(
        logger=logger,
        network_io=network_io,
        projector=projector,
        repairer=repairer,
        partitioner=partitioner,
        graph_builder=graph_builder,
        edge_filter=edge_filter,
        exporter=exporter,
        diagnostics=diagnostics,
        validator=validator,
        config=network_config,
    )

    return BuiltApp(config=network_config, network_service=network_service)
