"""
Service/network_service.py

도로망 위상 복구 및 단순화 파이프라인의 전체 공정을 제어하는 서비스 모듈입니다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import networkx as nx

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import NetworkConfig
from Service.schemas import FileSaveRequest, PipelineRequest
from Service.network_modules import (
    NetworkIO,
    CoordinateProjector,
    ResultValidator,
    LandmarkStore,
    StreetTopology,
    CompletenessRepairer,
    ConnectivityPartitioner,
    WeightedGraphBuilder,
    BogusEdgeFilter,
    GraphExporter,
    NetworkDiagnostics,
)


@dataclass
class PipelineResult:
    """파이프라인 실행 결과로 최종 데이터 모델과 가중 그래프 뷰를 함께 보관합니다."""
    store: LandmarkStore
    topology: StreetTopology
    weighted_graph: nx.Graph
    output_path: Path
    export_paths: List[Path] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)


class NetworkService:
    """
    도로망 파이프라인의 실행을 관리하는 메인 서비스 클래스입니다.
    """

    def __init__(
        self,
        logger: Log,
        network_io: NetworkIO,
        projector: CoordinateProjector,
        repairer: CompletenessRepairer,
        partitioner: ConnectivityPartitioner,
        graph_builder: WeightedGraphBuilder,
        edge_filter: BogusEdgeFilter,
        exporter: GraphExporter,
        diagnostics: NetworkDiagnostics,
        validator: ResultValidator,
        config: Optional[NetworkConfig] = None,
    ):
        self._logger = logger
        self._io = network_io
        self._projector = projector
        self._repairer = repairer
        self._partitioner = partitioner
        self._graph_builder = graph_builder
        self._edge_filter = edge_filter
        self._exporter = exporter
        self._diagnostics = diagnostics
        self._validator = validator
        self._config = config

    @safe_run
    @log_execution_time
    def run_pipeline(self, request: PipelineRequest) -> PipelineResult:
        """
        입력 파일을 로드하여 교차점 복구, 파티션 정리, 가중 그래프 생성/정제 후 WKT로 저장합니다.
        교차점 복구 실행 여부는 request.repair_crossings로 호출 전에 결정되어야 합니다.
        """
        load_request = request.load_request()
        save_request = request.save_request()
        source_format = load_request.source_format

        store, topology = self._io.load(load_request)

        if source_format == "osm":
            self._projector.execute(store)

        topology.check_completeness(store)

        self._logger.log("=== [Network Pipeline] 시작 ===", level="INFO")

        if request.repair_crossings:
            self._repairer.execute(store, topology)
        else:
            self._logger.log("[Repair] 교차점 복구를 건너뜁니다.", level="INFO")
        self._save_stage(store, topology, save_request.output_path, "01_repaired")

        self._partitioner.execute(store, topology)
        self._projector.translate(store, request.translate_x, request.translate_y)
        self._save_stage(store, topology, save_request.output_path, "02_simplified")

        weighted = self._graph_builder.build(store, topology)
        self._edge_filter.execute(weighted)

        if source_format == "wkt" and request.repair_crossings:
            second_repair = self._repairer.execute(store, topology)
            if second_repair.inserted_references > 0:
                self._logger.log("[Repair] 재복구로 위상이 변경되어 가중 그래프를 다시 생성합니다.", level="INFO")
                weighted = self._graph_builder.build(store, topology)
                self._edge_filter.execute(weighted)

        self._partitioner.execute(store, topology)
        self._partitioner.prune_graph(weighted, keep=store.ids())

        self._diagnostics.report(weighted)

        export_paths = self._exporter.export_all(weighted, save_request.output_path, request.export_formats)
        output_path = self._io.save(store, topology, save_request)

        issues = self._validator.execute(store, topology, weighted)

        self._logger.log("=== [Network Pipeline] 완료 ===", level="INFO")

        return PipelineResult(
            store=store,
            topology=topology,
            weighted_graph=weighted,
            output_path=output_path,
            export_paths=export_paths,
            issues=issues,
        )

    def _save_stage(self, store: LandmarkStore, topology: StreetTopology, output_path: Path, stage: str) -> None:
        """디버그 모드에서 파이프라인 중간 단계의 도로 형상을 WKT로 저장합니다."""
        if not bool(getattr(self._config, "debug_export_intermediate", False)):
            return

        stage_path = output_path.with_name(f"{output_path.stem}_{stage}.wkt")
        try:
            self._io.save(store, topology, FileSaveRequest(output_path=stage_path))
            self._logger.log(f"[Debug] 저장 완료: {stage_path.name}", level="INFO")
        except OSError as e:
            self._logger.log(f"[Debug] 저장 실패: {stage_path.name} - {e}", level="WARNING")
