"""
Service/network_modules/validator.py

최종 산출물의 위상 품질을 검증하고 리스크 요소를 로깅하는 품질 보증(QA) 모듈입니다.
"""
from __future__ import annotations

from typing import List

import networkx as nx

from Common.log import Log
from Service.config import NetworkConfig

from .graph import build_connectivity_graph
from .model import LandmarkStore, StreetTopology


class ResultValidator:
    """
    최종 도로망의 참조 무결성, 연결성, 가중 그래프 잔여 인공 간선 여부를 검증합니다.
    """
    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._config = config

    def execute(self, store: LandmarkStore, topology: StreetTopology, weighted: nx.Graph) -> List[str]:
        """
        데이터를 변경하지 않고 분석 결과만 로그로 출력하며, 발견된 위험 요소 목록을 반환합니다.
        """
        errors: List[str] = []
        if len(topology) == 0:
            self._logger.log("[Validator] 검증 실패: 최종 도로 데이터가 비어있습니다.", level="WARNING")
            return ["최종 도로 데이터가 비어있습니다."]

        self._logger.log("=== 최종 결과물 품질 검증(QA) 시작 ===", level="INFO")

        self._check_references(store, topology, errors)
        self._check_connectivity(store, topology, errors)
        self._check_weighted_view(weighted, errors)

        if errors:
            self._logger.log(f"[Validator] 검증 완료: {len(errors)}개의 잠재적 위험 요소가 발견되었습니다.", level="WARNING")
            for err in errors[:5]:
                self._logger.log(f"  - {err}", level="WARNING")
        else:
            self._logger.log("[Validator] 검증 완료: 모든 품질 기준을 통과했습니다.", level="INFO")
        return errors

    def _check_references(self, store: LandmarkStore, topology: StreetTopology, errors: list) -> None:
        missing = sorted(lid for lid in topology.referenced_landmarks() if lid not in store)
        if missing:
            errors.append(f"존재하지 않는 랜드마크를 참조하는 도로가 있습니다: {missing[:5]}")

        short = [sid for sid, refs in topology.items() if len(refs) < 2]
        if short:
            errors.append(f"랜드마크가 2개 미만인 도로 {len(short)}개는 간선을 만들지 않습니다.")

    def _check_connectivity(self, store: LandmarkStore, topology: StreetTopology, errors: list) -> None:
        graph = build_connectivity_graph(store, topology)
        num_components = nx.number_connected_components(graph)

        self._logger.log(f"[Validator] 도로망 분리 그룹 수: {num_components}개", level="INFO")

        if num_components > 1:
            sizes = sorted((len(c) for c in nx.connected_components(graph)), reverse=True)
            self._logger.log(f"[Validator] 각 그룹별 랜드마크 수: {sizes[:20]}", level="DEBUG")
            errors.append(f"도로망이 {num_components}개의 파편으로 끊어져 있습니다.")

    def _check_weighted_view(self, weighted: nx.Graph, errors: list) -> None:
        zero = float(self._config.bogus_zero_weight)
        degenerate = [(u, v) for u, v, w in weighted.edges(data="weight", default=0.0) if w <= zero]
        if degenerate:
            errors.append(f"가중치가 0인 간선 {len(degenerate)}개가 남아 있습니다.")

        if weighted.number_of_nodes() > 0 and not nx.is_connected(weighted):
            errors.append(
                f"가중 그래프 뷰가 {nx.number_connected_components(weighted)}개의 그룹으로 분리되어 있습니다."
            )
