"""
Service/network_modules/graph/filters.py

반올림·중복 구간으로 생긴 인공 간선을 가중 그래프 뷰에서 제거하는 정제 모듈입니다.
"""
from __future__ import annotations

import networkx as nx

from Common.log import Log
from Service.config import NetworkConfig


class BogusEdgeFilter:
    """
    가중치가 기준값(기본 1.0)과 거의 같거나 사실상 0인 간선을 제거합니다.
    데이터 모델(LandmarkStore/StreetTopology)은 건드리지 않습니다.
    """

    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._target = config.bogus_weight_target
        self._epsilon = config.bogus_weight_epsilon
        self._zero = config.bogus_zero_weight

    def is_bogus(self, weight: float) -> bool:
        return abs(weight - self._target) < self._epsilon or weight <= self._zero

    def execute(self, graph: nx.Graph) -> int:
        bogus = [
            (u, v) for u, v, weight in graph.edges(data="weight", default=0.0)
            if self.is_bogus(float(weight))
        ]

        before = graph.number_of_edges()
        graph.remove_edges_from(bogus)

        self._logger.log(
            f"[BogusEdge] 간선 {before}개 중 인공 간선 {len(bogus)}개 제거 -> {graph.number_of_edges()}개",
            level="INFO",
        )
        return len(bogus)
