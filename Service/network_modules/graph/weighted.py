"""
Service/network_modules/graph/weighted.py

도로 위상으로부터 랜드마크 쌍당 최대 하나의 간선을 갖는 가중 그래프 뷰를 생성하는 모듈입니다.
"""
from __future__ import annotations

from typing import Set, Tuple

import networkx as nx

from Common.log import Log
from Function.decorators import log_execution_time
from Service.config import NetworkConfig

from ..geometry import plain_distance
from ..model import LandmarkStore, StreetTopology


class WeightedGraphBuilder:
    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._precision = config.coord_precision

    @staticmethod
    def _canonical_edge_key(u: int, v: int) -> Tuple[int, int]:
        return (u, v) if u <= v else (v, u)

    @log_execution_time
    def build(self, store: LandmarkStore, topology: StreetTopology) -> nx.Graph:
        """
        가중치는 두 랜드마크 사이의 평면 거리(반올림)입니다.
        이미 추가된 랜드마크 쌍은 방향과 무관하게 건너뛰며 기존 가중치도 갱신하지 않습니다.
        """
        graph = nx.Graph()
        graph.add_nodes_from(store.ids())

        added: Set[Tuple[int, int]] = set()
        skipped = 0

        for _street_id, _index, start, end in topology.iter_segments():
            key = self._canonical_edge_key(start, end)
            if key in added:
                skipped += 1
                continue

            a, b = store[start], store[end]
            graph.add_edge(start, end, weight=plain_distance(a.x, a.y, b.x, b.y, self._precision))
            added.add(key)

        self._logger.log(
            f"[WeightedGraph] 노드={graph.number_of_nodes()} 간선={graph.number_of_edges()} "
            f"(중복 구간 {skipped}개 건너뜀)",
            level="INFO",
        )
        return graph
