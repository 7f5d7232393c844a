"""
Service/network_modules/graph/partitioner.py

도로망의 연결 요소를 분석하여 가장 큰 파티션만 남기고 나머지를 데이터 모델에서 제거하는 모듈입니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

import networkx as nx

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import NetworkConfig

from ..model import LandmarkStore, StreetTopology


@dataclass(frozen=True)
class SimplifyReport:
    iterations: int
    connected: bool
    removed_landmarks: int
    removed_streets: int


def build_connectivity_graph(store: LandmarkStore, topology: StreetTopology) -> nx.MultiGraph:
    """
    저장소의 모든 랜드마크를 노드로, 도로의 연속 랜드마크 쌍을 간선(중복 허용)으로 하는 그래프를 생성합니다.
    """
    graph = nx.MultiGraph()
    graph.add_nodes_from(store.ids())
    for street_id, _index, start, end in topology.iter_segments():
        graph.add_edge(start, end, street=street_id)
    return graph


def ordered_partitions(graph: nx.Graph) -> List[Set[int]]:
    """연결 요소를 (크기 내림차순, 최소 id 오름차순)으로 정렬하여 반환합니다."""
    return sorted(nx.connected_components(graph), key=lambda part: (-len(part), min(part)))


class ConnectivityPartitioner:
    """
    비연결 파티션을 제거하는 단순화 과정을 연결 그래프가 될 때까지(최대 반복 횟수 내) 반복합니다.
    도로 삭제로 인해 남은 부분이 다시 끊어질 수 있으므로 한 번의 정리로 끝나지 않습니다.
    """

    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._max_iterations = config.simplify_max_iterations

    @safe_run
    @log_execution_time
    def execute(self, store: LandmarkStore, topology: StreetTopology, prune: bool = True) -> SimplifyReport:
        removed_landmarks = 0
        removed_streets = 0
        connected = False
        iteration = 0

        for iteration in range(1, self._max_iterations + 1):
            self._logger.log(f"[Simplify] 단순화 {iteration}/{self._max_iterations}회차", level="DEBUG")
            connected, landmarks, streets = self.simplify_once(store, topology, prune)
            removed_landmarks += landmarks
            removed_streets += streets
            if connected or not prune:
                break
        else:
            # 마지막 회차 삭제 후 연결 상태 확인
            graph = build_connectivity_graph(store, topology)
            connected = graph.number_of_nodes() == 0 or nx.is_connected(graph)

        report = SimplifyReport(
            iterations=iteration,
            connected=connected,
            removed_landmarks=removed_landmarks,
            removed_streets=removed_streets,
        )
        level = "INFO" if connected or not prune else "WARNING"
        self._logger.log(
            f"[Simplify] 완료: 반복={report.iterations}회, 연결={report.connected}, "
            f"삭제 랜드마크={removed_landmarks}개, 삭제 도로={removed_streets}개 "
            f"(남은 도로={len(topology)}개, 랜드마크={len(store)}개)",
            level=level,
        )
        return report

    def simplify_once(self, store: LandmarkStore, topology: StreetTopology, prune: bool = True):
        """
        한 회차의 파티션 분석과 제거를 수행합니다.

        Returns:
            Tuple[bool, int, int]: (이미 연결 상태였는지, 삭제 랜드마크 수, 삭제 도로 수)
        """
        graph = build_connectivity_graph(store, topology)
        if graph.number_of_nodes() == 0 or nx.is_connected(graph):
            self._logger.log("[Simplify] 그래프가 연결되어 있어 정리할 파티션이 없습니다.", level="INFO")
            return True, 0, 0

        partitions = ordered_partitions(graph)
        largest = partitions[0]
        doomed = set().union(*partitions[1:])
        self._logger.log(
            f"[Simplify] 파티션 {len(partitions)}개 발견: {[len(p) for p in partitions[:20]]} | "
            f"최대 파티션(랜드마크 {len(largest)}개) 선택, 제거 대상 랜드마크 {len(doomed)}개",
            level="INFO",
        )

        if not prune:
            self._logger.log("[Simplify] 분석 전용 모드: 파티션을 제거하지 않습니다.", level="INFO")
            return False, 0, 0

        landmarks, streets = self._remove(store, topology, sorted(doomed))
        return False, landmarks, streets

    def prune_graph(self, graph: nx.Graph, keep: Optional[Iterable[int]] = None) -> int:
        """
        파생 그래프 뷰에서 keep에 없는 노드를 제거한 뒤 가장 큰 연결 요소만 남깁니다.
        데이터 모델은 변경하지 않습니다.

        Returns:
            int: 제거된 노드 수
        """
        before = graph.number_of_nodes()
        if keep is not None:
            allowed = set(keep)
            graph.remove_nodes_from([n for n in list(graph.nodes) if n not in allowed])

        if graph.number_of_nodes() > 0 and not nx.is_connected(graph):
            partitions = ordered_partitions(graph)
            graph.remove_nodes_from(set().union(*partitions[1:]))

        removed = before - graph.number_of_nodes()
        if removed:
            self._logger.log(f"[Simplify] 그래프 뷰 정리: 노드 {removed}개 제거", level="INFO")
        return removed

    def _remove(self, store: LandmarkStore, topology: StreetTopology, landmark_ids: List[int]):
        removed_landmarks = 0
        removed_streets = 0
        for lid in landmark_ids:
            if store.remove(lid):
                removed_landmarks += 1
            removed_streets += topology.remove_streets_referencing(lid)

        self._logger.log(
            f"[Simplify] 비연결 도로 {removed_streets}개, 랜드마크 {removed_landmarks}개 삭제",
            level="INFO",
        )
        return removed_landmarks, removed_streets
