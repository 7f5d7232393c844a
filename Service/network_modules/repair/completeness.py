"""
Service/network_modules/repair/completeness.py

서로 교차하지만 공유 랜드마크가 없는 도로 구간을 찾아 교차점 랜드마크를 삽입하는 복구 모듈입니다.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Tuple

from shapely import STRtree
from shapely.geometry import LineString

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import NetworkConfig

from ..model import LandmarkStore, StreetTopology
from ..model.streets import Segment
from .crossing import CrossingDetector


@dataclass(frozen=True)
class CrossingInsertion:
    street_id: int
    index: int
    landmark_id: int
    offset: float


@dataclass(frozen=True)
class RepairReport:
    passes: int
    inserted_references: int
    created_landmarks: int
    converged: bool


class CompletenessRepairer:
    """
    전체 구간 쌍을 스캔하여 교차점을 수집한 뒤 한 번에 반영하고,
    변경이 없는 스캔이 나올 때까지(또는 최대 반복 횟수까지) 재스캔합니다.
    """

    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._precision = config.coord_precision
        self._max_passes = config.repair_max_passes

    @safe_run
    @log_execution_time
    def execute(self, store: LandmarkStore, topology: StreetTopology) -> RepairReport:
        topology.check_completeness(store)
        self._logger.log("[Repair] 모든 도로의 참조 랜드마크가 존재합니다. 교차점 복구를 시작합니다.", level="INFO")

        detector = CrossingDetector(store, self._precision)
        landmarks_before = len(store)
        inserted_total = 0
        passes = 0
        converged = False

        while passes < self._max_passes:
            passes += 1
            insertions = self._scan(store, topology, detector)
            inserted = self._apply(topology, insertions)
            inserted_total += inserted

            self._logger.log(f"[Repair] 스캔 {passes}회차: 교차 참조 {inserted}개 삽입", level="DEBUG")

            if inserted == 0:
                converged = True
                break

        if not converged:
            self._logger.log(
                f"[Repair] 최대 스캔 횟수({self._max_passes}) 도달: 교차점 복구가 수렴하지 않았습니다.",
                level="WARNING",
            )

        report = RepairReport(
            passes=passes,
            inserted_references=inserted_total,
            created_landmarks=len(store) - landmarks_before,
            converged=converged,
        )
        self._logger.log(
            f"[Repair] 완료: 스캔={report.passes}회, 삽입 참조={report.inserted_references}개, "
            f"신규 랜드마크={report.created_landmarks}개, 현재 랜드마크={len(store)}개",
            level="INFO",
        )
        return report

    def _scan(
            self, store: LandmarkStore, topology: StreetTopology, detector: CrossingDetector
    ) -> List[CrossingInsertion]:
        """현재 위상의 스냅샷에서 서로 다른 도로의 구간 쌍을 모두 검사하여 삽입 후보를 수집합니다."""
        segments: List[Segment] = list(topology.iter_segments())
        if len(segments) < 2:
            return []

        lines = [LineString([store[a].xy, store[b].xy]) for _, _, a, b in segments]
        tree = STRtree(lines)
        left, right = tree.query(lines)

        insertions: List[CrossingInsertion] = []
        for i, j in sorted(zip(left.tolist(), right.tolist())):
            if j <= i:
                continue
            seg_a, seg_b = segments[i], segments[j]
            if seg_a[0] == seg_b[0]:
                continue

            crossing = detector.detect(store[seg_a[2]], store[seg_a[3]], store[seg_b[2]], store[seg_b[3]])
            if crossing is None:
                continue

            for street_id, index, start, _end in (seg_a, seg_b):
                if topology.contains_landmark(street_id, crossing.id):
                    continue
                origin = store[start]
                offset = (crossing.x - origin.x) ** 2 + (crossing.y - origin.y) ** 2
                insertions.append(CrossingInsertion(street_id, index, crossing.id, offset))

        return insertions

    def _apply(self, topology: StreetTopology, insertions: List[CrossingInsertion]) -> int:
        """
        수집된 삽입 후보를 도로별로 반영합니다.
        뒤쪽 구간부터 처리하여 앞쪽 구간의 위치가 변하지 않도록 하고,
        같은 구간 안의 교차점은 시작점으로부터의 거리 순으로 삽입합니다.
        """
        grouped: Dict[int, Dict[int, List[Tuple[float, int]]]] = defaultdict(lambda: defaultdict(list))
        for item in insertions:
            grouped[item.street_id][item.index].append((item.offset, item.landmark_id))

        inserted = 0
        for street_id in sorted(grouped):
            by_index = grouped[street_id]
            for index in sorted(by_index, reverse=True):
                position = index
                for _offset, landmark_id in sorted(by_index[index]):
                    if topology.insert_landmark_at(street_id, position, landmark_id):
                        position += 1
                        inserted += 1
        return inserted
