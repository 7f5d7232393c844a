"""
Service/network_modules/model/landmarks.py

랜드마크(점 객체)의 저장과 좌표 기반 동일성 판정을 담당하는 모듈입니다.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..geometry import within_tolerance

DEFAULT_EPSILON = 1e-4

Cell = Tuple[int, int]


@dataclass
class Landmark:
    id: int
    x: float = 0.0
    y: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)


class LandmarkStore:
    """
    랜드마크 집합의 단일 원본입니다.

    좌표 조회는 epsilon 크기의 격자 버킷으로 후보를 좁힌 뒤 축별 허용 오차로 판정하며,
    여러 후보가 일치하면 가장 작은 id를 반환합니다.
    """

    def __init__(self, epsilon: float = DEFAULT_EPSILON):
        if epsilon <= 0:
            raise ValueError(f"epsilon은 0보다 커야 합니다: {epsilon}")
        self._epsilon = float(epsilon)
        self._landmarks: Dict[int, Landmark] = {}
        self._cells: Dict[Cell, Set[int]] = {}

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def __len__(self) -> int:
        return len(self._landmarks)

    def __contains__(self, landmark_id: object) -> bool:
        return landmark_id in self._landmarks

    def __iter__(self) -> Iterator[Landmark]:
        return iter(list(self._landmarks.values()))

    def __getitem__(self, landmark_id: int) -> Landmark:
        return self._landmarks[landmark_id]

    def get(self, landmark_id: int) -> Optional[Landmark]:
        return self._landmarks.get(landmark_id)

    def ids(self) -> List[int]:
        return sorted(self._landmarks)

    def add(self, landmark: Landmark) -> Landmark:
        """수집 단계에서 id가 정해진 랜드마크를 등록합니다. 같은 id는 덮어씁니다."""
        if landmark.id < 0:
            raise ValueError(f"랜드마크 id는 음수가 될 수 없습니다: {landmark.id}")
        self.remove(landmark.id)
        self._landmarks[landmark.id] = landmark
        self._index(landmark)
        return landmark

    def find_near(self, x: float, y: float) -> Optional[Landmark]:
        """(x, y)와 축별 epsilon 이내인 랜드마크 중 id가 가장 작은 것을 반환합니다."""
        cx, cy = self._cell_of(x, y)
        best: Optional[Landmark] = None
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for lid in self._cells.get((cx + dx, cy + dy), ()):
                    mark = self._landmarks[lid]
                    if not within_tolerance(mark.x, mark.y, x, y, self._epsilon):
                        continue
                    if best is None or mark.id < best.id:
                        best = mark
        return best

    def insert_or_get(self, x: float, y: float) -> int:
        """
        허용 오차 이내의 기존 랜드마크 id를 반환하고, 없으면 새 랜드마크를 생성합니다.

        Returns:
            int: 기존 또는 신규 랜드마크 id
        """
        existing = self.find_near(x, y)
        if existing is not None:
            return existing.id

        landmark = Landmark(id=self.next_id(), x=float(x), y=float(y))
        self._landmarks[landmark.id] = landmark
        self._index(landmark)
        return landmark.id

    def next_id(self) -> int:
        """현재 개수 이상이면서 사용되지 않은 가장 작은 양의 정수를 반환합니다."""
        candidate = max(len(self._landmarks), 1)
        while candidate in self._landmarks:
            candidate += 1
        return candidate

    def remove(self, landmark_id: int) -> bool:
        """랜드마크를 삭제합니다. 존재하지 않으면 아무것도 하지 않습니다."""
        landmark = self._landmarks.pop(landmark_id, None)
        if landmark is None:
            return False
        self._unindex(landmark)
        return True

    def move(self, landmark_id: int, x: float, y: float) -> None:
        landmark = self._landmarks[landmark_id]
        self._unindex(landmark)
        landmark.x = float(x)
        landmark.y = float(y)
        self._index(landmark)

    def translate(self, dx: float, dy: float) -> None:
        """모든 랜드마크를 (dx, dy)만큼 평행 이동합니다."""
        for landmark in self._landmarks.values():
            landmark.x += dx
            landmark.y += dy
        self._rebuild_index()

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """
        지리 좌표를 가진 랜드마크들의 (minLat, maxLat, minLon, maxLon)을 반환합니다.
        지리 좌표가 하나도 없으면 초기값 (90, -90, 180, -180)이 그대로 반환됩니다.
        """
        lat_min, lat_max = 90.0, -90.0
        lon_min, lon_max = 180.0, -180.0
        for landmark in self._landmarks.values():
            if landmark.latitude is None or landmark.longitude is None:
                continue
            lat_min = min(lat_min, landmark.latitude)
            lat_max = max(lat_max, landmark.latitude)
            lon_min = min(lon_min, landmark.longitude)
            lon_max = max(lon_max, landmark.longitude)
        return lat_min, lat_max, lon_min, lon_max

    def _cell_of(self, x: float, y: float) -> Cell:
        return (math.floor(x / self._epsilon), math.floor(y / self._epsilon))

    def _index(self, landmark: Landmark) -> None:
        self._cells.setdefault(self._cell_of(landmark.x, landmark.y), set()).add(landmark.id)

    def _unindex(self, landmark: Landmark) -> None:
        cell = self._cell_of(landmark.x, landmark.y)
        bucket = self._cells.get(cell)
        if bucket is None:
            return
        bucket.discard(landmark.id)
        if not bucket:
            del self._cells[cell]

    def _rebuild_index(self) -> None:
        self._cells = {}
        for landmark in self._landmarks.values():
            self._index(landmark)
