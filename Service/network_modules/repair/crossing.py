"""
Service/network_modules/repair/crossing.py

두 선분의 교차점을 계산하고 기존 랜드마크 재사용 또는 신규 생성을 결정하는 모듈입니다.
"""
from __future__ import annotations

from typing import Optional, Tuple

from ..geometry import round_half_up
from ..model import Landmark, LandmarkStore

Point = Tuple[float, float]


def line_coefficients(p1: Point, p2: Point) -> Tuple[float, float, float]:
    """선분 p1-p2를 A*x + B*y = C 형태의 직선 계수로 변환합니다."""
    a = p2[1] - p1[1]
    b = p1[0] - p2[0]
    c = a * p1[0] + b * p1[1]
    return a, b, c


def within_bounds(point: Point, p1: Point, p2: Point) -> bool:
    """점이 선분의 바운딩 박스 안(경계 포함)에 있는지 확인합니다."""
    x, y = point
    return (
        min(p1[0], p2[0]) <= x <= max(p1[0], p2[0])
        and min(p1[1], p2[1]) <= y <= max(p1[1], p2[1])
    )


def intersection_point(a1: Point, a2: Point, b1: Point, b2: Point, precision: int = 3) -> Optional[Point]:
    """
    두 선분의 교차 좌표(반올림)를 반환합니다.

    평행(공선 포함)이거나 교차점이 두 선분 중 하나의 범위를 벗어나면 None입니다.
    끝점에 정확히 닿는 경우도 교차로 취급합니다.
    """
    a_a, a_b, a_c = line_coefficients(a1, a2)
    b_a, b_b, b_c = line_coefficients(b1, b2)

    det = a_a * b_b - b_a * a_b
    if det == 0:
        return None

    x = round_half_up((b_b * a_c - a_b * b_c) / det, precision)
    y = round_half_up((a_a * b_c - b_a * a_c) / det, precision)

    point = (x, y)
    if not (within_bounds(point, a1, a2) and within_bounds(point, b1, b2)):
        return None
    return point


class CrossingDetector:
    """
    선분 교차 판정 결과를 랜드마크로 변환합니다.
    교차 좌표 근처(epsilon)에 기존 랜드마크가 있으면 재사용하고, 없으면 저장소에 새로 생성합니다.
    """

    def __init__(self, store: LandmarkStore, precision: int = 3):
        self._store = store
        self._precision = precision

    def detect(self, a1: Landmark, a2: Landmark, b1: Landmark, b2: Landmark) -> Optional[Landmark]:
        point = intersection_point(a1.xy, a2.xy, b1.xy, b2.xy, self._precision)
        if point is None:
            return None

        landmark_id = self._store.insert_or_get(*point)
        return self._store[landmark_id]
