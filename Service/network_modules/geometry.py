"""
Service/network_modules/geometry.py

좌표 반올림 및 평면/측지 거리 계산을 담당하는 기하 유틸리티 모듈입니다.
"""
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP

EARTH_RADIUS_KM = 6371.0


def round_half_up(value: float, precision: int) -> float:
    """
    부동소수점 값을 repr 10진 표현 기준으로 half-up 반올림합니다. (2.0005 -> 2.001)
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def plain_distance(x1: float, y1: float, x2: float, y2: float, precision: int = 3) -> float:
    """두 평면 좌표 사이의 유클리드 거리(반올림)를 반환합니다."""
    return round_half_up(math.hypot(x1 - x2, y1 - y2), precision)


def geo_distance(lat1: float, lon1: float, lat2: float, lon2: float, precision: int = 3) -> float:
    """두 위경도 좌표 사이의 Haversine 거리(m, 반올림)를 반환합니다."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round_half_up(EARTH_RADIUS_KM * c * 1000.0, precision)


def within_tolerance(x1: float, y1: float, x2: float, y2: float, epsilon: float) -> bool:
    """두 좌표가 x, y 축 모두에서 epsilon 미만으로 떨어져 있는지 확인합니다."""
    return abs(x1 - x2) < epsilon and abs(y1 - y2) < epsilon
