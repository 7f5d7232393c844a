"""
Service/network_modules/repair/__init__.py

교차점 탐지 및 위상 완전성 복구 모듈들을 외부로 노출합니다.
"""
from .crossing import CrossingDetector, intersection_point
from .completeness import CompletenessRepairer, RepairReport

__all__ = [
    "CrossingDetector",
    "intersection_point",
    "CompletenessRepairer",
    "RepairReport",
]
