"""
Service/network_modules/model/__init__.py

랜드마크/도로 데이터 모델을 외부로 노출합니다.
"""
from .errors import TopologyIntegrityError
from .landmarks import Landmark, LandmarkStore
from .streets import StreetTopology

__all__ = [
    "TopologyIntegrityError",
    "Landmark",
    "LandmarkStore",
    "StreetTopology",
]
