"""
Service/network_modules/model/errors.py

입력 데이터 무결성 위반을 표현하는 예외 모듈입니다.
"""
from __future__ import annotations

from typing import Optional


class TopologyIntegrityError(ValueError):
    """
    도로가 존재하지 않는 랜드마크를 참조하거나 좌표 쌍이 잘못된 경우 발생합니다.
    파이프라인은 이 예외를 복구하지 않고 즉시 중단합니다.
    """

    def __init__(self, message: str, street_id: Optional[int] = None, landmark_id: Optional[int] = None):
        context = []
        if street_id is not None:
            context.append(f"도로={street_id}")
        if landmark_id is not None:
            context.append(f"랜드마크={landmark_id}")
        suffix = f" ({', '.join(context)})" if context else ""
        super().__init__(f"{message}{suffix}")
        self.street_id = street_id
        self.landmark_id = landmark_id
