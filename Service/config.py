"""
Service/config.py

도로망 위상 복구 파이프라인의 동작을 제어하는 설정 모듈입니다.
"""
from __future__ import annotations

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EXPORT_FORMATS = ("dot", "naeto", "graphml")


def normalize_export_formats(formats: List[str]) -> List[str]:
    """내보내기 형식 이름을 소문자로 정규화하고, 지원하지 않는 형식이 있으면 ValueError를 발생시킵니다."""
    normalized = [fmt.strip().lower() for fmt in formats]
    unknown = sorted(set(normalized) - set(EXPORT_FORMATS))
    if unknown:
        raise ValueError(f"지원하지 않는 내보내기 형식입니다: {unknown} (허용: {list(EXPORT_FORMATS)})")
    return normalized


class NetworkConfig(BaseSettings):
    """
    랜드마크 동일성 판정, 교차점 복구, 파티션 정리 및 그래프 정제의 핵심 파라미터를 정의합니다.
    """

    debug_export_intermediate: bool = Field(
        default=False,
        description="디버그 모드: 단계별 중간 산출물(WKT)을 출력 파일 옆에 저장 여부"
    )

    coord_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        description="두 랜드마크를 같은 지점으로 간주하는 축별 좌표 허용 오차"
    )

    coord_precision: int = Field(
        default=3,
        ge=0,
        le=12,
        description="교차점 좌표 및 간선 가중치 반올림 자릿수 (half-up)"
    )

    bogus_weight_target: float = Field(
        default=1.0,
        description="인공 간선으로 간주할 기준 가중치"
    )

    bogus_weight_epsilon: float = Field(
        default=1e-4,
        ge=0.0,
        description="기준 가중치와의 허용 편차"
    )

    bogus_zero_weight: float = Field(
        default=1e-9,
        ge=0.0,
        description="이 값 이하의 가중치는 0으로 간주하여 제거"
    )

    simplify_max_iterations: int = Field(
        default=10,
        ge=1,
        description="비연결 파티션 제거 반복 최대 횟수"
    )

    repair_max_passes: int = Field(
        default=50,
        ge=1,
        description="교차점 복구 전체 스캔 최대 반복 횟수"
    )

    repair_crossings: bool = Field(
        default=False,
        description="호출 측에서 결정하지 않은 경우 교차점 복구 실행 여부"
    )

    export_formats: List[str] = Field(
        default_factory=list,
        description="가중 그래프 내보내기 형식 (dot, naeto, graphml)"
    )

    model_config = SettingsConfigDict(
        env_prefix="STREETNET_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("export_formats")
    @classmethod
    def validate_export_formats(cls, v: List[str]) -> List[str]:
        return normalize_export_formats(v)
