"""
Service/network_modules/projection.py

위경도 랜드마크를 좌상단 원점 기준의 평면 좌표(m)로 변환하고 평행 이동하는 모듈입니다.
"""
from __future__ import annotations

from Common.log import Log
from Service.config import NetworkConfig

from .geometry import geo_distance
from .model import LandmarkStore


class CoordinateProjector:
    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._precision = config.coord_precision

    def execute(self, store: LandmarkStore) -> None:
        """
        지리 범위의 최소 위도/경도를 원점으로 하여 x = 경도 방향 거리, y = 위도 방향 거리로 변환합니다.
        """
        lat_min, lat_max, lon_min, lon_max = store.bounding_box()
        self._logger.log(
            f"[Projection] 지리 범위: 위도 {lat_min} ~ {lat_max}, 경도 {lon_min} ~ {lon_max}",
            level="INFO",
        )

        width = geo_distance(lat_min, lon_min, lat_min, lon_max, self._precision)
        height = geo_distance(lat_min, lon_min, lat_max, lon_min, self._precision)
        self._logger.log(f"[Projection] 영역 크기: 높이 {height}m, 너비 {width}m", level="INFO")

        skipped = 0
        for landmark in store:
            if landmark.latitude is None or landmark.longitude is None:
                skipped += 1
                continue
            x = geo_distance(landmark.latitude, landmark.longitude, landmark.latitude, lon_min, self._precision)
            y = geo_distance(landmark.latitude, landmark.longitude, lat_min, landmark.longitude, self._precision)
            store.move(landmark.id, x, y)

        if skipped:
            self._logger.log(f"[Projection] 지리 좌표가 없는 랜드마크 {skipped}개는 변환하지 않았습니다.", level="WARNING")

    def translate(self, store: LandmarkStore, dx: int, dy: int) -> bool:
        """모든 랜드마크를 (dx, dy)m 만큼 이동합니다. 이동량이 0이면 아무것도 하지 않습니다."""
        if dx == 0 and dy == 0:
            return False
        self._logger.log(f"[Projection] 지도 평행 이동: x={dx}, y={dy}", level="INFO")
        store.translate(dx, dy)
        return True
