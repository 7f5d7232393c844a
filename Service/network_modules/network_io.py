"""
Service/network_modules/network_io.py

OSM(XML)/WKT 도로 데이터의 입력과 WKT 도로 형상 출력을 담당하는 모듈입니다.
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple

import geopandas as gpd
import shapely.wkt
from shapely.errors import GEOSException
from shapely.geometry import LineString

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import NetworkConfig
from Service.schemas import FileLoadRequest, FileSaveRequest

from .model import Landmark, LandmarkStore, StreetTopology, TopologyIntegrityError

XML_TAG_OSM = "osm"
XML_TAG_NODE = "node"
XML_TAG_WAY = "way"
XML_TAG_ND = "nd"

_WKT_LINESTRING = re.compile(r"LINESTRING\s*\(([^()]*)\)", re.IGNORECASE)

Network = Tuple[LandmarkStore, StreetTopology]


class NetworkIO:
    """
    입력 파일을 랜드마크 저장소 + 도로 위상 쌍으로 변환하고, 결과를 WKT 파일로 기록합니다.
    """

    def __init__(self, logger: Log, config: NetworkConfig):
        self._logger = logger
        self._epsilon = config.coord_epsilon

    @safe_run
    @log_execution_time
    def load(self, request: FileLoadRequest) -> Network:
        """
        확장자에 따라 OSM 또는 WKT 파서를 선택하여 데이터를 로드합니다.

        Args:
            request (FileLoadRequest): 파일 경로를 포함한 로드 요청 객체

        Returns:
            Tuple[LandmarkStore, StreetTopology]: 로드된 데이터 모델
        """
        file_path = request.file_path.expanduser().resolve()

        if request.source_format == "osm":
            store, topology = self.read_osm(file_path)
        else:
            store, topology = self.read_wkt(file_path)

        if len(topology) == 0:
            raise ValueError(f"로드된 도로 데이터가 비어있습니다: {file_path}")

        self._logger.log(
            f"데이터 로드 상세 - 형식: {request.source_format}, 도로 수: {len(topology)}, 랜드마크 수: {len(store)}",
            level="INFO",
        )
        return store, topology

    def read_osm(self, file_path: Path) -> Network:
        store = LandmarkStore(self._epsilon)
        topology = StreetTopology()

        root = ET.parse(file_path).getroot()
        if root.tag != XML_TAG_OSM:
            raise ValueError(f"잘못된 OSM 파일입니다. 루트 요소가 '{root.tag}'입니다. ('{XML_TAG_OSM}' 필요)")

        for node in root.iter(XML_TAG_NODE):
            raw_id, lat, lon = node.get("id"), node.get("lat"), node.get("lon")
            if raw_id is None or lat is None or lon is None:
                self._logger.log(f"[IO] 속성이 누락된 랜드마크를 건너뜁니다: {node.attrib}", level="WARNING")
                continue
            landmark_id = self._parse_id(raw_id, "랜드마크 id")
            store.add(Landmark(id=landmark_id, latitude=float(lat), longitude=float(lon)))

        for way in root.iter(XML_TAG_WAY):
            raw_id = way.get("id")
            if raw_id is None:
                self._logger.log(f"[IO] id가 없는 도로를 건너뜁니다: {way.attrib}", level="WARNING")
                continue
            street_id = self._parse_id(raw_id, "도로 id")

            refs = []
            for nd in way.findall(XML_TAG_ND):
                ref = nd.get("ref")
                if ref is None:
                    raise TopologyIntegrityError("도로 랜드마크 참조에 ref 속성이 없습니다", street_id=street_id)
                refs.append(self._parse_id(ref, "랜드마크 참조", street_id))

            if not refs:
                self._logger.log(f"[IO] 랜드마크가 없는 도로를 건너뜁니다: {street_id}", level="WARNING")
                continue
            topology.add_street(street_id, refs)

        return store, topology

    def read_wkt(self, file_path: Path) -> Network:
        """
        파일 안의 모든 LINESTRING 블록(줄바꿈 포함)을 순서대로 도로로 변환합니다.
        좌표는 허용 오차 기준으로 기존 랜드마크와 병합됩니다.
        """
        store = LandmarkStore(self._epsilon)
        topology = StreetTopology()

        text = file_path.read_text(encoding="utf-8")
        for street_id, match in enumerate(_WKT_LINESTRING.finditer(text)):
            body = " ".join(match.group(1).split())
            if not body:
                continue
            coords = self._parse_coordinates(body, street_id)
            topology.add_street(street_id, [store.insert_or_get(x, y) for x, y in coords])

        return store, topology

    @safe_run
    @log_execution_time
    def save(self, store: LandmarkStore, topology: StreetTopology, request: FileSaveRequest) -> Path:
        """
        도로마다 한 줄의 `LINESTRING (x y, ...)`을 기록합니다.
        이어쓰기 모드에서는 기존 내용과 빈 줄로 구분합니다.
        """
        output_path = request.output_path.expanduser().resolve()
        gdf = self.to_geodataframe(store, topology)

        if gdf.empty:
            self._logger.log("저장할 도로 데이터가 비어있습니다.", level="WARNING")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = gdf.geometry.to_wkt(rounding_precision=-1, trim=True).tolist()

        with output_path.open("a" if request.append else "w", encoding="utf-8") as stream:
            if request.append:
                stream.write("\n\n\n")
            for wkt in lines:
                stream.write(wkt + "\n")

        self._logger.log(f"저장 완료: {output_path} (도로 {len(lines)}개)", level="INFO")
        return output_path

    def to_geodataframe(self, store: LandmarkStore, topology: StreetTopology) -> gpd.GeoDataFrame:
        """랜드마크가 2개 이상인 도로를 LineString으로 변환한 GeoDataFrame을 반환합니다."""
        street_ids = []
        geometries = []
        for street_id, refs in topology.items():
            if len(refs) < 2:
                continue
            street_ids.append(street_id)
            geometries.append(LineString([store[lid].xy for lid in refs]))
        return gpd.GeoDataFrame({"street_id": street_ids}, geometry=geometries)

    def _parse_coordinates(self, body: str, street_id: int) -> List[Tuple[float, float]]:
        """좌표 쌍 목록을 파싱합니다. 좌표가 하나뿐인 도로는 POINT로 읽어 그대로 유지합니다."""
        kind = "POINT" if "," not in body else "LINESTRING"
        try:
            geom = shapely.wkt.loads(f"{kind} ({body})")
        except (GEOSException, ValueError) as e:
            raise TopologyIntegrityError(f"잘못된 좌표 쌍이 포함되어 있습니다: {e}", street_id=street_id) from e
        if geom.has_z:
            raise TopologyIntegrityError("좌표 쌍은 (x y) 2차원이어야 합니다", street_id=street_id)
        return [(float(x), float(y)) for x, y in geom.coords]

    @staticmethod
    def _parse_id(raw: str, label: str, street_id: Optional[int] = None) -> int:
        try:
            value = int(raw)
        except ValueError as e:
            raise TopologyIntegrityError(f"{label}가 정수가 아닙니다: {raw!r}", street_id=street_id) from e
        if value < 0:
            raise TopologyIntegrityError(f"{label}는 음수가 될 수 없습니다: {value}", street_id=street_id)
        return value
