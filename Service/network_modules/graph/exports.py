"""
Service/network_modules/graph/exports.py

가중 그래프 뷰를 네트워크 분석 도구용 형식(DOT, NAETO, GraphML)으로 내보내는 모듈입니다.
데이터 모델이 아닌 파생 그래프(노드 목록, 가중 간선 목록)만 사용합니다.
"""
from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, TextIO

import networkx as nx

_DOT_ID = re.compile(r"[a-zA-Z_][\w]*|-?(\.[0-9]+|[0-9]+(\.[0-9]*)?)")


class ExportFormat(str, Enum):
    DOT = "dot"
    NAETO = "naeto"
    GRAPHML = "graphml"

    @property
    def suffix(self) -> str:
        return {
            ExportFormat.DOT: "SNA_DOT.dat",
            ExportFormat.NAETO: "SNA_NAETO.dat",
            ExportFormat.GRAPHML: "SNA_GraphML.dat",
        }[self]


def _dot_id(node) -> str:
    candidate = str(node)
    if not _DOT_ID.fullmatch(candidate):
        raise ValueError(f"DOT 식별자로 사용할 수 없는 노드입니다: {candidate!r}")
    return candidate


def write_dot(graph: nx.Graph, stream: TextIO) -> None:
    """무방향 DOT 그래프로 기록합니다. 가중치는 포함하지 않습니다."""
    stream.write("graph G {\n")
    for node in sorted(graph.nodes):
        stream.write(f"  {_dot_id(node)};\n")
    for u, v in sorted(graph.edges()):
        stream.write(f"  {_dot_id(u)} -- {_dot_id(v)};\n")
    stream.write("}\n")


def write_naeto(graph: nx.Graph, stream: TextIO) -> None:
    """DOT 형식에 간선 길이 속성 `[len=w]`를 덧붙여 기록합니다."""
    stream.write("graph G {\n")
    for node in sorted(graph.nodes):
        stream.write(f"  {_dot_id(node)};\n")
    for u, v, weight in sorted(graph.edges(data="weight", default=0.0)):
        stream.write(f"  {_dot_id(u)} -- {_dot_id(v)}  [len={float(weight)}];\n")
    stream.write("}\n")


def write_graphml(graph: nx.Graph, stream: TextIO) -> None:
    """노드 id와 간선 weight(double) 속성만 가진 GraphML로 기록합니다."""
    plain = nx.Graph()
    plain.add_nodes_from(sorted(graph.nodes))
    for u, v, weight in sorted(graph.edges(data="weight", default=0.0)):
        plain.add_edge(u, v, weight=float(weight))
    for line in nx.generate_graphml(plain, encoding="utf-8", prettyprint=True):
        stream.write(line + "\n")


_WRITERS: Dict[ExportFormat, Callable[[nx.Graph, TextIO], None]] = {
    ExportFormat.DOT: write_dot,
    ExportFormat.NAETO: write_naeto,
    ExportFormat.GRAPHML: write_graphml,
}


class GraphExporter:
    """형식별 기록 함수를 선택하여 `<출력 경로>.<형식 접미사>` 파일로 저장합니다."""

    def __init__(self, logger):
        self._logger = logger

    def export(self, graph: nx.Graph, destination: Path, fmt: ExportFormat) -> Path:
        fmt = ExportFormat(fmt)
        target = Path(f"{destination}.{fmt.suffix}")
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as stream:
            _WRITERS[fmt](graph, stream)
        self._logger.log(f"[Export] {fmt.value} 형식으로 그래프 내보내기 완료: {target}", level="INFO")
        return target

    def export_all(self, graph: nx.Graph, destination: Path, formats: List[str]) -> List[Path]:
        return [self.export(graph, destination, ExportFormat(fmt)) for fmt in formats]
