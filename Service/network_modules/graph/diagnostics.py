"""
Service/network_modules/graph/diagnostics.py

가중 그래프 뷰의 통계적 수치와 품질 리스크 요소를 분석하여 로그로 출력하는 진단 모듈입니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import networkx as nx
import pandas as pd

from Common.log import Log

_PERCENTILES = [0.01, 0.05, 0.1, 0.5, 0.9, 0.95, 0.99]


@dataclass(frozen=True)
class NetworkDiagnosticsPolicy:
    """진단 시 리스크 판정 및 샘플링 제한을 위한 임계값 설정입니다."""
    short_edge_threshold_m: float = 1.5
    top_n_suspects: int = 10


class NetworkDiagnostics:
    """
    가중 그래프의 노드 차수 분포, 연결 요소 수, 간선 가중치 분포를 보고합니다.
    """

    def __init__(self, logger: Log, policy: Optional[NetworkDiagnosticsPolicy] = None):
        self._logger = logger
        self._policy = policy or NetworkDiagnosticsPolicy()

    def report(self, graph: nx.Graph) -> pd.DataFrame:
        """요약 통계와 짧은 간선 후보를 기록하고, 간선별 진단 테이블을 반환합니다."""
        if graph.number_of_nodes() == 0:
            self._logger.log("[Diag] 분석 대상 그래프가 비어있습니다.", level="WARNING")
            return pd.DataFrame(columns=["u", "v", "weight", "deg_u", "deg_v"])

        self._log_graph_summary(graph)
        edge_df = self._build_edge_table(graph)
        self._log_weight_summary(edge_df)
        self._log_short_edges(edge_df)
        return edge_df

    def _log_graph_summary(self, graph: nx.Graph) -> None:
        degrees = [d for _, d in graph.degree()]
        d0 = degrees.count(0)
        d1 = degrees.count(1)
        d2 = degrees.count(2)
        d3p = sum(1 for d in degrees if d >= 3)

        self._logger.log(
            f"[Diag][Graph] 노드={graph.number_of_nodes()} 간선={graph.number_of_edges()} "
            f"그룹={nx.number_connected_components(graph)} 고립(D0)={d0} 단말(D1)={d1} "
            f"통과(D2)={d2} 교차(D3+)={d3p}",
            level="INFO",
        )

    def _build_edge_table(self, graph: nx.Graph) -> pd.DataFrame:
        degree_map = dict(graph.degree())
        rows = [
            {
                "u": u,
                "v": v,
                "weight": float(w),
                "deg_u": int(degree_map.get(u, 0)),
                "deg_v": int(degree_map.get(v, 0)),
            }
            for u, v, w in graph.edges(data="weight", default=0.0)
        ]
        return pd.DataFrame(rows, columns=["u", "v", "weight", "deg_u", "deg_v"])

    def _log_weight_summary(self, df: pd.DataFrame) -> None:
        if df.empty:
            return
        desc = df["weight"].describe(percentiles=_PERCENTILES).to_dict()
        self._logger.log(
            "[Diag][Weight] " + " ".join(f"{k}={float(v):.3f}" for k, v in desc.items() if k != "count"),
            level="INFO",
        )

    def _log_short_edges(self, df: pd.DataFrame) -> None:
        if df.empty:
            return

        th = float(self._policy.short_edge_threshold_m)
        cand = df[df["weight"] < th].sort_values(["weight", "u", "v"])
        self._logger.log(f"[Diag][Risk] 짧은 간선 후보(<{th}m)={len(cand)}개", level="INFO")

        for _, r in cand.head(int(self._policy.top_n_suspects)).iterrows():
            self._logger.log(
                f"[Diag][RiskTop] 간선=({int(r['u'])},{int(r['v'])}) 가중치={float(r['weight']):.3f}m "
                f"차수=({int(r['deg_u'])},{int(r['deg_v'])})",
                level="DEBUG",
            )
