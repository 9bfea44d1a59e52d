"""
Service/skeleton_modules/validator.py

생성된 스켈레톤 그래프의 연결성과 입력 경계 대비 위치를 검사하고 리스크 요소를 로깅하는 품질 보증(QA) 모듈입니다.
"""
from __future__ import annotations

from typing import List

import networkx as nx
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon

from Common.log import Log
from Service.config import SkeletonConfig
from .graph import SkeletonGraph
from .ring_packer import PackedRings


class ResultValidator:
    """
    그래프를 변경하지 않고 분석 결과만 로그로 출력합니다. 발견된 문제 목록을 반환합니다.
    """
    def __init__(self, logger: Log, config: SkeletonConfig):
        self._logger = logger
        self._config = config

    def execute(self, graph: SkeletonGraph, packed: PackedRings) -> List[str]:
        if not graph.edges():
            self._logger.log("[Validator] 검증 실패: 그래프에 엣지가 없습니다.", level="WARNING")
            return ["그래프에 엣지가 없습니다."]

        self._logger.log("=== 스켈레톤 그래프 품질 검증(QA) 시작 ===", level="DEBUG")

        nx_graph = graph.to_networkx()
        errors: List[str] = []

        self._check_connectivity(nx_graph, errors)
        self._check_spoke_coverage(graph, errors)
        self._check_containment(nx_graph, packed, errors)

        if errors:
            self._logger.log(f"[Validator] 검증 완료: {len(errors)}개의 잠재적 위험 요소가 발견되었습니다.", level="WARNING")
            for err in errors[:5]:
                self._logger.log(f"  - {err}", level="WARNING")
        else:
            self._logger.log("[Validator] 검증 완료: 모든 품질 기준을 통과했습니다.", level="INFO")
        return errors

    def _check_connectivity(self, nx_graph: nx.Graph, errors: list) -> None:
        """Border/Spoke/Skeleton 전체가 하나의 연결 요소를 이루는지 확인합니다."""
        components = list(nx.connected_components(nx_graph))
        self._logger.log(f"[Validator] 네트워크 분리 그룹 수: {len(components)}개", level="DEBUG")

        if len(components) > 1:
            sizes = sorted([len(c) for c in components], reverse=True)
            self._logger.log(f"[Validator] 각 그룹별 노드 수: {sizes}", level="DEBUG")
            errors.append(f"그래프가 {len(components)}개의 파편으로 끊어져 있습니다.")

    def _check_spoke_coverage(self, graph: SkeletonGraph, errors: list) -> None:
        """모든 입력 정점에서 최소 하나의 Spoke 가 시작하는지 확인합니다."""
        with_spoke = {e.start for e in graph.spokes}
        missing = [v for v in graph.input_vertices if v not in with_spoke]
        if missing:
            sample = sorted(v.position.as_tuple() for v in missing)[:3]
            errors.append(f"Spoke 가 없는 입력 정점 {len(missing)}개 (예: {sample})")

    def _check_containment(self, nx_graph: nx.Graph, packed: PackedRings, errors: list) -> None:
        """입력 정점이 아닌 스켈레톤 노드가 입력 폴리곤 내부(경계 포함)에 있는지 확인합니다."""
        try:
            polygon = Polygon(
                [p.as_tuple() for p in packed.outer],
                [[p.as_tuple() for p in hole] for hole in packed.holes],
            )
        except ValueError as e:
            self._logger.log(f"[Validator] 폴리곤 생성 실패로 포함 검증을 스킵합니다: {e}", level="WARNING")
            return

        if not polygon.is_valid:
            self._logger.log("[Validator] 입력 폴리곤이 유효하지 않아 포함 검증을 스킵합니다.", level="WARNING")
            return

        tolerance = max(self._config.kernel_tolerance * 1e3 * max(polygon.length, 1.0), 1e-9)
        zone = polygon.buffer(tolerance)
        interior = [n for n, d in nx_graph.nodes(data=True) if not d.get("is_input")]
        outside = [n for n in interior if not zone.covers(ShapelyPoint(n))]
        if outside:
            errors.append(f"입력 폴리곤 밖에 위치한 스켈레톤 노드 {len(outside)}개 (예: {outside[:3]})")
