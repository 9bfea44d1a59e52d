"""
Service/skeleton_modules/graph.py

분류된 Border / Spoke / Skeleton 엣지와 정점 레지스트리, 커널 핸들 가드를 소유하는 스켈레톤 그래프입니다.
"""
from __future__ import annotations

from typing import FrozenSet, List, Optional, Tuple

import networkx as nx

from Common.errors import ResourceError
from Common.log import Log
from Service.schemas import OffsetRequest, parse_request
from .classifier import ClassifiedEdges, MaterializedEdges, materialize
from .geometry import Edge, EdgeType, Point, Vertex
from .offset import OffsetExtractor
from .resource import KernelHandle


class SkeletonGraph:
    """
    생성 이후에는 핸들 상태(Live → Released)를 제외하고 변경되지 않습니다.

    with 블록으로 사용하면 블록 종료 시 커널 핸들이 해제되며,
    명시적 dispose() 없이 버려진 그래프도 가비지 컬렉션 시점에 한 번 해제됩니다.
    """

    def __init__(
        self,
        classified: ClassifiedEdges,
        logger: Log,
        extractor: Optional[OffsetExtractor] = None,
        handle: Optional[KernelHandle] = None,
    ):
        self._logger = logger
        self._extractor = extractor
        self._handle = handle

        built: MaterializedEdges = materialize(classified)
        self._registry = built.registry
        self._input_vertices = built.input_vertices
        self._borders = built.edges[EdgeType.BORDER]
        self._spokes = built.edges[EdgeType.SPOKE]
        self._skeleton = built.edges[EdgeType.SKELETON]

    @property
    def borders(self) -> Tuple[Edge, ...]:
        return self._borders

    @property
    def spokes(self) -> Tuple[Edge, ...]:
        return self._spokes

    @property
    def skeleton(self) -> Tuple[Edge, ...]:
        return self._skeleton

    def edges(self, edge_type: Optional[EdgeType] = None) -> Tuple[Edge, ...]:
        if edge_type is EdgeType.BORDER:
            return self._borders
        if edge_type is EdgeType.SPOKE:
            return self._spokes
        if edge_type is EdgeType.SKELETON:
            return self._skeleton
        return self._borders + self._spokes + self._skeleton

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(self._registry)

    @property
    def input_vertices(self) -> FrozenSet[Vertex]:
        return self._input_vertices

    def vertex_at(self, point) -> Optional[Vertex]:
        return self._registry.get(Point.of(point))

    @property
    def is_disposed(self) -> bool:
        return self._handle is None or not self._handle.is_live

    def offset(self, distance: float) -> List[List[Point]]:
        """
        경계에서 distance 만큼 안쪽으로 수축한 오프셋 폴리곤 목록을 반환합니다.
        distance 가 충분히 크면 빈 목록을 반환합니다.

        Raises:
            InvalidArgumentError: distance <= 0 또는 유한하지 않은 값
            ResourceError: 핸들이 없거나(복제본) 이미 해제된 경우
        """
        # 거리 검증이 핸들 상태 검사보다 먼저
        request = parse_request(OffsetRequest, distance=distance)
        if self._handle is None or self._extractor is None:
            raise ResourceError("커널 핸들을 소유하지 않은 그래프(복제본)에서는 오프셋을 계산할 수 없습니다.")
        return self._extractor.extract(self._handle.get(), request.distance)

    def dispose(self) -> None:
        if self._handle is not None:
            self._handle.release()

    def __enter__(self) -> "SkeletonGraph":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def clone(self) -> "SkeletonGraph":
        """
        엣지 끝점 좌표로부터 새로운 Vertex/Edge 객체를 다시 구성합니다. 복제본은 커널 핸들을 소유하지 않습니다.
        """
        snapshot = ClassifiedEdges(
            borders=tuple(e.positions for e in self._borders),
            spokes=tuple(e.positions for e in self._spokes),
            skeleton=tuple(e.positions for e in self._skeleton),
            input_points=frozenset(v.position for v in self._input_vertices),
        )
        return SkeletonGraph(snapshot, self._logger)

    def to_networkx(self) -> nx.Graph:
        """(x, y) 튜플을 노드로, edge_type 을 엣지 속성으로 가지는 networkx 무방향 그래프를 생성합니다."""
        graph = nx.Graph()
        for vertex in self._registry:
            graph.add_node(vertex.position.as_tuple(), is_input=vertex in self._input_vertices)
        for edge in self.edges():
            a, b = edge.positions
            graph.add_edge(a.as_tuple(), b.as_tuple(), edge_type=edge.edge_type.value)
        return graph

    def __repr__(self) -> str:
        return (
            f"SkeletonGraph(borders={len(self._borders)}, spokes={len(self._spokes)}, "
            f"skeleton={len(self._skeleton)}, disposed={self.is_disposed})"
        )
