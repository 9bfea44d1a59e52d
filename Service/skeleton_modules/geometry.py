"""
Service/skeleton_modules/geometry.py

스켈레톤 그래프를 구성하는 좌표(Point), 정점(Vertex), 엣지(Edge) 타입과 정점 레지스트리를 정의합니다.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from Common.errors import DegenerateEdgeError


@dataclass(frozen=True, order=True)
class Point:
    """
    불변 2D 좌표입니다. 허용 오차 없이 필드 값 그대로 비교/해시하며 (x, y) 사전식 순서를 가집니다.
    """
    x: float
    y: float

    def __post_init__(self) -> None:
        # -0.0 과 0.0 을 같은 키로 취급
        object.__setattr__(self, "x", float(self.x) + 0.0)
        object.__setattr__(self, "y", float(self.y) + 0.0)

    @classmethod
    def of(cls, value) -> "Point":
        """Point 또는 (x, y) 형태의 값을 Point 로 변환합니다."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(x, y)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


class EdgeType(Enum):
    SKELETON = "skeleton"
    SPOKE = "spoke"
    BORDER = "border"


class Vertex:
    """
    하나의 좌표를 감싸는 정점입니다. 인접 엣지는 약한 참조로만 색인하며 소유하지 않습니다.
    """

    __slots__ = ("_position", "_edges", "__weakref__")

    def __init__(self, position: Point):
        self._position = position
        self._edges: "weakref.WeakSet[Edge]" = weakref.WeakSet()

    @property
    def position(self) -> Point:
        return self._position

    @property
    def edges(self) -> Tuple["Edge", ...]:
        return tuple(self._edges)

    @property
    def degree(self) -> int:
        return len(self._edges)

    def add(self, edge: "Edge") -> None:
        """
        엣지를 인접 목록에 등록합니다.

        Raises:
            ValueError: 엣지가 이 정점에서 시작하거나 끝나지 않는 경우
        """
        if edge.start is not self and edge.end is not self:
            raise ValueError("정점에 연결되는 엣지는 해당 정점에서 시작하거나 끝나야 합니다.")
        self._edges.add(edge)

    def __repr__(self) -> str:
        return f"Vertex({self._position.x}, {self._position.y})"


class Edge:
    """
    두 정점과 엣지 유형으로 이루어진 불변 엣지입니다. 생성 시 양 끝 정점에 자신을 등록합니다.
    """

    __slots__ = ("_start", "_end", "_type", "__weakref__")

    def __init__(self, start: Vertex, end: Vertex, edge_type: EdgeType):
        if start is end or start.position == end.position:
            raise DegenerateEdgeError(f"길이 0 엣지는 허용되지 않습니다: {start.position} ({edge_type.value})")
        self._start = start
        self._end = end
        self._type = edge_type

        start.add(self)
        end.add(self)

    @property
    def start(self) -> Vertex:
        return self._start

    @property
    def end(self) -> Vertex:
        return self._end

    @property
    def edge_type(self) -> EdgeType:
        return self._type

    @property
    def positions(self) -> Tuple[Point, Point]:
        return self._start.position, self._end.position

    @property
    def key(self) -> Tuple[Point, Point]:
        """방향과 무관한 정규 키 (사전식으로 작은 좌표가 먼저)."""
        return canonical_pair(self._start.position, self._end.position)

    def __repr__(self) -> str:
        return f"Edge({self._type.value}: {self._start.position.as_tuple()} -> {self._end.position.as_tuple()})"


def canonical_pair(a: Point, b: Point) -> Tuple[Point, Point]:
    return (a, b) if a <= b else (b, a)


class VertexRegistry:
    """
    그래프 단위로 좌표를 고유한 Vertex 인스턴스로 인턴(intern)합니다.
    """

    def __init__(self):
        self._vertices: Dict[Point, Vertex] = {}

    def intern(self, point: Point) -> Vertex:
        vertex = self._vertices.get(point)
        if vertex is None:
            vertex = Vertex(point)
            self._vertices[point] = vertex
        return vertex

    def get(self, point: Point) -> Optional[Vertex]:
        return self._vertices.get(point)

    def __contains__(self, point: object) -> bool:
        return point in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())
