"""
Service/skeleton_modules/classifier.py

커널이 반환한 평탄화 세그먼트 버퍼를 입력 정점 포함 여부에 따라 Border / Spoke / Skeleton 으로 분류하고
중복을 제거한 뒤, 하나의 정점 레지스트리를 공유하는 Edge 객체로 구체화합니다.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Sequence, Tuple

from Common.errors import DegenerateEdgeError, MalformedResultError
from Common.log import Log
from Service.config import BorderStrategy, SkeletonConfig
from .geometry import Edge, EdgeType, Point, Vertex, VertexRegistry, canonical_pair
from .ring_packer import PackedRings

Segment = Tuple[Point, Point]

SEGMENT_STRIDE = 4


@dataclass(frozen=True)
class ClassifiedEdges:
    """
    분류/중복 제거가 끝난 엣지 후보(좌표 쌍)입니다. 각 튜플은 삽입 순서를 유지합니다.
    spokes 는 항상 (입력 정점, 내부 정점) 방향입니다.
    """
    borders: Tuple[Segment, ...]
    spokes: Tuple[Segment, ...]
    skeleton: Tuple[Segment, ...]
    input_points: FrozenSet[Point]

    def by_type(self) -> Dict[EdgeType, Tuple[Segment, ...]]:
        return {
            EdgeType.BORDER: self.borders,
            EdgeType.SPOKE: self.spokes,
            EdgeType.SKELETON: self.skeleton,
        }


@dataclass
class MaterializedEdges:
    """ClassifiedEdges 를 구체화한 결과입니다. 모든 엣지 끝점은 registry 에 존재합니다."""
    registry: VertexRegistry
    edges: Dict[EdgeType, Tuple[Edge, ...]] = field(default_factory=dict)
    input_vertices: FrozenSet[Vertex] = frozenset()


def iter_segments(buffer: Sequence[float], stream: str) -> Iterator[Segment]:
    """
    (x1, y1, x2, y2) 4개 단위의 평탄화 버퍼를 세그먼트로 변환합니다.

    Raises:
        MalformedResultError: 버퍼 길이가 4의 배수가 아니거나 유한하지 않은 좌표가 있는 경우
    """
    if len(buffer) % SEGMENT_STRIDE != 0:
        raise MalformedResultError(f"{stream} 버퍼 길이가 4의 배수가 아닙니다: {len(buffer)}")

    for i in range(0, len(buffer), SEGMENT_STRIDE):
        x1, y1, x2, y2 = buffer[i:i + SEGMENT_STRIDE]
        if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
            raise MalformedResultError(f"{stream} 버퍼[{i // SEGMENT_STRIDE}]에 유한하지 않은 좌표가 있습니다.")
        yield Point(x1, y1), Point(x2, y2)


def materialize(classified: ClassifiedEdges) -> MaterializedEdges:
    """
    좌표 쌍 후보를 하나의 VertexRegistry 를 공유하는 Vertex/Edge 객체로 변환합니다.
    입력 정점을 먼저 등록하므로 엣지에 쓰이지 않는 입력 정점도 레지스트리에 포함됩니다.
    """
    registry = VertexRegistry()
    input_vertices = frozenset(registry.intern(p) for p in sorted(classified.input_points))

    result = MaterializedEdges(registry=registry, input_vertices=input_vertices)
    for edge_type, segments in classified.by_type().items():
        result.edges[edge_type] = tuple(
            Edge(registry.intern(a), registry.intern(b), edge_type) for a, b in segments
        )
    return result


class _Bucket:
    """정규 키 기준으로 중복을 제거하면서 삽입 순서를 유지하는 후보 모음입니다."""

    def __init__(self, edge_type: EdgeType):
        self.edge_type = edge_type
        self._items: Dict[Segment, Segment] = {}
        self.duplicates = 0

    def add(self, a: Point, b: Point) -> None:
        if a == b:
            raise DegenerateEdgeError(f"길이 0 {self.edge_type.value} 엣지: {a.as_tuple()}")
        key = canonical_pair(a, b)
        if key in self._items:
            self.duplicates += 1
            return
        self._items[key] = (a, b)

    def segments(self) -> Tuple[Segment, ...]:
        return tuple(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


class EdgeClassifier:
    """
    커널 세그먼트 스트림을 엣지 유형별로 분류합니다.

    - 두 끝점이 모두 입력 정점: Border 후보
    - 한 끝점만 입력 정점: Spoke (입력 정점이 시작점)
    - 입력 정점 없음: Skeleton
    """

    def __init__(self, logger: Log, config: SkeletonConfig):
        self._logger = logger
        self._config = config

    def classify(
        self,
        packed: PackedRings,
        skeleton_segments: Sequence[float],
        spoke_segments: Sequence[float],
    ) -> ClassifiedEdges:
        input_points = frozenset(p for ring in packed.caller_rings for p in ring)

        borders = _Bucket(EdgeType.BORDER)
        spokes = _Bucket(EdgeType.SPOKE)
        skeleton = _Bucket(EdgeType.SKELETON)
        kernel_borders = _Bucket(EdgeType.BORDER)

        mismatched = 0
        streams = (
            ("skeleton", skeleton_segments, EdgeType.SKELETON),
            ("spoke", spoke_segments, EdgeType.SPOKE),
        )
        for stream, buffer, expected in streams:
            for a, b in iter_segments(buffer, stream):
                a_in, b_in = a in input_points, b in input_points
                if a_in and b_in:
                    kernel_borders.add(a, b)
                    # 경계 세그먼트는 skeleton 스트림으로 오는 것이 정상
                    actual = EdgeType.SKELETON
                elif a_in:
                    spokes.add(a, b)
                    actual = EdgeType.SPOKE
                elif b_in:
                    spokes.add(b, a)
                    actual = EdgeType.SPOKE
                else:
                    skeleton.add(a, b)
                    actual = EdgeType.SKELETON

                if actual is not expected:
                    mismatched += 1

        if mismatched:
            self._logger.log(
                f"[Skeleton:Classify] 커널 스트림과 분류 결과가 다른 세그먼트 {mismatched}개",
                level="WARNING",
            )

        if self._config.border_strategy == BorderStrategy.RING_ADJACENCY:
            for ring in packed.caller_rings:
                for a, b in _ring_pairs(ring):
                    borders.add(a, b)
            if len(kernel_borders):
                self._logger.log(
                    f"[Skeleton:Classify] 커널 경계 세그먼트 {len(kernel_borders)}개 무시 (ring_adjacency)",
                    level="DEBUG",
                )
        else:
            borders = kernel_borders

        self._logger.log(
            f"[Skeleton:Classify] border={len(borders)}, spoke={len(spokes)}, skeleton={len(skeleton)}, "
            f"dup(border/spoke/skeleton)={borders.duplicates}/{spokes.duplicates}/{skeleton.duplicates}",
            level="DEBUG",
        )
        return ClassifiedEdges(
            borders=borders.segments(),
            spokes=spokes.segments(),
            skeleton=skeleton.segments(),
            input_points=input_points,
        )


def _ring_pairs(ring: Sequence[Point]) -> Iterable[Segment]:
    count = len(ring)
    if count < 2:
        return []
    pairs: List[Segment] = []
    for i in range(count):
        pairs.append((ring[i], ring[(i + 1) % count]))
    return pairs
