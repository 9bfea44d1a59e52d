"""
Service/skeleton_modules/kernel/wavefront_kernel.py

파면 전파 기반 스켈레톤 계산과 shapely 마이터(mitre) 버퍼 기반 오프셋을 제공하는 프로세스 내 기준 커널입니다.
"""
from __future__ import annotations

import itertools
from typing import Any, Dict, List, Sequence, Set

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.polygon import orient

from Common.log import Log
from Common.errors import KernelError
from ..geometry import Point
from ..ring_packer import RingDescriptor
from .base import GeometryKernel, OffsetResult, SkeletonResult
from .wavefront import StraightSkeletonSolver

DEFAULT_MITRE_LIMIT = 1000.0


class WavefrontKernel(GeometryKernel):
    """
    스켈레톤 호를 입력 정점 포함 여부에 따라 spoke/skeleton 두 스트림으로 나누어 반환합니다.
    핸들은 커널 내부 상태(오프셋 계산용 폴리곤)를 가리키는 정수 식별자입니다.
    """

    def __init__(
        self,
        logger: Log,
        tolerance: float = 1e-9,
        mitre_limit: float = DEFAULT_MITRE_LIMIT,
        emit_contour_edges: bool = False,
    ):
        self._logger = logger
        self._tolerance = tolerance
        self._mitre_limit = mitre_limit
        self._emit_contour_edges = emit_contour_edges
        self._ids = itertools.count(1)
        self._handles: Dict[int, Polygon] = {}
        self._offsets: Dict[int, OffsetResult] = {}
        self._released_handles: Set[int] = set()

    @property
    def live_handles(self) -> int:
        return len(self._handles)

    @property
    def live_offsets(self) -> int:
        return len(self._offsets)

    def generate_skeleton(self, points: Sequence[Point], rings: Sequence[RingDescriptor]) -> SkeletonResult:
        ring_coords = [[p.as_tuple() for p in ring.slice(points)] for ring in rings]
        try:
            arcs = StraightSkeletonSolver(ring_coords, self._tolerance).solve()
            polygon = Polygon(ring_coords[0], ring_coords[1:])
        except (KernelError, ValueError) as e:
            self._logger.log(f"[Kernel] 스켈레톤 생성 실패: {e}", level="ERROR")
            return SkeletonResult(handle=None, skeleton_segments=(), spoke_segments=())

        inputs = {p for ring in ring_coords for p in ring}
        skeleton: List[float] = []
        spokes: List[float] = []
        for a, b in arcs:
            a_in, b_in = a in inputs, b in inputs
            if a_in and not b_in:
                spokes.extend((a[0], a[1], b[0], b[1]))
            elif b_in and not a_in:
                spokes.extend((b[0], b[1], a[0], a[1]))
            else:
                skeleton.extend((a[0], a[1], b[0], b[1]))

        if self._emit_contour_edges:
            for ring in ring_coords:
                for i, a in enumerate(ring):
                    b = ring[(i + 1) % len(ring)]
                    skeleton.extend((a[0], a[1], b[0], b[1]))

        handle = next(self._ids)
        self._handles[handle] = polygon
        self._logger.log(
            f"[Kernel] 스켈레톤 생성: handle={handle}, skeleton={len(skeleton) // 4}, spokes={len(spokes) // 4}",
            level="DEBUG",
        )
        return SkeletonResult(handle=handle, skeleton_segments=tuple(skeleton), spoke_segments=tuple(spokes))

    def release_skeleton(self, handle: Any) -> None:
        if handle not in self._handles:
            reason = "이미 해제된" if handle in self._released_handles else "알 수 없는"
            raise KernelError(f"{reason} 스켈레톤 핸들입니다: {handle!r}")
        del self._handles[handle]
        self._released_handles.add(handle)

    def compute_offset(self, handle: Any, distance: float) -> OffsetResult:
        polygon = self._handles.get(handle)
        if polygon is None:
            raise KernelError(f"유효하지 않은 스켈레톤 핸들입니다: {handle!r}")
        if not distance > 0.0:
            raise KernelError(f"오프셋 거리는 0보다 커야 합니다: {distance}")

        shrunk = polygon.buffer(-distance, join_style="mitre", mitre_limit=self._mitre_limit)
        coords: List[float] = []
        lengths: List[int] = []
        for part in self._to_polygons(shrunk):
            part = orient(part, sign=1.0)
            for ring in [part.exterior, *part.interiors]:
                ring_pts = list(ring.coords)[:-1]
                lengths.append(len(ring_pts))
                for x, y in ring_pts:
                    coords.extend((float(x), float(y)))

        result = OffsetResult(points=tuple(coords), lengths=tuple(lengths))
        self._offsets[id(result)] = result
        return result

    def release_offset(self, result: OffsetResult) -> None:
        if self._offsets.pop(id(result), None) is None:
            raise KernelError("이미 해제되었거나 알 수 없는 오프셋 결과입니다.")

    def _to_polygons(self, geom: Any) -> List[Polygon]:
        if geom is None or geom.is_empty:
            return []
        if isinstance(geom, Polygon):
            parts = [geom]
        elif isinstance(geom, MultiPolygon):
            parts = list(geom.geoms)
        else:
            parts = [g for g in getattr(geom, "geoms", []) if isinstance(g, Polygon)]
        return [p for p in parts if not p.is_empty and p.area > 0.0]
