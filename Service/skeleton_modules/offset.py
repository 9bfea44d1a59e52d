"""
Service/skeleton_modules/offset.py

살아있는 스켈레톤 핸들에 대해 커널 오프셋을 요청하고, 평탄화된 결과 버퍼를 폴리곤(Point 리스트) 목록으로 복사합니다.
"""
from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Any, Iterator, List

from Common.errors import KernelError, MalformedResultError, ResourceError
from Common.log import Log
from Service.schemas import OffsetRequest, parse_request
from .geometry import Point
from .kernel.base import GeometryKernel, OffsetResult

Polygon = List[Point]


class OffsetExtractor:
    """
    커널 오프셋 결과는 복사 성공 여부와 관계없이 항상 해제됩니다.
    반환 순서는 커널의 방출 순서를 따르며, 각 폴리곤은 닫는 중복점을 포함하지 않습니다.
    """

    def __init__(self, logger: Log, kernel: GeometryKernel):
        self._logger = logger
        self._kernel = kernel

    def extract(self, handle: Any, distance: float) -> List[Polygon]:
        """
        Raises:
            InvalidArgumentError: distance 가 유한한 양수가 아닌 경우 (커널 호출 전)
            ResourceError: 커널이 오프셋 계산에 실패한 경우
            MalformedResultError: 결과 버퍼 길이가 폴리곤 길이 합과 맞지 않는 경우
        """
        request = parse_request(OffsetRequest, distance=distance)

        with self._acquire(handle, request.distance) as result:
            polygons = self._copy(result)

        self._logger.log(
            f"[Skeleton:Offset] distance={request.distance}, polygons={len(polygons)}, "
            f"points={sum(len(p) for p in polygons)}",
            level="DEBUG",
        )
        return polygons

    @contextmanager
    def _acquire(self, handle: Any, distance: float) -> Iterator[OffsetResult]:
        try:
            result = self._kernel.compute_offset(handle, distance)
        except KernelError as e:
            raise ResourceError(f"오프셋 계산 실패 (distance={distance}): {e}") from e
        if result is None:
            raise ResourceError(f"커널이 오프셋 결과를 반환하지 않았습니다 (distance={distance}).")

        try:
            yield result
        finally:
            self._kernel.release_offset(result)

    def _copy(self, result: OffsetResult) -> List[Polygon]:
        points, lengths = result.points, result.lengths
        if any(n < 0 for n in lengths):
            raise MalformedResultError(f"음수 폴리곤 길이가 포함되어 있습니다: {list(lengths)}")

        expected = 2 * sum(lengths)
        if len(points) != expected:
            raise MalformedResultError(f"오프셋 버퍼 길이 불일치: expected={expected}, actual={len(points)}")

        polygons: List[Polygon] = []
        cursor = 0
        for n in lengths:
            ring: Polygon = []
            for _ in range(n):
                x, y = points[cursor], points[cursor + 1]
                if not (math.isfinite(x) and math.isfinite(y)):
                    raise MalformedResultError(f"오프셋 버퍼[{cursor}]에 유한하지 않은 좌표가 있습니다.")
                ring.append(Point(x, y))
                cursor += 2
            polygons.append(ring)
        return polygons
