"""
Service/skeleton_modules/ring_packer.py

호출자가 전달한 외곽 링과 구멍(hole) 링을 커널이 요구하는 단일 연속 버퍼와 링 기술자(descriptor)로 변환합니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from Common.log import Log
from Common.errors import InvalidArgumentError
from .geometry import Point


@dataclass(frozen=True)
class RingDescriptor:
    """연속 버퍼 안에서 하나의 링이 차지하는 구간(offset, count)입니다."""
    offset: int
    count: int

    def slice(self, points: Sequence[Point]) -> Tuple[Point, ...]:
        return tuple(points[self.offset:self.offset + self.count])


@dataclass(frozen=True)
class PackedRings:
    """
    커널 입력용으로 정렬된 점 버퍼입니다.

    points 는 외곽 링(반시계 방향으로 뒤집힌 상태)과 구멍 링(시계 방향 유지)을 순서대로 이어 붙인 것이며,
    rings[0] 이 외곽 링입니다. outer/holes 는 호출자가 넘긴 원래 순서의 링입니다.
    """
    points: Tuple[Point, ...]
    rings: Tuple[RingDescriptor, ...]
    outer: Tuple[Point, ...]
    holes: Tuple[Tuple[Point, ...], ...]

    @property
    def caller_rings(self) -> Tuple[Tuple[Point, ...], ...]:
        return (self.outer,) + self.holes

    def flat_coordinates(self) -> Tuple[float, ...]:
        """x0, y0, x1, y1, ... 형태의 평탄화된 좌표열을 반환합니다."""
        return tuple(c for p in self.points for c in (p.x, p.y))


class RingPacker:
    """
    외곽 링은 시계 방향으로 입력받아 역순(반시계)으로, 구멍 링은 시계 방향 그대로 버퍼에 복사합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def pack(
        self,
        outer: Optional[Sequence],
        holes: Optional[Iterable[Sequence]] = None,
    ) -> PackedRings:
        if outer is None:
            raise InvalidArgumentError("외곽 링이 지정되지 않았습니다.")
        outer_ring = tuple(Point.of(p) for p in outer)
        if not outer_ring:
            raise InvalidArgumentError("외곽 링이 비어있습니다.")

        hole_rings = tuple(tuple(Point.of(p) for p in hole) for hole in (holes or ()))

        # 커널의 외곽 경계 규약은 반시계 방향이므로 역순으로 복사
        points = list(reversed(outer_ring))
        descriptors = [RingDescriptor(offset=0, count=len(outer_ring))]

        # 구멍은 시계 방향 그대로 전달
        for hole in hole_rings:
            descriptors.append(RingDescriptor(offset=len(points), count=len(hole)))
            points.extend(hole)

        self._logger.log(
            f"[Skeleton:Pack] outer={len(outer_ring)}, holes={len(hole_rings)}, points={len(points)}",
            level="DEBUG",
        )
        return PackedRings(
            points=tuple(points),
            rings=tuple(descriptors),
            outer=outer_ring,
            holes=hole_rings,
        )
