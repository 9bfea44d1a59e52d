"""
Service/skeleton_modules/kernel/base.py

코어가 외부 기하 커널에 요구하는 최소 호출 규약(스켈레톤 생성/해제, 오프셋 계산/해제)을 정의합니다.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from ..geometry import Point
from ..ring_packer import RingDescriptor


@dataclass(frozen=True)
class SkeletonResult:
    """
    GenerateSkeleton 호출 결과입니다.

    skeleton_segments / spoke_segments 는 (x1, y1, x2, y2) 4개 단위의 평탄화된 실수 배열입니다.
    handle 이 None 이면 커널 생성 실패를 의미합니다.
    """
    handle: Any
    skeleton_segments: Tuple[float, ...]
    spoke_segments: Tuple[float, ...]


@dataclass(frozen=True)
class OffsetResult:
    """
    ComputeOffset 호출 결과 토큰입니다.

    points 는 모든 폴리곤의 (x, y) 좌표를 이어 붙인 평탄화 배열이고,
    lengths 는 폴리곤별 점 개수입니다.
    """
    points: Tuple[float, ...]
    lengths: Tuple[int, ...]


class GeometryKernel(ABC):
    """
    직선 스켈레톤과 오프셋 폴리곤을 계산하는 외부 커널의 추상 인터페이스입니다.
    커널은 스레드 안전하지 않으며, 동일 핸들에 대한 동시 호출은 호출자가 직렬화해야 합니다.
    """

    @abstractmethod
    def generate_skeleton(self, points: Sequence[Point], rings: Sequence[RingDescriptor]) -> SkeletonResult:
        """연속 점 버퍼와 링 기술자(외곽 링이 첫 번째)로 스켈레톤을 생성합니다."""

    @abstractmethod
    def release_skeleton(self, handle: Any) -> None:
        """핸들에 연결된 커널 측 상태를 해제합니다. 핸들당 최대 한 번만 호출되어야 합니다."""

    @abstractmethod
    def compute_offset(self, handle: Any, distance: float) -> OffsetResult:
        """distance(> 0) 만큼 안쪽으로 수축한 오프셋 폴리곤을 계산합니다."""

    @abstractmethod
    def release_offset(self, result: OffsetResult) -> None:
        """compute_offset 이 할당한 결과를 해제합니다."""
