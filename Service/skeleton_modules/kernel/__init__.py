"""
Service/skeleton_modules/kernel/__init__.py

외부 기하 커널 인터페이스와 프로세스 내 기준 커널 구현을 외부로 노출합니다.
"""
from .base import GeometryKernel, OffsetResult, SkeletonResult
from .wavefront import StraightSkeletonSolver
from .wavefront_kernel import WavefrontKernel

__all__ = [
    "GeometryKernel",
    "OffsetResult",
    "SkeletonResult",
    "StraightSkeletonSolver",
    "WavefrontKernel",
]
