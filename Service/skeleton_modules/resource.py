"""
Service/skeleton_modules/resource.py

커널 스켈레톤 핸들의 수명을 관리하여, 명시적 해제/컨텍스트 종료/가비지 컬렉션/인터프리터 종료 중
가장 먼저 일어나는 시점에 정확히 한 번만 커널 해제가 호출되도록 보장합니다.
"""
from __future__ import annotations

import weakref
from typing import Any

from Common.errors import KernelError, ResourceError
from Common.log import Log
from .kernel.base import GeometryKernel


def _release(kernel: GeometryKernel, raw: Any, logger: Log) -> None:
    # finalize 콜백: 가드 객체(self)를 참조하면 GC 대상이 되지 않으므로 필요한 값만 전달받음
    try:
        kernel.release_skeleton(raw)
    except KernelError as e:
        logger.log(f"[Skeleton:Resource] 핸들 해제 실패: {raw!r} ({e})", level="ERROR")
        raise
    logger.log(f"[Skeleton:Resource] 핸들 해제: {raw!r}", level="DEBUG")


class KernelHandle:
    """
    Live → Released 두 상태만 가지는 커널 핸들 가드입니다. Released 상태에서의 release() 는 아무 일도 하지 않습니다.
    """

    def __init__(self, kernel: GeometryKernel, raw: Any, logger: Log):
        if raw is None:
            raise ResourceError("유효하지 않은(null) 커널 핸들입니다.")
        self._kernel = kernel
        self._raw = raw
        self._finalizer = weakref.finalize(self, _release, kernel, raw, logger)

    @property
    def is_live(self) -> bool:
        return self._finalizer.alive

    @property
    def kernel(self) -> GeometryKernel:
        return self._kernel

    def get(self) -> Any:
        """
        Raises:
            ResourceError: 이미 해제된 핸들인 경우
        """
        if not self._finalizer.alive:
            raise ResourceError("이미 해제된 스켈레톤 핸들입니다.")
        return self._raw

    def release(self) -> None:
        self._finalizer()

    def __repr__(self) -> str:
        state = "live" if self.is_live else "released"
        return f"KernelHandle({self._raw!r}, {state})"
