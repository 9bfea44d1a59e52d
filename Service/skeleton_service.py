"""
Service/skeleton_service.py

입력 링 검증 → 링 패킹 → 커널 스켈레톤 생성 → 엣지 분류 → 핸들 가드 생성의 전체 공정을 제어하는 서비스 모듈입니다.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from Common.errors import KernelError, ResourceError
from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import SkeletonConfig
from Service.schemas import RingSetRequest, parse_request
from Service.skeleton_modules import (
    EdgeClassifier,
    KernelHandle,
    OffsetExtractor,
    ResultValidator,
    RingPacker,
    SkeletonGraph,
)
from Service.skeleton_modules.kernel import GeometryKernel, SkeletonResult


class SkeletonService:
    """
    스켈레톤 그래프 생성을 관리하는 메인 서비스 클래스입니다.
    생성은 전부 성공하거나 전부 실패하며, 실패 시 커널 핸들은 해제된 상태로 남습니다.
    """

    def __init__(
        self,
        logger: Log,
        config: SkeletonConfig,
        kernel: GeometryKernel,
        packer: RingPacker,
        classifier: EdgeClassifier,
        extractor: OffsetExtractor,
        validator: Optional[ResultValidator] = None,
    ):
        self._logger = logger
        self._config = config
        self._kernel = kernel
        self._packer = packer
        self._classifier = classifier
        self._extractor = extractor
        self._validator = validator
        self._last_stage_meta: List[Dict[str, Any]] = []

    @safe_run
    @log_execution_time
    def generate(self, outer: Sequence, holes: Optional[Iterable[Sequence]] = None) -> SkeletonGraph:
        """
        시계 방향 외곽 링과 구멍 링 목록으로 스켈레톤 그래프를 생성합니다.

        Raises:
            InvalidArgumentError: 외곽 링이 없거나 비어있는 경우, 점이 3개 미만인 링, 유한하지 않은 좌표
            ResourceError: 커널이 스켈레톤 생성에 실패한 경우
            MalformedResultError: 커널 세그먼트 버퍼 형식이 잘못된 경우
            DegenerateEdgeError: 길이 0 엣지가 발견된 경우
        """
        self._last_stage_meta = []
        request = parse_request(RingSetRequest, outer=outer, holes=holes)

        packed = self._packer.pack(request.outer, request.holes)
        self._log_stage_meta("00_pack", {"rings": len(packed.rings), "points": len(packed.points)})

        result = self._generate_raw(packed)
        self._log_stage_meta(
            "01_kernel",
            {
                "skeleton_segments": len(result.skeleton_segments) // 4,
                "spoke_segments": len(result.spoke_segments) // 4,
            },
        )

        try:
            classified = self._classifier.classify(packed, result.skeleton_segments, result.spoke_segments)
        except Exception:
            # 가드 생성 전 실패: 원시 핸들을 직접 해제
            self._kernel.release_skeleton(result.handle)
            raise

        handle = KernelHandle(self._kernel, result.handle, self._logger)
        try:
            graph = SkeletonGraph(classified, self._logger, extractor=self._extractor, handle=handle)
        except Exception:
            handle.release()
            raise
        self._log_stage_meta(
            "02_classify",
            {
                "border": len(graph.borders),
                "spoke": len(graph.spokes),
                "skeleton": len(graph.skeleton),
                "vertices": len(graph.vertices),
            },
        )

        if self._validator is not None and self._config.validate_result:
            try:
                issues = self._validator.execute(graph, packed)
            except Exception:
                graph.dispose()
                raise
            self._log_stage_meta("03_validate", {"issues": len(issues)})

        return graph

    def get_last_stage_meta(self) -> List[Dict[str, Any]]:
        return [dict(item) for item in self._last_stage_meta]

    def _generate_raw(self, packed) -> SkeletonResult:
        try:
            result = self._kernel.generate_skeleton(packed.points, packed.rings)
        except KernelError as e:
            raise ResourceError(f"커널 스켈레톤 생성 실패: {e}") from e

        if result is None or result.handle is None:
            raise ResourceError("커널 스켈레톤 생성 실패: 유효하지 않은(null) 핸들이 반환되었습니다.")
        return result

    def _log_stage_meta(self, stage: str, meta: Dict[str, object]) -> None:
        self._last_stage_meta.append({"stage": stage, "meta": dict(meta)})
        items = ", ".join([f"{k}={v}" for k, v in meta.items()])
        self._logger.log(f"[Skeleton:Stage:{stage}] {items}", level="INFO")
