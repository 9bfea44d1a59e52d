"""
Service/container.py

애플리케이션의 모든 객체를 생성하고 의존성을 주입하여 실행 가능한 상태로 조립합니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from Common.log import Log

from Service.config import SkeletonConfig
from Service.skeleton_modules import EdgeClassifier, OffsetExtractor, ResultValidator, RingPacker
from Service.skeleton_modules.kernel import GeometryKernel, WavefrontKernel

from Service.skeleton_service import SkeletonService


@dataclass(frozen=True)
class BuiltApp:
    """조립이 완료된 애플리케이션 서비스 객체 묶음입니다."""
    skeleton_service: SkeletonService
    kernel: GeometryKernel
    config: SkeletonConfig


def build_app(
    logger: Log,
    config: Optional[SkeletonConfig] = None,
    kernel: Optional[GeometryKernel] = None,
) -> BuiltApp:
    """
    설정 로드 및 모든 내부 모듈의 의존성을 주입하여 BuiltApp 객체를 생성합니다.
    kernel 을 지정하지 않으면 설정값으로 기준 커널(WavefrontKernel)을 생성합니다.
    """
    skeleton_config = config or SkeletonConfig()

    if kernel is None:
        kernel = WavefrontKernel(
            logger,
            tolerance=skeleton_config.kernel_tolerance,
            mitre_limit=skeleton_config.offset_mitre_limit,
            emit_contour_edges=skeleton_config.kernel_emit_contour_edges,
        )

    packer = RingPacker(logger)
    classifier = EdgeClassifier(logger, skeleton_config)
    extractor = OffsetExtractor(logger, kernel)
    validator = ResultValidator(logger, skeleton_config)

    skeleton_service = SkeletonService(
        logger=logger,
        config=skeleton_config,
        kernel=kernel,
        packer=packer,
        classifier=classifier,
        extractor=extractor,
        validator=validator,
    )

    return BuiltApp(skeleton_service=skeleton_service, kernel=kernel, config=skeleton_config)
