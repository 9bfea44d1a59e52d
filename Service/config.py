"""
Service/config.py

스켈레톤 그래프 생성 파이프라인의 동작을 제어하는 설정 모듈입니다.
"""
from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BorderStrategy(str, Enum):
    """Border 엣지를 도출하는 방식입니다."""
    RING_ADJACENCY = "ring_adjacency"
    KERNEL_SEGMENTS = "kernel_segments"


class SkeletonConfig(BaseSettings):
    """
    스켈레톤 파이프라인의 핵심 파라미터를 정의하는 설정 클래스입니다.
    """

    border_strategy: BorderStrategy = Field(
        default=BorderStrategy.RING_ADJACENCY,
        description="Border 엣지 도출 방식: 입력 링 인접 관계(권장) 또는 커널 세그먼트"
    )

    kernel_tolerance: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="기준 커널의 노드 병합 허용 오차 (입력 범위 대비 상대값)"
    )

    kernel_emit_contour_edges: bool = Field(
        default=False,
        description="기준 커널이 외곽/구멍 경계 세그먼트도 skeleton 스트림에 포함할지 여부"
    )

    offset_mitre_limit: float = Field(
        default=1000.0,
        ge=1.0,
        description="오프셋 계산 시 마이터 접합 한계값"
    )

    validate_result: bool = Field(
        default=True,
        description="그래프 생성 직후 품질 검증(QA) 로그 출력 여부"
    )

    model_config = SettingsConfigDict(
        env_prefix="SKELETON_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
