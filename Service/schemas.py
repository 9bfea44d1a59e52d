"""
Service/schemas.py

입력 링과 오프셋 요청의 구조를 정의하고 커널 호출 전에 유효성을 검증하는 스키마 모듈입니다.
"""
from collections.abc import Sequence
from typing import List, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from Common.errors import InvalidArgumentError

M = TypeVar("M", bound=BaseModel)

MIN_RING_POINTS = 3

PointTuple = Tuple[float, float]


def _coerce_ring(value):
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [p.as_tuple() if hasattr(p, "as_tuple") else p for p in value]
    return value


def _check_consecutive_duplicates(ring: List[PointTuple], name: str) -> None:
    # 마지막 점과 첫 점 쌍까지 포함하여 길이 0 경계 엣지를 거부
    for i, point in enumerate(ring):
        if point == ring[(i + 1) % len(ring)]:
            raise ValueError(f"{name}에 연속된 중복 점이 있습니다: index={i}, point={point}")


class RingSetRequest(BaseModel):
    """
    스켈레톤 생성 요청을 위한 데이터 모델입니다. 모든 링은 시계 방향으로 전달됩니다.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    outer: List[PointTuple] = Field(..., description="외곽 링 (시계 방향)")
    holes: List[List[PointTuple]] = Field(default_factory=list, description="구멍 링 목록 (시계 방향)")

    @field_validator("outer", mode="before")
    @classmethod
    def coerce_outer(cls, v):
        return _coerce_ring(v)

    @field_validator("holes", mode="before")
    @classmethod
    def coerce_holes(cls, v):
        if v is None:
            return []
        if isinstance(v, Sequence) and not isinstance(v, (str, bytes)):
            return [_coerce_ring(ring) for ring in v]
        return v

    @field_validator("outer")
    @classmethod
    def validate_outer(cls, v: List[PointTuple]) -> List[PointTuple]:
        if not v:
            raise ValueError("외곽 링이 비어있습니다.")
        if len(v) < MIN_RING_POINTS:
            raise ValueError(f"외곽 링은 최소 {MIN_RING_POINTS}개의 점이 필요합니다: {len(v)}")
        _check_consecutive_duplicates(v, "외곽 링")
        return v

    @field_validator("holes")
    @classmethod
    def validate_holes(cls, v: List[List[PointTuple]]) -> List[List[PointTuple]]:
        for idx, ring in enumerate(v):
            if len(ring) < MIN_RING_POINTS:
                raise ValueError(f"구멍 링[{idx}]은 최소 {MIN_RING_POINTS}개의 점이 필요합니다: {len(ring)}")
            _check_consecutive_duplicates(ring, f"구멍 링[{idx}]")
        return v


class OffsetRequest(BaseModel):
    """
    오프셋 폴리곤 요청을 위한 데이터 모델입니다.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    distance: float = Field(..., gt=0.0, description="안쪽으로 수축할 거리 (0보다 커야 함)")


def parse_request(model: Type[M], **values) -> M:
    """
    요청 모델을 생성하고, 검증 실패 시 InvalidArgumentError 로 변환합니다.

    Raises:
        InvalidArgumentError: 입력값이 스키마를 만족하지 않는 경우
    """
    try:
        return model(**values)
    except ValidationError as e:
        raise InvalidArgumentError(f"{model.__name__} 검증 실패: {e}") from e
