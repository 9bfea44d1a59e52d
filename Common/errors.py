"""
Common/errors.py

스켈레톤 그래프 생성 및 오프셋 추출 과정에서 발생하는 예외 계층을 정의합니다.
"""


class SkeletonError(Exception):
    """스켈레톤 모듈에서 발생하는 모든 예외의 기본 클래스입니다."""


class InvalidArgumentError(SkeletonError, ValueError):
    """커널 호출 전에 거부되는 잘못된 입력값(빈 외곽 링, 0 이하 오프셋 거리 등)입니다."""


class MalformedResultError(SkeletonError):
    """커널 결과 버퍼의 길이 또는 값이 약속된 형식과 다를 때 발생합니다."""


class DegenerateEdgeError(SkeletonError):
    """시작점과 끝점이 동일한 길이 0의 엣지가 분류 단계에서 발견되었을 때 발생합니다."""


class ResourceError(SkeletonError):
    """커널 호출 실패 또는 이미 해제된 핸들에 대한 질의 시 발생합니다."""


class KernelError(SkeletonError):
    """커널 구현 내부에서 연산을 완료하지 못했을 때 발생합니다."""
