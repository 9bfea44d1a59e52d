"""
Function/decorators.py

함수의 실행 시간 측정 및 예외 처리를 위한 데코레이터 모듈입니다.
"""
from __future__ import annotations

import functools
import logging
import time
import traceback
from typing import Any, Callable, ParamSpec, TypeVar, Optional

from Common.errors import InvalidArgumentError

P = ParamSpec("P")
R = TypeVar("R")


def _resolve_custom_logger(instance: Any) -> Optional[Any]:
    """
    인스턴스 내부에서 커스텀 로거 메서드 보유 여부를 확인하여 반환합니다.

    Args:
        instance (Any): 클래스 인스턴스(self)

    Returns:
        Optional[Any]: 로거 인스턴스 또는 None
    """
    if instance is None:
        return None

    if hasattr(instance, "_logger") and hasattr(getattr(instance, "_logger"), "log"):
        return getattr(instance, "_logger")

    if hasattr(instance, "logger") and hasattr(getattr(instance, "logger"), "log"):
        return getattr(instance, "logger")

    return None


def _emit(custom_logger: Optional[Any], msg: str, level: str) -> None:
    if custom_logger:
        custom_logger.log(msg, level=level)
    else:
        logging.log(getattr(logging, level), msg)


def log_execution_time(func: Callable[P, R]) -> Callable[P, R]:
    """
    함수의 시작과 종료 시점을 기록하고 실행 시간을 측정하는 데코레이터입니다.

    Returns:
        Callable: 데코레이트된 함수
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        instance = args[0] if args else None
        custom_logger = _resolve_custom_logger(instance)

        func_name = func.__qualname__
        start_time = time.perf_counter()

        _emit(custom_logger, f"▶ [시작] {func_name}", "DEBUG")

        result = func(*args, **kwargs)

        elapsed = time.perf_counter() - start_time
        msg = f"◀ [완료] {func_name} (소요 시간: {elapsed:.4f}초)"

        _emit(custom_logger, msg, "INFO")

        return result

    return wrapper


def safe_run(func: Callable[P, R]) -> Callable[P, R]:
    """
    함수 실행 중 발생하는 예외의 Traceback을 로그에 기록하고 예외를 재전파합니다.
    잘못된 입력(InvalidArgumentError)은 Traceback 없이 WARNING 으로 기록합니다.

    Returns:
        Callable: 데코레이트된 함수

    Raises:
        Exception: 원본 함수에서 발생한 예외
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        instance = args[0] if args else None
        custom_logger = _resolve_custom_logger(instance)

        try:
            return func(*args, **kwargs)
        except InvalidArgumentError as e:
            # 호출자 입력 오류는 Traceback 없이 경고로만 기록
            _emit(custom_logger, f"'{func.__qualname__}' 입력값 오류: {e}", "WARNING")
            raise
        except Exception:
            func_name = func.__qualname__
            tb_str = traceback.format_exc()
            log_msg = f"'{func_name}' 실행 중 치명적 오류 발생\n[Traceback]\n{tb_str}"
            _emit(custom_logger, log_msg, "ERROR")
            raise

    return wrapper