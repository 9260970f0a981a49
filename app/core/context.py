"""
요청 및 집계 실행 컨텍스트 관리 모듈

contextvars를 사용하여 비동기 환경에서도 안전하게 request_id와 run_id를 관리
"""

import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


def get_request_id() -> str | None:
    """현재 컨텍스트의 request_id 반환"""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """
    request_id 설정

    인자가 없으면 8자리 UUID 자동 생성
    """
    if request_id is None:
        request_id = _short_id()
    request_id_var.set(request_id)
    return request_id


def get_run_id() -> str | None:
    """현재 컨텍스트의 run_id 반환"""
    return run_id_var.get()


def set_run_id(run_id: str | None = None) -> str:
    """run_id 설정, 통계 집계 1회 실행마다 새로 발급"""
    if run_id is None:
        run_id = _short_id()
    run_id_var.set(run_id)
    return run_id


def clear_context() -> None:
    """모든 컨텍스트 변수 초기화"""
    request_id_var.set(None)
    run_id_var.set(None)
