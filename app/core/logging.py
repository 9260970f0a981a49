"""
structlog 기반 로깅 설정

- 개발 환경: 컬러풀한 콘솔 출력, 프로덕션 환경: JSON 출력
- request_id(HTTP 요청), run_id(통계 집계 1회 실행) 자동 주입
- GitHub 토큰은 환경과 무관하게 키 이름 기준으로 가림
"""

import logging
import re
import sys

import structlog

from app.core.config import settings
from app.core.context import get_request_id, get_run_id

MASK = "***"

# 값 전체를 가리는 키
SENSITIVE_KEYS = frozenset({"token", "github_token", "authorization", "pat", "headers"})

# 문자열 안에 섞인 토큰, 프로덕션에서만 적용
SENSITIVE_PATTERNS = [
    (re.compile(r"(Bearer\s+)[^\s]+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"\b(gh[pousr]_)[A-Za-z0-9]+"), rf"\1{MASK}"),
    (re.compile(r"\b(github_pat_)\w+"), rf"\1{MASK}"),
    (re.compile(r"(token=)[^&\s]+", re.IGNORECASE), rf"\1{MASK}"),
]

NOISY_LOGGERS = ("httpcore", "httpx", "anyio", "slowapi")
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _mask_sensitive_data(value: str) -> str:
    """문자열 안의 GitHub 토큰 마스킹"""
    for pattern, replacement in SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """request_id와 run_id를 로그에 자동 주입"""
    for key, value in (("request_id", get_request_id()), ("run_id", get_run_id())):
        if value:
            event_dict.setdefault(key, value)
    return event_dict


def mask_sensitive_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """민감한 키는 항상, 문자열 안의 토큰은 프로덕션에서 마스킹"""
    for key, value in event_dict.items():
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = MASK
        elif settings.is_production and isinstance(value, str):
            event_dict[key] = _mask_sensitive_data(value)
    return event_dict


def _shared_processors() -> list:
    processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        mask_sensitive_processor,
    ]
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer():
    if settings.is_production:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(level: str | None = None) -> None:
    """structlog 설정 초기화, stdlib 로거 출력도 같은 포맷으로 렌더링"""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn 로그는 root 핸들러로 전달
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog 로거 반환"""
    return structlog.get_logger(name)
