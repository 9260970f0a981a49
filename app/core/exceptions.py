from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    GITHUB_RATE_LIMITED = "GITHUB_RATE_LIMITED"
    GITHUB_UNAUTHORIZED = "GITHUB_UNAUTHORIZED"
    GITHUB_GRAPHQL_ERROR = "GITHUB_GRAPHQL_ERROR"
    GITHUB_NETWORK_ERROR = "GITHUB_NETWORK_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


RATE_LIMITED_MESSAGE = "GitHub API 요청 한도를 초과했습니다. 잠시 후 다시 시도해주세요"
UNAUTHORIZED_MESSAGE = "GitHub 인증에 실패했습니다. 토큰 설정을 확인해주세요"
NETWORK_ERROR_MESSAGE = "GitHub 데이터를 가져오지 못했습니다. 네트워크 연결을 확인해주세요"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class GitHubError(CustomException):
    """GitHub 통계 집계 중 발생하는 도메인 에러

    retryable이 True이면 같은 요청을 처음부터 다시 실행해볼 수 있음
    """

    retryable: bool = False


class GitHubRateLimitedError(GitHubError):
    retryable = True

    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=429,
            error_code=ErrorCode.GITHUB_RATE_LIMITED,
            message=RATE_LIMITED_MESSAGE,
            detail=detail,
        )


class GitHubUnauthorizedError(GitHubError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_UNAUTHORIZED,
            message=UNAUTHORIZED_MESSAGE,
            detail=detail,
        )


class GitHubGraphQLError(GitHubError):
    """GraphQL 응답의 첫 번째 에러 메시지를 그대로 전달"""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_GRAPHQL_ERROR,
            message=message,
            detail=detail,
        )


class GitHubNetworkError(GitHubError):
    retryable = True

    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_NETWORK_ERROR,
            message=NETWORK_ERROR_MESSAGE,
            detail=detail,
        )


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error_code": exc.error_code,
            "message": exc.message,
        }
        if isinstance(exc, GitHubError):
            content["retryable"] = exc.retryable
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )
