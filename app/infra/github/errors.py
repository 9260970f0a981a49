from app.core.exceptions import (
    GitHubError,
    GitHubGraphQLError,
    GitHubNetworkError,
    GitHubRateLimitedError,
    GitHubUnauthorizedError,
)

GENERIC_HTTP_FAILURE_PREFIX = "http failure"


def _is_generic_http_failure(message: str) -> bool:
    return message.lower().startswith(GENERIC_HTTP_FAILURE_PREFIX)


def classify_error(status_code: int | None = None, message: str | None = None) -> GitHubError:
    """HTTP 상태 코드와 GraphQL 에러 메시지를 도메인 에러로 변환

    상태 코드를 먼저 확인하고, 알 수 없는 상태 코드이면 GraphQL 메시지를 확인.
    둘 다 해당하지 않으면 네트워크 에러로 간주.

    Args:
        status_code: HTTP 응답 상태 코드
        message: GraphQL 에러 메시지

    Returns:
        분류된 도메인 에러
    """
    if status_code == 403:
        return GitHubRateLimitedError(detail=message)
    if status_code == 401:
        return GitHubUnauthorizedError(detail=message)

    if message and not _is_generic_http_failure(message):
        return GitHubGraphQLError(message)

    detail = f"status_code={status_code}" if status_code is not None else message
    return GitHubNetworkError(detail=detail)
