import asyncio

import httpx

from app.core.config import settings
from app.core.exceptions import GitHubGraphQLError
from app.core.logging import get_logger
from app.domain.profile.schemas import PrLineStats, PrPage, UserProfile
from app.infra.github.errors import classify_error
from app.infra.github.queries import PR_SEARCH_QUERY, USER_PROFILE_QUERY

logger = get_logger(__name__)

_client = httpx.AsyncClient(timeout=settings.github_timeout)
_request_semaphore = asyncio.Semaphore(settings.github_max_concurrent_requests)


def _get_headers(token: str) -> dict[str, str]:
    """GitHub GraphQL 요청 헤더 생성

    Args:
        token: GitHub PAT

    Returns:
        HTTP 헤더 딕셔너리
    """
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


async def graphql_query(query: str, variables: dict, token: str) -> dict:
    """GraphQL 쿼리 1회 실행

    재시도하지 않으며, 실패는 도메인 에러로 분류해서 그대로 올림.

    Args:
        query: GraphQL 쿼리 문자열
        variables: 쿼리 변수
        token: GitHub PAT

    Returns:
        GraphQL 응답의 data 필드

    Raises:
        GitHubError: HTTP 에러, GraphQL 에러, 네트워크 에러
    """
    try:
        async with _request_semaphore:
            response = await _client.post(
                settings.github_graphql_url,
                headers=_get_headers(token),
                json={"query": query, "variables": variables},
            )
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.warning("GraphQL HTTP 에러", status_code=status_code)
        raise classify_error(status_code=status_code) from e
    except httpx.RequestError as e:
        logger.warning("GraphQL 요청 실패", error=type(e).__name__)
        raise classify_error(message=f"Http failure: {type(e).__name__}") from e
    except ValueError as e:
        logger.warning("GraphQL 응답 디코딩 실패", error=type(e).__name__)
        raise classify_error(message="Http failure: invalid JSON response") from e

    if not isinstance(payload, dict):
        raise GitHubGraphQLError(
            "GitHub 응답 형식이 올바르지 않습니다", detail=type(payload).__name__
        )

    errors = payload.get("errors") or []
    if errors:
        # 첫 번째 에러만 전달
        message = _error_message(errors)
        logger.warning("GraphQL 에러 발생", count=len(errors), message=message)
        raise classify_error(message=message)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise GitHubGraphQLError("GitHub 응답에 data 필드가 없습니다")
    return data


def _error_message(errors) -> str | None:
    """errors 배열의 첫 번째 메시지, 형식이 다르면 None"""
    if not isinstance(errors, list):
        return None
    first = errors[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    return message if isinstance(message, str) else None


async def fetch_user_profile(username: str, token: str) -> UserProfile:
    """사용자 프로필 조회

    Args:
        username: GitHub 유저네임
        token: GitHub PAT

    Returns:
        사용자 프로필
    """
    data = await graphql_query(USER_PROFILE_QUERY, {"login": username}, token)
    user = data.get("user")
    if not user:
        raise GitHubGraphQLError(f"사용자를 찾을 수 없습니다: {username}")

    try:
        contrib = user["contributionsCollection"]
        profile = UserProfile(
            login=user["login"],
            name=user.get("name"),
            avatar_url=user["avatarUrl"],
            bio=user.get("bio"),
            location=user.get("location"),
            company=user.get("company"),
            email=user.get("email") or None,
            website_url=user.get("websiteUrl"),
            html_url=user["url"],
            created_at=user["createdAt"],
            total_repos=user["repositories"]["totalCount"],
            public_repos=user["publicRepositories"]["totalCount"],
            private_repos=user["privateRepositories"]["totalCount"],
            merged_pull_requests=user["pullRequests"]["totalCount"],
            commit_contributions=contrib["totalCommitContributions"],
            restricted_contributions=contrib["restrictedContributionsCount"],
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise GitHubGraphQLError(
            "GitHub 사용자 응답 형식이 올바르지 않습니다", detail=repr(e)
        ) from e

    logger.info("프로필 조회 완료", username=username, created_at=profile.created_at.isoformat())
    return profile


async def fetch_pr_page(search_query: str, cursor: str | None, token: str) -> PrPage:
    """PR 검색 결과 한 페이지 조회

    Args:
        search_query: GitHub 검색 쿼리 문자열
        cursor: 이전 페이지의 endCursor, 첫 페이지는 None
        token: GitHub PAT

    Returns:
        PR별 추가/삭제 라인 수와 다음 페이지 정보
    """
    variables = {"query": search_query, "cursor": cursor}
    data = await graphql_query(PR_SEARCH_QUERY, variables, token)

    try:
        search = data["search"]
        page_info = search["pageInfo"]
        nodes = [
            PrLineStats(
                additions=node.get("additions") or 0,
                deletions=node.get("deletions") or 0,
            )
            for node in search["nodes"]
            if node
        ]
        has_next_page = bool(page_info.get("hasNextPage"))
        end_cursor = page_info.get("endCursor") if has_next_page else None
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise GitHubGraphQLError(
            "GitHub 검색 응답 형식이 올바르지 않습니다", detail=repr(e)
        ) from e

    return PrPage(nodes=nodes, has_next_page=has_next_page, end_cursor=end_cursor)
