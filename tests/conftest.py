"""테스트 공통 fixture"""

from datetime import datetime, timezone

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.domain.profile.schemas import GitHubStats
from app.main import app

GRAPHQL_URL = "https://api.github.com/graphql"


def _user_node(created_at: str = "2019-01-15T00:00:00Z", **overrides) -> dict:
    node = {
        "login": "testuser",
        "name": "Test User",
        "avatarUrl": "https://avatars.githubusercontent.com/u/12345",
        "bio": "A passionate developer",
        "location": "Seoul",
        "company": "@TestOrg",
        "email": "test@example.com",
        "websiteUrl": "https://testuser.dev",
        "url": "https://github.com/testuser",
        "createdAt": created_at,
        "repositories": {"totalCount": 52},
        "publicRepositories": {"totalCount": 42},
        "privateRepositories": {"totalCount": 10},
        "pullRequests": {"totalCount": 85},
        "contributionsCollection": {
            "totalCommitContributions": 1000,
            "restrictedContributionsCount": 250,
        },
    }
    node.update(overrides)
    return node


@pytest.fixture
def user_node() -> dict:
    return _user_node()


@pytest.fixture
def make_user_node():
    """GraphQL user 노드 생성 helper"""
    return _user_node


@pytest.fixture
def make_search_data():
    """GraphQL search 응답 data 생성 helper"""

    def _create(
        nodes: list[dict], has_next_page: bool = False, end_cursor: str | None = None
    ) -> dict:
        return {
            "search": {
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
                "nodes": nodes,
            }
        }

    return _create


@pytest.fixture
def make_response():
    """httpx 응답 생성 helper, raise_for_status 동작을 위해 request 포함"""

    def _create(
        payload: dict | list | None = None,
        status_code: int = 200,
        content: bytes | None = None,
    ) -> httpx.Response:
        request = httpx.Request("POST", GRAPHQL_URL)
        if content is not None:
            return httpx.Response(status_code, content=content, request=request)
        return httpx.Response(status_code, json=payload, request=request)

    return _create


@pytest.fixture
def sample_stats() -> GitHubStats:
    """테스트용 최종 통계"""
    return GitHubStats(
        login="testuser",
        name="Test User",
        avatar_url="https://avatars.githubusercontent.com/u/12345",
        html_url="https://github.com/testuser",
        created_at=datetime(2019, 1, 15, tzinfo=timezone.utc),
        total_repos=52,
        public_repos=42,
        private_repos=10,
        pull_requests=85,
        total_commits=1250,
        total_lines_added=300,
        total_lines_removed=150,
    )


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("POST", GRAPHQL_URL),
            response=httpx.Response(status_code),
        )

    return _create
