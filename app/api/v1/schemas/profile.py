"""프로필 API 스키마."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.domain.profile.schemas import GitHubStats


class GitHubStatsBody(BaseModel):
    """GitHub 통계 응답 본문."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    login: str
    name: str | None
    avatar_url: str
    bio: str | None
    location: str | None
    company: str | None
    email: str | None
    website_url: str | None
    html_url: str
    created_at: datetime
    total_repos: int
    public_repos: int
    private_repos: int
    pull_requests: int
    total_commits: int
    total_lines_added: int
    total_lines_removed: int

    @classmethod
    def from_stats(cls, stats: GitHubStats) -> "GitHubStatsBody":
        return cls(**stats.model_dump())


class GitHubStatsResponse(BaseModel):
    """GitHub 통계 조회 응답.

    GitHub 설정이 없으면 status가 unconfigured이고 stats는 null.
    """

    status: Literal["ok", "unconfigured"]
    stats: GitHubStatsBody | None = None
