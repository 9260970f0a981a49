from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """GitHub 사용자 프로필, 집계 1회 실행 동안만 유지"""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str | None = None
    avatar_url: str
    bio: str | None = None
    location: str | None = None
    company: str | None = None
    email: str | None = None
    website_url: str | None = None
    html_url: str
    created_at: datetime
    total_repos: int
    public_repos: int
    private_repos: int
    merged_pull_requests: int
    commit_contributions: int
    restricted_contributions: int

    @property
    def total_commits(self) -> int:
        return self.commit_contributions + self.restricted_contributions


class DateRange(BaseModel):
    """1년 단위 검색 기간"""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @property
    def year(self) -> int:
        return self.start.year

    @property
    def search_filter(self) -> str:
        """검색 쿼리 created: 필터 값, 예) 2024-01-01..2024-12-31"""
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


class PrLineStats(BaseModel):
    """PR 추가/삭제 라인 수"""

    model_config = ConfigDict(frozen=True)

    additions: int = 0
    deletions: int = 0

    def __add__(self, other: "PrLineStats") -> "PrLineStats":
        return PrLineStats(
            additions=self.additions + other.additions,
            deletions=self.deletions + other.deletions,
        )


class PrPage(BaseModel):
    """PR 검색 결과 한 페이지"""

    nodes: list[PrLineStats]
    has_next_page: bool
    end_cursor: str | None = None


class GitHubStats(BaseModel):
    """프로필과 전체 기간 PR 라인 통계를 합친 최종 결과"""

    login: str
    name: str | None = None
    avatar_url: str
    bio: str | None = None
    location: str | None = None
    company: str | None = None
    email: str | None = None
    website_url: str | None = None
    html_url: str
    created_at: datetime
    total_repos: int
    public_repos: int
    private_repos: int
    pull_requests: int
    total_commits: int
    total_lines_added: int
    total_lines_removed: int
