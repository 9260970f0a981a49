import asyncio
from datetime import datetime, timezone

from app.core.config import settings
from app.core.context import set_run_id
from app.core.exceptions import GitHubError, GitHubNetworkError
from app.core.logging import get_logger
from app.domain.profile.date_ranges import plan_date_ranges
from app.domain.profile.schemas import DateRange, GitHubStats, PrLineStats, UserProfile
from app.infra.github.client import fetch_pr_page, fetch_user_profile

logger = get_logger(__name__)


def build_search_query(username: str, date_range: DateRange) -> str:
    """기간 내 머지된 PR 검색 쿼리 생성"""
    return f"author:{username} is:pr is:merged created:{date_range.search_filter}"


async def aggregate_range(username: str, date_range: DateRange, token: str) -> PrLineStats:
    """한 기간의 모든 PR 페이지를 순서대로 조회해서 라인 수 합산

    다음 페이지 cursor가 이전 응답에 의존하므로 기간 내 조회는 순차 실행.
    어느 페이지든 실패하면 부분 결과 없이 에러를 그대로 올림.

    Args:
        username: GitHub 유저네임
        date_range: 검색 기간
        token: GitHub PAT

    Returns:
        기간 전체 추가/삭제 라인 합계
    """
    search_query = build_search_query(username, date_range)
    total = PrLineStats()
    cursor: str | None = None
    pages = 0

    while True:
        page = await fetch_pr_page(search_query, cursor, token)
        pages += 1
        for node in page.nodes:
            total = total + node

        if not page.has_next_page or page.end_cursor is None:
            break
        cursor = page.end_cursor

    logger.info(
        "기간별 PR 집계 완료",
        year=date_range.year,
        pages=pages,
        additions=total.additions,
        deletions=total.deletions,
    )
    return total


async def _aggregate_all_ranges(
    username: str, date_ranges: list[DateRange], token: str
) -> list[PrLineStats]:
    """기간별 집계를 동시에 실행하고 결과를 모음

    하나라도 실패하면 나머지 작업을 취소하고 첫 번째 에러를 올림.
    """
    tasks = [
        asyncio.create_task(
            aggregate_range(username, date_range, token),
            name=f"pr-stats-{date_range.year}",
        )
        for date_range in date_ranges
    ]

    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        # 완료된 작업의 예외는 모두 꺼내야 미회수 예외 경고가 남지 않음
        errors = [task.exception() for task in tasks if task in done]
        first_error = next((error for error in errors if error is not None), None)
        if first_error is not None:
            raise first_error
        return [task.result() for task in tasks]
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


def _to_github_stats(profile: UserProfile, line_stats: PrLineStats) -> GitHubStats:
    return GitHubStats(
        login=profile.login,
        name=profile.name,
        avatar_url=profile.avatar_url,
        bio=profile.bio,
        location=profile.location,
        company=profile.company,
        email=profile.email,
        website_url=profile.website_url,
        html_url=profile.html_url,
        created_at=profile.created_at,
        total_repos=profile.total_repos,
        public_repos=profile.public_repos,
        private_repos=profile.private_repos,
        pull_requests=profile.merged_pull_requests,
        total_commits=profile.total_commits,
        total_lines_added=line_stats.additions,
        total_lines_removed=line_stats.deletions,
    )


async def _collect_stats(username: str, token: str) -> GitHubStats:
    profile = await fetch_user_profile(username, token)
    date_ranges = plan_date_ranges(profile.created_at, datetime.now(timezone.utc))

    logger.info("PR 통계 병렬 조회 시작", username=username, ranges=len(date_ranges))
    range_stats = await _aggregate_all_ranges(username, date_ranges, token)

    total = PrLineStats()
    for stats in range_stats:
        total = total + stats
    return _to_github_stats(profile, total)


async def get_github_stats(
    username: str | None,
    token: str | None,
    timeout: float | None = None,
) -> GitHubStats | None:
    """GitHub 프로필과 전체 기간 PR 라인 통계 조회

    username이나 token이 비어 있으면 설정되지 않은 것으로 보고 None 반환.

    Args:
        username: GitHub 유저네임
        token: GitHub PAT
        timeout: 전체 집계 제한 시간(초), None이면 설정값 사용

    Returns:
        집계된 통계, 설정이 없으면 None

    Raises:
        GitHubError: 프로필 또는 기간별 조회 실패, 제한 시간 초과
    """
    if not username:
        logger.warning("GitHub 유저네임이 설정되지 않음")
        return None
    if not token:
        logger.warning("GitHub 토큰이 설정되지 않아 통계를 조회할 수 없음")
        return None

    if timeout is None:
        timeout = settings.github_stats_timeout

    set_run_id()
    try:
        stats = await asyncio.wait_for(_collect_stats(username, token), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error("GitHub 통계 조회 시간 초과", username=username, timeout=timeout)
        raise GitHubNetworkError(detail=f"timeout={timeout}s") from e
    except GitHubError as e:
        logger.error(
            "GitHub 통계 조회 실패",
            username=username,
            error_code=e.error_code,
            error=e.message,
        )
        raise

    logger.info(
        "GitHub 통계 조회 완료",
        username=username,
        lines_added=stats.total_lines_added,
        lines_removed=stats.total_lines_removed,
    )
    return stats
