from fastapi import APIRouter, Request

from app.api.v1.schemas import GitHubStatsBody, GitHubStatsResponse
from app.core.config import settings
from app.core.limiter import limiter
from app.domain.profile.service import get_github_stats

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/github-stats", response_model=GitHubStatsResponse)
@limiter.limit(settings.stats_rate_limit)
async def read_github_stats(request: Request) -> GitHubStatsResponse:
    stats = await get_github_stats(settings.github_username, settings.github_token)
    if stats is None:
        return GitHubStatsResponse(status="unconfigured")

    return GitHubStatsResponse(status="ok", stats=GitHubStatsBody.from_stats(stats))
