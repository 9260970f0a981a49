from app.api.v1.schemas.profile import GitHubStatsBody, GitHubStatsResponse

__all__ = [
    "GitHubStatsBody",
    "GitHubStatsResponse",
]
