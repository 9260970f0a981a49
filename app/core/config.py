from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # GitHub - 통계를 집계할 계정과 PAT
    github_username: str = ""
    github_token: str = ""
    github_graphql_url: str = "https://api.github.com/graphql"

    # Timeout 설정
    github_timeout: float = 30.0
    github_stats_timeout: float = 60.0

    # 동시 요청 제한
    github_max_concurrent_requests: int = 10

    # 통계 API 요청 제한
    stats_rate_limit: str = "30/minute"

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def missing_github_settings(self) -> list[str]:
        """누락된 GitHub 설정 항목 반환"""
        missing = []
        if not self.github_username:
            missing.append("GITHUB_USERNAME")
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        return missing


settings = Settings()
