"""app/main.py 테스트"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app, lifespan


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_returns_up(self):
        """헬스체크 엔드포인트가 정상 응답을 반환"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}


class TestAppConfiguration:
    """앱 설정 테스트"""

    def test_app_has_correct_title(self):
        """앱 제목이 올바르게 설정됨"""
        assert app.title == "Dev Stats Service"

    def test_app_has_correct_version(self):
        """앱 버전이 올바르게 설정됨"""
        assert app.version == "1.0.0"

    def test_router_is_included(self):
        """API 라우터가 포함됨"""
        routes = [getattr(route, "path", None) for route in app.routes]
        assert "/health" in routes
        assert "/api/v1/profile/github-stats" in routes


class TestLifespan:
    """lifespan 함수 테스트"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("is_production", [False, True])
    async def test_warns_on_missing_github_settings(self, is_production):
        """환경과 무관하게 GitHub 설정 누락 경고 후 종료 시 클라이언트 정리"""
        mock_settings = MagicMock()
        mock_settings.is_production = is_production
        mock_settings.missing_github_settings.return_value = ["GITHUB_TOKEN"]

        with (
            patch("app.main.settings", mock_settings),
            patch("app.main.logger") as mock_logger,
            patch("app.main.close_github_client", new_callable=AsyncMock) as mock_close,
        ):
            async with lifespan(app):
                mock_logger.warning.assert_called_once()
                assert mock_logger.warning.call_args.kwargs["missing"] == ["GITHUB_TOKEN"]

        mock_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_warning_when_configured(self):
        """설정이 모두 있으면 경고 없음"""
        mock_settings = MagicMock()
        mock_settings.missing_github_settings.return_value = []

        with (
            patch("app.main.settings", mock_settings),
            patch("app.main.logger") as mock_logger,
            patch("app.main.close_github_client", new_callable=AsyncMock),
        ):
            async with lifespan(app):
                pass

        mock_logger.warning.assert_not_called()
