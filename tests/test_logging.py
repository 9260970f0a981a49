"""로깅 테스트"""

from unittest.mock import patch

import pytest

from app.core.context import clear_context, set_request_id, set_run_id
from app.core.logging import (
    MASK,
    _mask_sensitive_data,
    add_context_processor,
    mask_sensitive_processor,
)


class TestMaskSensitiveData:
    """_mask_sensitive_data 함수 테스트"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Authorization: Bearer abc.def", "Authorization: Bearer ***"),
            ("url?token=secret&x=1", "url?token=***&x=1"),
            ("pat ghp_AbC123xyz used", "pat ghp_*** used"),
            ("fine-grained github_pat_11AB_cd used", "fine-grained github_pat_*** used"),
            ("nothing here", "nothing here"),
        ],
    )
    def test_masks(self, raw, expected):
        assert _mask_sensitive_data(raw) == expected


class TestAddContextProcessor:
    """add_context_processor 함수 테스트"""

    def test_injects_ids(self):
        """request_id와 run_id 주입"""
        set_request_id("req-1")
        set_run_id("run-1")
        try:
            event = add_context_processor(None, "info", {"event": "x"})
        finally:
            clear_context()

        assert event["request_id"] == "req-1"
        assert event["run_id"] == "run-1"

    def test_without_context(self):
        clear_context()
        event = add_context_processor(None, "info", {"event": "x"})
        assert "request_id" not in event
        assert "run_id" not in event


class TestMaskSensitiveProcessor:
    """mask_sensitive_processor 함수 테스트"""

    @pytest.mark.parametrize("is_production", [False, True])
    def test_sensitive_keys_always_masked(self, is_production):
        """토큰 관련 키는 환경과 무관하게 가림"""
        event = {"event": "x", "token": "ghp_abc", "Authorization": "Bearer abc", "year": 2024}

        with patch("app.core.logging.settings") as mock_settings:
            mock_settings.is_production = is_production
            result = mask_sensitive_processor(None, "info", event)

        assert result["token"] == MASK
        assert result["Authorization"] == MASK
        assert result["year"] == 2024

    def test_embedded_token_masked_in_production(self):
        with patch("app.core.logging.settings") as mock_settings:
            mock_settings.is_production = True
            result = mask_sensitive_processor(None, "info", {"event": "used ghp_abc123"})

        assert result["event"] == "used ghp_***"

    def test_embedded_token_kept_in_development(self):
        with patch("app.core.logging.settings") as mock_settings:
            mock_settings.is_production = False
            result = mask_sensitive_processor(None, "info", {"event": "used ghp_abc123"})

        assert result["event"] == "used ghp_abc123"
