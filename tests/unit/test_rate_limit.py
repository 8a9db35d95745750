"""Tests for rate limiting (src/chancery/core/rate_limit.py)."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from src.chancery.core.rate_limit import create_limiter, get_rate_limit_key

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock Starlette request."""
    request = MagicMock(spec=Request)
    request.headers = {}
    request.client = MagicMock()
    request.client.host = "192.168.1.100"
    request.url.path = "/api/v1/auth/login"
    return request


class TestGetRateLimitKey:
    def test_returns_ip(self, mock_request: MagicMock) -> None:
        with patch("src.chancery.core.rate_limit.get_remote_address", return_value="10.0.0.1"):
            assert get_rate_limit_key(mock_request) == "10.0.0.1"

    def test_forwarded_headers_ignored(self, mock_request: MagicMock) -> None:
        """User-controlled headers never change the bucket."""
        mock_request.headers = {"X-Forwarded-For": "1.2.3.4"}
        with patch("src.chancery.core.rate_limit.get_remote_address", return_value="10.0.0.1"):
            assert get_rate_limit_key(mock_request) == "10.0.0.1"

    def test_returns_unknown_when_ip_not_available(self, mock_request: MagicMock) -> None:
        with patch("src.chancery.core.rate_limit.get_remote_address", return_value=None):
            assert get_rate_limit_key(mock_request) == "unknown"


class TestCreateLimiter:
    def test_disabled_in_testing(self) -> None:
        settings = MagicMock()
        settings.app_env = "testing"
        with patch("src.chancery.core.rate_limit.get_settings", return_value=settings):
            limiter = create_limiter()
        assert limiter.enabled is False

    def test_enabled_elsewhere(self) -> None:
        settings = MagicMock()
        settings.app_env = "development"
        with patch("src.chancery.core.rate_limit.get_settings", return_value=settings):
            limiter = create_limiter()
        assert limiter.enabled is True
