"""Tests for the credential endpoint limiter."""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from src.taskboard.core import rate_limit
from src.taskboard.core.rate_limit import create_limiter, get_rate_limit_key

pytestmark = pytest.mark.unit


def make_request(client: tuple[str, int] | None = ("192.168.1.100", 5000), headers=None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/auth/login",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestRateLimitKey:
    def test_key_is_client_ip(self):
        assert get_rate_limit_key(make_request()) == "192.168.1.100"

    def test_forwarded_headers_are_ignored(self):
        request = make_request(headers={"X-Forwarded-For": "10.0.0.1"})

        assert get_rate_limit_key(request) == "192.168.1.100"

    def test_missing_client_falls_back(self):
        key = get_rate_limit_key(make_request(client=None))

        assert key in ("127.0.0.1", "unknown")


class TestCreateLimiter:
    def test_disabled_in_testing(self, monkeypatch):
        monkeypatch.setattr(rate_limit, "get_settings", lambda: MagicMock(app_env="testing"))

        assert create_limiter().enabled is False

    def test_enabled_elsewhere(self, monkeypatch):
        monkeypatch.setattr(rate_limit, "get_settings", lambda: MagicMock(app_env="production"))

        assert create_limiter().enabled is True

    def test_module_limiter_is_disabled_for_suite(self):
        assert rate_limit.limiter.enabled is False
