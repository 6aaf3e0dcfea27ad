"""Tests for app-level routes and error envelopes."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from lifelog.database import get_session
from lifelog.main import app
from tests.conftest import TEST_EMAIL, TEST_USER_ID


class TestHealthCheck:
    """GET /health"""

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["message"] == "LifeLog API is running"
        assert "timestamp" in body


class TestIndex:
    """GET /"""

    @pytest.mark.asyncio
    async def test_lists_endpoints(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/")
        assert resp.status_code == 200
        endpoints = resp.json()["endpoints"]
        assert endpoints["auth"] == "/api/auth"
        assert endpoints["activities"] == "/api/activities"
        assert endpoints["health"] == "/health"


class TestCheckAuth:
    """GET /api/check-auth"""

    @pytest.mark.asyncio
    async def test_valid_token(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await async_client.get("/api/check-auth", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "user": {"id": TEST_USER_ID, "email": TEST_EMAIL},
        }

    @pytest.mark.asyncio
    async def test_missing_token(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/api/check-auth")
        assert resp.status_code == 401
        assert resp.json()["success"] is False


class TestErrorEnvelopes:
    """Unmatched routes and unhandled errors."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Endpoint not found"}

    @pytest.mark.asyncio
    async def test_unhandled_error_returns_500(
        self,
        mock_session: AsyncMock,
        auth_headers: dict[str, str],
    ) -> None:
        async def _override_get_session():  # type: ignore[no-untyped-def]
            yield mock_session

        app.dependency_overrides[get_session] = _override_get_session
        transport = ASGITransport(app=app, raise_app_exceptions=False)  # type: ignore[arg-type]
        try:
            with patch("lifelog.api.routes.activities.ActivityService") as MockSvc:
                instance = AsyncMock()
                instance.list_activities.side_effect = RuntimeError("database went away")
                MockSvc.return_value = instance

                async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                    resp = await client.get("/api/activities", headers=auth_headers)
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Something went wrong!"
        # development mode exposes the error text
        assert body["error"] == "database went away"


class TestCors:
    """CORS preflight for the local development origin."""

    @pytest.mark.asyncio
    async def test_preflight_allowed_origin(self, async_client: AsyncClient) -> None:
        resp = await async_client.options(
            "/api/activities",
            headers={
                "Origin": "http://localhost:5500",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5500"
        assert resp.headers["access-control-allow-credentials"] == "true"
