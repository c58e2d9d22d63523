"""API contract tests for the landing page and diagnostics."""

import logging
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tests.conftest import InMemoryUserStore
from user_api.config import Settings
from user_api.dependencies import get_user_store
from user_api.main import app, create_application


@pytest.mark.asyncio
async def test_landing_page(api_client: AsyncClient) -> None:
    response = await api_client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "User API" in response.text


@pytest.mark.asyncio
async def test_health_endpoint(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "user-api"


@pytest.mark.asyncio
async def test_readiness_without_store(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/readiness")
    assert response.status_code == 503
    assert response.json()["message"] == "Database unavailable"


@pytest.mark.asyncio
async def test_readiness_with_reachable_store(bare_client: AsyncClient) -> None:
    class ReachableStore:
        async def ping(self) -> bool:
            return True

    app.state.users = ReachableStore()
    try:
        response = await bare_client.get("/readiness")
    finally:
        app.state.users = None
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_unknown_route_has_message(api_client: AsyncClient) -> None:
    response = await api_client.get("/nothing-here")
    assert response.status_code == 404
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client: AsyncClient) -> None:
    response = await api_client.get("/health", headers={"x-request-id": "abc123"})
    assert response.headers["x-request-id"] == "abc123"


@pytest.fixture()
def custom_app(tmp_path: Path) -> FastAPI:
    """Application built with its own settings."""
    return create_application(Settings(_env_file=None, app_name="custom", public_dir=tmp_path))


@pytest_asyncio.fixture()
async def custom_client(custom_app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=custom_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.mark.asyncio
async def test_landing_page_from_configured_directory(
    custom_client: AsyncClient, tmp_path: Path
) -> None:
    (tmp_path / "index.html").write_text("<h1>Custom landing</h1>", encoding="utf-8")
    response = await custom_client.get("/")
    assert response.status_code == 200
    assert response.text == "<h1>Custom landing</h1>"


@pytest.mark.asyncio
async def test_landing_page_missing(custom_client: AsyncClient) -> None:
    response = await custom_client.get("/")
    assert response.status_code == 404
    assert response.json() == {"message": "Page not found"}


@pytest.mark.asyncio
async def test_health_uses_application_settings(custom_client: AsyncClient) -> None:
    response = await custom_client.get("/health")
    assert response.status_code == 200
    assert response.json()["service"] == "custom"


@pytest.mark.asyncio
async def test_handler_logs_carry_request_id(
    custom_app: FastAPI, custom_client: AsyncClient, caplog: pytest.LogCaptureFixture
) -> None:
    custom_app.dependency_overrides[get_user_store] = InMemoryUserStore
    users_logger = logging.getLogger("user_api.users")
    users_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="user_api.users"):
            response = await custom_client.post(
                "/users", json={"name": "John Doe"}, headers={"x-request-id": "req-42"}
            )
    finally:
        users_logger.removeHandler(caplog.handler)
    assert response.status_code == 400
    assert "id=req-42 users.create.invalid" in caplog.text
