"""Tests for hostdash.api routes and the application lifespan."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from hostdash.main import app, lifespan
from hostdash.models import ContainerInfo, DiskInfo, SystemSnapshot
from hostdash.runtime.docker_client import DockerError


# ── fixtures ───────────────────────────────────────────


@pytest.fixture
def _setup_app_state():
    """Inject stub sources on app.state so routes work without the lifespan."""
    aggregator = MagicMock()
    aggregator.collect = AsyncMock(return_value=SystemSnapshot(
        cpu_usage=5.0,
        disks=[DiskInfo(name="/dev/sda1", mount_point="/", total_gb=100, used_gb=40)],
        containers=[ContainerInfo(name="web", status="Up", state="running")],
    ))
    log_retriever = MagicMock()
    log_retriever.tail_logs = AsyncMock(return_value="line one\nline two\n")

    app.state.aggregator = aggregator
    app.state.log_retriever = log_retriever
    yield
    # Cleanup
    del app.state.aggregator
    del app.state.log_retriever


@pytest.fixture
async def client(_setup_app_state):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── REST tests ─────────────────────────────────────────


class TestStatus:
    @pytest.mark.asyncio
    async def test_status_ok(self, client: AsyncClient):
        resp = await client.get("/api/status")
        assert resp.status_code == 200
        data = resp.json()
        assert data["cpu_usage"] == 5.0
        assert data["disks"][0]["used_gb"] == 40
        assert data["containers"][0]["name"] == "web"

    @pytest.mark.asyncio
    async def test_lists_present_not_null(self, client: AsyncClient):
        data = (await client.get("/api/status")).json()
        for key in ("sensors", "networks", "processes", "images"):
            assert data[key] == []
        assert data["load_avg"] == [0.0, 0.0, 0.0]


class TestLogs:
    @pytest.mark.asyncio
    async def test_logs_plain_text(self, client: AsyncClient):
        resp = await client.get("/api/logs/web")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "line one\nline two\n"
        app.state.log_retriever.tail_logs.assert_awaited_once_with("web")

    @pytest.mark.asyncio
    async def test_unknown_container_still_200(self, client: AsyncClient):
        app.state.log_retriever.tail_logs.return_value = "Container 'ghost' not found."
        resp = await client.get("/api/logs/ghost")
        assert resp.status_code == 200
        assert "ghost" in resp.text


class TestPages:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_dashboard_served(self, client: AsyncClient):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "/api/status" in resp.text


# ── lifespan ───────────────────────────────────────────


class TestLifespan:
    @pytest.mark.asyncio
    async def test_docker_unavailable_is_fatal(self):
        docker = MagicMock()
        docker.ping = AsyncMock(side_effect=DockerError("no socket"))
        docker.close = AsyncMock()

        with patch("hostdash.main.DockerClient", return_value=docker):
            with pytest.raises(DockerError):
                async with lifespan(app):
                    pass

        docker.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_startup_wires_shared_handles(self):
        docker = MagicMock()
        docker.ping = AsyncMock()
        docker.close = AsyncMock()

        with patch("hostdash.main.DockerClient", return_value=docker):
            async with lifespan(app):
                assert app.state.docker is docker
                assert app.state.aggregator.inventory is not None
                assert app.state.log_retriever.window_minutes == 30
                docker.close.assert_not_awaited()

        docker.close.assert_awaited_once()
        del app.state.docker
        del app.state.aggregator
        del app.state.log_retriever
