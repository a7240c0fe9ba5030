from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class DockerError(Exception):
    """Raised when the Docker daemon cannot be reached or rejects a call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DockerClient:
    """Long-lived async client for the Docker Engine API over its unix socket.

    One instance is created at startup and shared by every request;
    ``httpx.AsyncClient`` pools connections and is safe for concurrent use.
    """

    def __init__(
        self,
        socket_path: str = "/var/run/docker.sock",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.socket_path = socket_path
        if transport is None:
            transport = httpx.AsyncHTTPTransport(uds=socket_path)
        self._client = httpx.AsyncClient(
            transport=transport,
            base_url="http://docker",
            timeout=timeout,
        )

    # ── lifecycle ────────────────────────────────────────

    async def ping(self) -> None:
        """Fail with ``DockerError`` unless the daemon answers ``/_ping``."""
        await self._get("/_ping")
        logger.info("Connected to Docker daemon at %s", self.socket_path)

    async def close(self) -> None:
        await self._client.aclose()

    # ── queries ─────────────────────────────────────────

    async def list_containers(self) -> list[dict[str, Any]]:
        return await self.get_json("/containers/json", params={"all": "1"})

    async def list_images(self) -> list[dict[str, Any]]:
        return await self.get_json("/images/json")

    async def container_logs(self, name: str, since: int, tail: int) -> bytes:
        resp = await self._get(
            f"/containers/{quote(name, safe='')}/logs",
            params={
                "stdout": "1",
                "stderr": "1",
                "since": str(since),
                "tail": str(tail),
            },
        )
        return resp.content

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        resp = await self._get(path, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise DockerError(f"Invalid JSON from {path}") from exc

    # ── internals ───────────────────────────────────────

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        try:
            resp = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise DockerError(f"Docker request {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise DockerError(
                f"Docker request {path} returned {resp.status_code}: {self._error_message(resp)}",
                status_code=resp.status_code,
            )
        return resp

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            return str(resp.json().get("message", "")) or resp.text
        except (ValueError, AttributeError):
            return resp.text
