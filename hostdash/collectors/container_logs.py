from __future__ import annotations

import logging
import time

from hostdash.collectors.base import BaseCollector
from hostdash.runtime.docker_client import DockerClient, DockerError

logger = logging.getLogger(__name__)

_HEADER_SIZE = 8
_STREAMS = (0, 1, 2)  # stdin, stdout, stderr


class LogRetriever(BaseCollector):
    """Fetches recent stdout+stderr for one container, bounded in time and lines."""

    name = "container_logs"

    def __init__(
        self,
        client: DockerClient,
        window_minutes: int = 30,
        tail_lines: int = 50,
    ) -> None:
        self._client = client
        self.window_minutes = window_minutes
        self.tail_lines = tail_lines

    async def tail_logs(self, container: str, window_minutes: int | None = None) -> str:
        if window_minutes is None:
            window_minutes = self.window_minutes
        since = int(time.time()) - window_minutes * 60
        try:
            raw = await self._client.container_logs(container, since=since, tail=self.tail_lines)
        except DockerError as exc:
            if exc.status_code == 404:
                return f"Container '{container}' not found."
            logger.info("Log retrieval for %s failed: %s", container, exc)
            return f"Logs for '{container}' are unavailable: cannot reach the Docker daemon."

        text = demux_log_stream(raw)
        if not text.strip():
            return f"No log output from '{container}' in the last {window_minutes} minutes."
        return text


def demux_log_stream(data: bytes) -> str:
    """Decode Docker's log stream into text.

    Containers without a TTY frame each chunk with an 8-byte header
    (stream id, three zero bytes, big-endian payload length); frames are
    concatenated in arrival order. TTY output is raw and passed through.
    """
    if not _is_multiplexed(data):
        return data.decode("utf-8", errors="replace")

    chunks: list[bytes] = []
    pos = 0
    while pos + _HEADER_SIZE <= len(data):
        size = int.from_bytes(data[pos + 4:pos + _HEADER_SIZE], "big")
        start = pos + _HEADER_SIZE
        chunks.append(data[start:start + size])
        pos = start + size
    return b"".join(chunks).decode("utf-8", errors="replace")


def _is_multiplexed(data: bytes) -> bool:
    return (
        len(data) >= _HEADER_SIZE
        and data[0] in _STREAMS
        and data[1:4] == b"\x00\x00\x00"
    )
