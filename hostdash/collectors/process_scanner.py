from __future__ import annotations

import asyncio

import psutil

from hostdash.collectors.base import BaseCollector
from hostdash.models.snapshot import ProcessInfo

MB = 1024 * 1024


class ProcessScanner(BaseCollector):
    """Finds the processes holding the most resident memory.

    psutil reads RSS from the kernel's per-process page accounting
    (``/proc/<pid>/statm`` on Linux). Names are only looked up for
    processes above ``floor_mb``.
    """

    name = "process_scanner"

    def __init__(self, limit: int = 3, floor_mb: int = 10) -> None:
        self.limit = limit
        self.floor_mb = floor_mb

    async def scan(self, limit: int | None = None) -> list[ProcessInfo]:
        """Run the blocking process-table walk on a worker thread."""
        return await asyncio.to_thread(self.top_processes_by_memory, limit)

    def top_processes_by_memory(self, limit: int | None = None) -> list[ProcessInfo]:
        if limit is None:
            limit = self.limit

        found: list[ProcessInfo] = []
        for proc in psutil.process_iter():
            try:
                rss_mb = proc.memory_info().rss // MB
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue
            if rss_mb < self.floor_mb:
                continue

            try:
                proc_name = proc.name() or "unknown"
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                proc_name = "unknown"
            found.append(ProcessInfo(name=proc_name, memory_mb=rss_mb))

        found.sort(key=lambda p: p.memory_mb, reverse=True)
        return found[:limit]
