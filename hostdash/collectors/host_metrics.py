from __future__ import annotations

import logging
import time
from enum import StrEnum
from typing import Iterable

import psutil

from hostdash.collectors.base import BaseCollector
from hostdash.models.snapshot import DiskInfo, NetworkInfo

logger = logging.getLogger(__name__)

MB = 1024 * 1024
GB = 1024 * 1024 * 1024


class RefreshScope(StrEnum):
    CPU = "cpu"
    MEMORY = "memory"


class HostMetricsReader(BaseCollector):
    """Stateful handle over psutil's host counters.

    CPU and memory are sampled by ``refresh()`` and kept on the instance;
    sensors, disks and network interfaces are enumerated fresh on every
    read. The instance is not safe for concurrent mutation: callers
    serialize access to it.

    CPU usage is psutil's percentage since the previous sample, so it
    reads 0.0 until a second sample exists. The constructor takes the
    first sample.
    """

    name = "host_metrics"

    def __init__(self) -> None:
        self.cpu_usage: float = 0.0
        self._memory = None
        self._swap = None
        psutil.cpu_percent(interval=None)

    # ── cheap, cached subsystems ────────────────────────

    def refresh(self, scopes: Iterable[RefreshScope]) -> None:
        """Resample each scope; a scope whose sample fails reads as zero."""
        for scope in scopes:
            if scope is RefreshScope.CPU:
                self.cpu_usage = 0.0
                self.cpu_usage = float(psutil.cpu_percent(interval=None))
            elif scope is RefreshScope.MEMORY:
                self._memory = self._swap = None
                self._memory = psutil.virtual_memory()
                self._swap = psutil.swap_memory()

    @property
    def ram_used_mb(self) -> int:
        if self._memory is None:
            return 0
        return (self._memory.total - self._memory.available) // MB

    @property
    def ram_total_mb(self) -> int:
        return self._memory.total // MB if self._memory is not None else 0

    @property
    def swap_used_mb(self) -> int:
        return self._swap.used // MB if self._swap is not None else 0

    @property
    def swap_total_mb(self) -> int:
        return self._swap.total // MB if self._swap is not None else 0

    @staticmethod
    def uptime() -> int:
        return max(int(time.time() - psutil.boot_time()), 0)

    @staticmethod
    def load_average() -> tuple[float, float, float]:
        one, five, fifteen = psutil.getloadavg()
        return (float(one), float(five), float(fifteen))

    # ── fresh enumerations ──────────────────────────────

    @staticmethod
    def read_sensors() -> list[tuple[str, float]]:
        """Return ``(label, celsius)`` pairs in psutil's chip order."""
        read = getattr(psutil, "sensors_temperatures", None)
        if read is None:
            return []

        sensors: list[tuple[str, float]] = []
        for chip, entries in read().items():
            for entry in entries:
                label = f"{chip} {entry.label}" if entry.label else chip
                sensors.append((label, float(entry.current)))
        return sensors

    @staticmethod
    def read_disks() -> list[DiskInfo]:
        disks: list[DiskInfo] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                logger.debug("Cannot stat mount point %s", part.mountpoint)
                continue

            total = usage.total
            available = min(usage.free, total)
            disks.append(
                DiskInfo(
                    name=part.device,
                    mount_point=part.mountpoint,
                    total_gb=total // GB,
                    used_gb=(total - available) // GB,
                )
            )
        return disks

    @staticmethod
    def read_networks() -> list[NetworkInfo]:
        return [
            NetworkInfo(
                name=nic,
                received=counters.bytes_recv,
                transmitted=counters.bytes_sent,
            )
            for nic, counters in psutil.net_io_counters(pernic=True).items()
        ]
