from __future__ import annotations

import asyncio
import logging

from hostdash.collectors.containers import ContainerInventoryReader
from hostdash.collectors.host_metrics import HostMetricsReader, RefreshScope
from hostdash.collectors.process_scanner import ProcessScanner
from hostdash.collectors.reachability import ReachabilityProber
from hostdash.models.snapshot import SystemSnapshot

logger = logging.getLogger(__name__)


class SnapshotAggregator:
    """Builds one ``SystemSnapshot`` per request from every source.

    Owns the shared ``HostMetricsReader`` and the lock that serializes
    access to it. The lock covers only in-memory psutil reads and is
    released before anything that awaits network or worker-thread I/O.
    Each source is defaulted independently: a failure leaves its fields
    at zero / empty and never aborts the snapshot.
    """

    def __init__(
        self,
        host: HostMetricsReader,
        scanner: ProcessScanner,
        prober: ReachabilityProber,
        inventory: ContainerInventoryReader,
    ) -> None:
        self.host = host
        self.scanner = scanner
        self.prober = prober
        self.inventory = inventory
        self._host_lock = asyncio.Lock()

    async def collect(self) -> SystemSnapshot:
        snapshot = SystemSnapshot()

        # ── host metrics: critical section, no awaits inside ──
        async with self._host_lock:
            self._read_host(snapshot)

        # ── network probe + off-thread process scan ──────
        latency, processes = await asyncio.gather(
            self.prober.guard_async("probe", self.prober.probe, None),
            self.scanner.guard_async("scan", self.scanner.scan, []),
        )
        snapshot.internet_latency = latency if latency is not None else 0.0
        snapshot.internet_reachable = latency is not None
        snapshot.processes = processes

        # ── container inventory: images depend on containers ──
        containers, in_use = await self.inventory.guard_async(
            "list_containers", self.inventory.list_containers, ([], set())
        )
        snapshot.containers = containers
        snapshot.images = await self.inventory.guard_async(
            "list_images", self.inventory.list_images, [], in_use
        )

        logger.debug(
            "Snapshot built: %d containers, %d images, %d processes",
            len(snapshot.containers), len(snapshot.images), len(snapshot.processes),
        )
        return snapshot

    def _read_host(self, snapshot: SystemSnapshot) -> None:
        host = self.host
        host.guard("refresh cpu", host.refresh, None, (RefreshScope.CPU,))
        host.guard("refresh memory", host.refresh, None, (RefreshScope.MEMORY,))

        snapshot.cpu_usage = host.cpu_usage
        snapshot.ram_used = host.ram_used_mb
        snapshot.ram_total = host.ram_total_mb
        snapshot.swap_used = host.swap_used_mb
        snapshot.swap_total = host.swap_total_mb
        snapshot.uptime = host.guard("uptime", host.uptime, 0)
        snapshot.load_avg = host.guard("load_average", host.load_average, (0.0, 0.0, 0.0))
        snapshot.sensors = host.guard("sensors", host.read_sensors, [])
        snapshot.disks = host.guard("disks", host.read_disks, [])
        snapshot.networks = host.guard("networks", host.read_networks, [])
