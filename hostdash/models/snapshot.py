from __future__ import annotations

from pydantic import BaseModel, Field


class DiskInfo(BaseModel):
    """One mounted filesystem, capacities in whole GB."""

    name: str
    mount_point: str
    total_gb: int = 0
    used_gb: int = 0


class NetworkInfo(BaseModel):
    """Cumulative byte counters for one interface."""

    name: str
    received: int = 0
    transmitted: int = 0


class ProcessInfo(BaseModel):
    name: str
    memory_mb: int


class ContainerInfo(BaseModel):
    name: str
    status: str = ""
    state: str = ""
    ports: str = "-"


class ImageInfo(BaseModel):
    repo: str
    tag: str = "latest"
    id: str
    size_gb: float = 0.0
    in_use: bool = False


class SystemSnapshot(BaseModel):
    """Point-in-time view of host health and container inventory.

    Every field carries a default so a failed source still serializes
    as zero / empty rather than disappearing from the payload.
    """

    cpu_usage: float = 0.0
    ram_used: int = 0
    ram_total: int = 0
    swap_used: int = 0
    swap_total: int = 0
    uptime: int = 0
    load_avg: tuple[float, float, float] = (0.0, 0.0, 0.0)
    internet_latency: float = 0.0
    internet_reachable: bool = False
    sensors: list[tuple[str, float]] = Field(default_factory=list)
    disks: list[DiskInfo] = Field(default_factory=list)
    networks: list[NetworkInfo] = Field(default_factory=list)
    processes: list[ProcessInfo] = Field(default_factory=list)
    containers: list[ContainerInfo] = Field(default_factory=list)
    images: list[ImageInfo] = Field(default_factory=list)
