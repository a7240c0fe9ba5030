"""Tests for hostdash.models — snapshot defaults and JSON shape."""

from __future__ import annotations

from hostdash.models import (
    ContainerInfo,
    DiskInfo,
    ImageInfo,
    NetworkInfo,
    ProcessInfo,
    SystemSnapshot,
)

SNAPSHOT_FIELDS = {
    "cpu_usage", "ram_used", "ram_total", "swap_used", "swap_total",
    "uptime", "load_avg", "internet_latency", "internet_reachable",
    "sensors", "disks", "networks", "processes", "containers", "images",
}


# ── SystemSnapshot ────────────────────────────────────

class TestSystemSnapshot:
    def test_every_field_present_by_default(self):
        data = SystemSnapshot().model_dump(mode="json")
        assert set(data) == SNAPSHOT_FIELDS

    def test_defaults_are_zero_or_empty(self):
        data = SystemSnapshot().model_dump(mode="json")
        assert data["cpu_usage"] == 0.0
        assert data["internet_latency"] == 0.0
        assert data["internet_reachable"] is False
        assert data["load_avg"] == [0.0, 0.0, 0.0]
        for key in ("sensors", "disks", "networks", "processes", "containers", "images"):
            assert data[key] == []

    def test_lists_are_not_shared_between_instances(self):
        a = SystemSnapshot()
        b = SystemSnapshot()
        a.disks.append(DiskInfo(name="sda", mount_point="/"))
        assert b.disks == []

    def test_sensors_serialize_as_pairs(self):
        s = SystemSnapshot(sensors=[("coretemp Package id 0", 48.0), ("acpitz", 40.5)])
        data = s.model_dump(mode="json")
        assert data["sensors"] == [["coretemp Package id 0", 48.0], ["acpitz", 40.5]]

    def test_nested_models_serialize(self):
        s = SystemSnapshot(
            networks=[NetworkInfo(name="eth0", received=10, transmitted=20)],
            processes=[ProcessInfo(name="postgres", memory_mb=512)],
            containers=[ContainerInfo(name="web", status="Up 2 hours", state="running")],
            images=[ImageInfo(repo="nginx", id="abc123abc123", size_gb=0.18, in_use=True)],
        )
        data = s.model_dump(mode="json")
        assert data["networks"][0] == {"name": "eth0", "received": 10, "transmitted": 20}
        assert data["processes"][0] == {"name": "postgres", "memory_mb": 512}
        assert data["containers"][0]["ports"] == "-"
        assert data["images"][0]["tag"] == "latest"
        assert data["images"][0]["in_use"] is True


class TestDiskInfo:
    def test_capacities_are_integers(self):
        d = DiskInfo(name="/dev/sda1", mount_point="/", total_gb=500, used_gb=300)
        data = d.model_dump()
        assert isinstance(data["total_gb"], int)
        assert isinstance(data["used_gb"], int)
