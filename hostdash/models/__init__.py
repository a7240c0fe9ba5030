from .snapshot import (
    ContainerInfo,
    DiskInfo,
    ImageInfo,
    NetworkInfo,
    ProcessInfo,
    SystemSnapshot,
)

__all__ = [
    "ContainerInfo",
    "DiskInfo",
    "ImageInfo",
    "NetworkInfo",
    "ProcessInfo",
    "SystemSnapshot",
]
