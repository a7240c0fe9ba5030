from .base import BaseCollector
from .container_logs import LogRetriever
from .containers import ContainerInventoryReader
from .host_metrics import HostMetricsReader, RefreshScope
from .process_scanner import ProcessScanner
from .reachability import ReachabilityProber

__all__ = [
    "BaseCollector",
    "ContainerInventoryReader",
    "HostMetricsReader",
    "LogRetriever",
    "ProcessScanner",
    "ReachabilityProber",
    "RefreshScope",
]
