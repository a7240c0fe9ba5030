from .aggregator import SnapshotAggregator

__all__ = ["SnapshotAggregator"]
