"""Dataset statistics."""

from .aggregator import JobStats, compute_stats

__all__ = ["JobStats", "compute_stats"]
