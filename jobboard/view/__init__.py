"""Merged view over local postings and the external snapshot."""

from .merger import JobMerger, RecordSource, View, sort_key

__all__ = ["JobMerger", "RecordSource", "View", "sort_key"]
