"""Test helper utilities for job board tests."""

from .records import make_record, utc

__all__ = ["make_record", "utc"]
