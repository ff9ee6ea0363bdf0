"""Shared utilities: timestamps and the injectable clock."""

from .clock import SYSTEM_CLOCK, Clock
from .timestamps import (
    coerce_timestamp,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    "Clock",
    "SYSTEM_CLOCK",
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "coerce_timestamp",
    "format_timestamp",
]
