"""Timestamp helpers.

Job records arrive with dates in several shapes: ``datetime`` objects from the
local store, ISO 8601 strings from the provider, and occasionally epoch numbers
(seconds or milliseconds). Everything is coerced to timezone-aware UTC here.
"""

from datetime import datetime, timezone
from typing import Any, Optional

# Epoch values above this are taken to be milliseconds (year 5138 in seconds)
_EPOCH_MILLIS_THRESHOLD = 100_000_000_000


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Make ``dt`` timezone-aware UTC. Naive values are assumed to be UTC."""
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 string to UTC, returning None when it does not parse.

    Supports ``2025-11-04T12:00:00Z``, explicit offsets, naive timestamps and
    bare dates.

    Example:
        >>> parse_iso_datetime("2024-06-01").day
        1
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z") or cleaned.endswith("z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"):
        try:
            return ensure_utc(datetime.strptime(iso_string.strip(), fmt))
        except ValueError:
            continue

    return None


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Best-effort conversion of a loosely typed date value to UTC.

    Args:
        value: datetime, ISO string, or epoch number (seconds or milliseconds)

    Returns:
        Aware UTC datetime, or None if the value is missing or unparsable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= _EPOCH_MILLIS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        stripped = value.strip()
        # Short digit runs like "2024" are years, not epochs
        if stripped.isdigit() and len(stripped) >= 9:
            return coerce_timestamp(int(stripped))
        return parse_iso_datetime(stripped)

    return None


def format_timestamp(dt: Optional[datetime], include_microseconds: bool = False) -> Optional[str]:
    """Format ``dt`` as ISO 8601 UTC with a ``Z`` suffix, or None."""
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return None

    if include_microseconds:
        return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")
