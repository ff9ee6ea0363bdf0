"""Duration strings for the refresh interval ("30m", "1h", "PT15M")."""

import re


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""


_ISO_PATTERN = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")
_HUMAN_PATTERN = re.compile(r"(\d+)\s*([smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(duration_str: str) -> int:
    """Parse a duration to whole seconds.

    Accepts human-readable units, combined or not ("45m", "1h30m"), and
    ISO-8601 durations ("PT1H", "P1D").

    Raises:
        DurationParseError: If the string is empty, malformed or zero

    Examples:
        >>> parse_duration("1h30m")
        5400
        >>> parse_duration("PT15M")
        900
    """
    duration_str = (duration_str or "").strip()
    if not duration_str:
        raise DurationParseError("Duration string cannot be empty")

    if duration_str.upper().startswith("P"):
        total = _parse_iso8601(duration_str.upper())
    else:
        total = _parse_human(duration_str.lower())

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return total


def _parse_iso8601(duration_str: str) -> int:
    match = _ISO_PATTERN.match(duration_str)
    if not match or duration_str in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{duration_str}'. "
            "Expected format like 'P1D', 'PT1H30M' or 'PT15M'"
        )

    days, hours, minutes, seconds = match.groups()
    return (
        int(days or 0) * 86400
        + int(hours or 0) * 3600
        + int(minutes or 0) * 60
        + int(float(seconds or 0))
    )


def _parse_human(duration_str: str) -> int:
    matches = _HUMAN_PATTERN.findall(duration_str)
    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{duration_str}'. "
            "Expected format like '30m', '1h' or '1h30m'"
        )

    # Every character must belong to a number+unit pair
    if "".join(num + unit for num, unit in matches) != re.sub(r"\s+", "", duration_str):
        raise DurationParseError(
            f"Invalid characters in duration: '{duration_str}'. "
            "Use only digits and units: s, m, h, d"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in matches)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 60,
    max_seconds: int = 86400,
) -> None:
    """Reject refresh intervals outside [min_seconds, max_seconds].

    Raises:
        DurationParseError: If the duration is out of range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Refresh interval too short: {duration_seconds}s. Minimum is {min_seconds}s."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Refresh interval too long: {duration_seconds}s. Maximum is {max_seconds}s."
        )
