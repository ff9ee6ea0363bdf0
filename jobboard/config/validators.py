"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration

SHORT_REFRESH_SECONDS = 300
LARGE_REFRESH_LIMIT = 500000


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dictionary for settings that are valid but risky.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    refresh_interval = config_dict.get("refresh_interval")
    if isinstance(refresh_interval, str):
        try:
            if parse_duration(refresh_interval) < SHORT_REFRESH_SECONDS:
                warning_messages.append(
                    f"Short refresh_interval ({refresh_interval}) may trigger provider rate limits"
                )
        except DurationParseError:
            # Reported as a hard error by model validation
            pass

    provider = config_dict.get("provider") or {}
    if isinstance(provider, dict):
        refresh_limit = provider.get("refresh_limit")
        if isinstance(refresh_limit, int) and refresh_limit > LARGE_REFRESH_LIMIT:
            warning_messages.append(
                f"Large refresh_limit ({refresh_limit}) holds the whole response in memory"
            )

        retry_attempts = provider.get("retry_attempts")
        if retry_attempts == 1:
            warning_messages.append("retry_attempts is 1: provider failures will not be retried")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
