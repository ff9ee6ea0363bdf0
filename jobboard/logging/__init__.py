"""Structured logging helpers shared by every job board component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name onto every record.

    Fields passed through ``extra`` on the individual call win over the
    adapter defaults, so a call may still override ``component``.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally bound to a component.

    Args:
        name: Logger name (typically __name__)
        component: Component label injected into all records (e.g. "provider")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="cache")
        >>> logger.info("Snapshot swapped", extra={"event": "cache.refresh.succeeded"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
