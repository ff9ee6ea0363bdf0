"""External snapshot cache with stale-serve-on-failure refresh."""

from .refresh import DEFAULT_REFRESH_LIMIT, RefreshCache

__all__ = ["RefreshCache", "DEFAULT_REFRESH_LIMIT"]
