"""Time source abstraction.

Retry backoff and snapshot timestamps go through a Clock so tests can replace
real waiting with a recorded, simulated delay.
"""

import time
from datetime import datetime

from .timestamps import utc_now


class Clock:
    """Wall clock backed by ``datetime.now`` and ``time.sleep``."""

    def now(self) -> datetime:
        return utc_now()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


SYSTEM_CLOCK = Clock()
