from __future__ import annotations

import time

from ports.time import ClockPort


class SystemClockPort(ClockPort):
    """Unix wall-clock seconds."""

    def now(self) -> float:
        return time.time()
