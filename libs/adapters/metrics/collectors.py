from __future__ import annotations

import os
import platform
from collections.abc import Callable, Mapping

from ports.metrics import CollectorPort
from ports.time import ClockPort
from shared.contracts.v1.snapshot import BasicMetrics, FullMetrics
from shared.version import __version__


StatsFn = Callable[[], Mapping[str, int | float | str]]


def process_stats() -> dict[str, int | float | str]:
    """Runtime facts about the reporting process itself."""
    return {
        "python_version": platform.python_version(),
        "python_implementation": platform.python_implementation(),
        "os_name": platform.system(),
        "os_release": platform.release(),
        "arch": platform.machine(),
        "cpu_count": os.cpu_count() or 0,
        "pid": os.getpid(),
    }


class BasicCollector(CollectorPort):
    def __init__(self, clock: ClockPort, host_version: str) -> None:
        self._clock = clock
        self._host_version = host_version

    def collect(self) -> BasicMetrics:
        return BasicMetrics(
            timestamp=int(self._clock.now()),
            host_version=self._host_version,
            reporter_version=__version__,
        )


class FullCollector(CollectorPort):
    """Basic fields plus host identity and whatever the host's stats callable reports."""

    def __init__(
        self,
        clock: ClockPort,
        host_version: str,
        customer_id: str,
        host_id: str | None = None,
        stats: StatsFn | None = None,
    ) -> None:
        self._clock = clock
        self._host_version = host_version
        self._customer_id = customer_id
        self._host_id = host_id
        self._stats = stats
        self._started = clock.now()

    def collect(self) -> FullMetrics:
        now = self._clock.now()
        runtime = dict(self._stats()) if self._stats else {}
        return FullMetrics(
            timestamp=int(now),
            host_version=self._host_version,
            reporter_version=__version__,
            customer_id=self._customer_id,
            host_id=self._host_id,
            uptime_ms=int((now - self._started) * 1000),
            runtime=runtime,
        )
