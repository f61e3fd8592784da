from __future__ import annotations

from abc import ABC, abstractmethod


class ClockPort(ABC):
    """Source of wall-clock timestamps for snapshots."""

    @abstractmethod
    def now(self) -> float:
        """Seconds since the Unix epoch."""
