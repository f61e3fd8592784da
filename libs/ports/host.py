from __future__ import annotations

from abc import ABC, abstractmethod


class HostPort(ABC):
    """Read-only view of the monitored process; both queries are non-blocking."""

    @abstractmethod
    def is_ready_for_collection(self) -> bool: ...

    @abstractmethod
    def is_shutting_down(self) -> bool: ...
