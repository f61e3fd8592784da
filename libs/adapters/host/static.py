from __future__ import annotations

from ports.host import HostPort


class StaticHostPort(HostPort):
    """Host facade for standalone runs: answers whatever it was told."""

    def __init__(self, ready: bool = True, shutting_down: bool = False) -> None:
        self.ready = ready
        self.shutting_down = shutting_down

    def is_ready_for_collection(self) -> bool:
        return self.ready

    def is_shutting_down(self) -> bool:
        return self.shutting_down
