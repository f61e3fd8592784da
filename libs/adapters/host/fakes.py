from __future__ import annotations

from ports.host import HostPort


class FakeHostPort(HostPort):
    """
    Becomes ready (or starts shutting down) after a number of polls.
    Poll counts are recorded so tests can assert the wait phase ran.
    """

    def __init__(self, ready_after: int | None = 0, shutdown_after: int | None = None) -> None:
        self.ready_after = ready_after
        self.shutdown_after = shutdown_after
        self.ready_polls = 0
        self.shutdown_polls = 0

    def is_ready_for_collection(self) -> bool:
        self.ready_polls += 1
        return self.ready_after is not None and self.ready_polls > self.ready_after

    def is_shutting_down(self) -> bool:
        self.shutdown_polls += 1
        return self.shutdown_after is not None and self.shutdown_polls > self.shutdown_after
