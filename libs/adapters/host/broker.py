from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ports.host import HostPort


class BrokerState(Enum):
    NOT_RUNNING = "NotRunning"
    STARTING = "Starting"
    RECOVERING = "RecoveringFromUncleanShutdown"
    RUNNING_AS_BROKER = "RunningAsBroker"
    RUNNING_AS_CONTROLLER = "RunningAsController"
    PENDING_CONTROLLED_SHUTDOWN = "PendingControlledShutdown"
    SHUTTING_DOWN = "BrokerShuttingDown"


_READY = frozenset({BrokerState.RUNNING_AS_BROKER, BrokerState.RUNNING_AS_CONTROLLER})
_STOPPING = frozenset({BrokerState.PENDING_CONTROLLED_SHUTDOWN, BrokerState.SHUTTING_DOWN})


class BrokerStateHost(HostPort):
    """Host facade over a callable returning the broker's current state."""

    def __init__(self, state_fn: Callable[[], BrokerState | str]) -> None:
        self._state_fn = state_fn

    def _state(self) -> BrokerState | None:
        raw = self._state_fn()
        if isinstance(raw, BrokerState):
            return raw
        try:
            return BrokerState(raw)
        except ValueError:
            return None

    def is_ready_for_collection(self) -> bool:
        return self._state() in _READY

    def is_shutting_down(self) -> bool:
        return self._state() in _STOPPING
