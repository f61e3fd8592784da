from __future__ import annotations

from abc import ABC, abstractmethod

from domain.types import ProvisioningOutcome


class ChannelPort(ABC):
    """One delivery path for encoded snapshots.

    ``submit`` never raises: failures are logged and reported as ``False``.
    """

    name: str

    @abstractmethod
    def submit(self, payload: bytes | None) -> bool: ...


class ProvisionedChannelPort(ChannelPort):
    """A channel backed by a shared resource that must be provisioned before use."""

    @abstractmethod
    def provision(self) -> ProvisioningOutcome: ...
