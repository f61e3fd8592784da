from __future__ import annotations

from abc import ABC, abstractmethod

from shared.contracts.v1.snapshot import MetricsSnapshot


class CollectorPort(ABC):
    """Produces one immutable snapshot per call. May raise."""

    @abstractmethod
    def collect(self) -> MetricsSnapshot: ...


class CodecPort(ABC):
    @abstractmethod
    def encode(self, snapshot: MetricsSnapshot) -> bytes: ...

    @abstractmethod
    def decode(self, data: bytes) -> list[MetricsSnapshot]: ...
