from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from domain.types import TopicLayout


class LogAdminPort(ABC):
    """Cluster administration needed to provision the durable log topic."""

    @abstractmethod
    def topic_exists(self, name: str) -> bool: ...

    @abstractmethod
    def live_host_count(self) -> int: ...

    @abstractmethod
    def create_topic(
        self, name: str, partitions: int, replication: int, config: Mapping[str, str]
    ) -> None:
        """Raises TopicExistsError when a concurrent creator got there first."""

    @abstractmethod
    def describe_topic(self, name: str) -> TopicLayout | None:
        """None when the topic's metadata cannot be read."""


class LogProducerPort(ABC):
    @abstractmethod
    def send(self, topic: str, value: bytes, timeout_s: float) -> None:
        """Block until acknowledged; raise DeliveryError otherwise."""
