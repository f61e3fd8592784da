from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field

from domain.types import TopicLayout
from ports.log import LogAdminPort, LogProducerPort
from shared.errors import DeliveryError, LogAdminError, TopicExistsError


@dataclass
class FakeTopic:
    partitions: int
    replication: int
    config: dict[str, str]
    records: list[bytes] = field(default_factory=list)


class InMemoryLogCluster(LogAdminPort, LogProducerPort):
    """
    In-process stand-in for a durable log cluster.

    Knobs:
      live_hosts         -- brokers reported as alive
      race_on_create     -- create_topic registers the topic, then raises TopicExistsError
      unreadable         -- describe_topic returns None
      fail_sends         -- send raises DeliveryError
      unreachable        -- every admin call raises LogAdminError
    """

    def __init__(self, live_hosts: int = 3) -> None:
        self.live_hosts = live_hosts
        self.race_on_create = False
        self.unreadable = False
        self.fail_sends = False
        self.unreachable = False
        self.topics: dict[str, FakeTopic] = {}
        self.create_calls = 0
        self._lock = threading.Lock()

    def _check_reachable(self) -> None:
        if self.unreachable:
            raise LogAdminError("cluster unreachable")

    # --- admin ---------------------------------------------------------------

    def topic_exists(self, name: str) -> bool:
        self._check_reachable()
        return name in self.topics

    def live_host_count(self) -> int:
        self._check_reachable()
        return self.live_hosts

    def create_topic(
        self, name: str, partitions: int, replication: int, config: Mapping[str, str]
    ) -> None:
        self._check_reachable()
        with self._lock:
            self.create_calls += 1
            if replication > self.live_hosts:
                raise LogAdminError(
                    f"replication factor {replication} larger than available brokers"
                )
            exists = name in self.topics
            if not exists:
                self.topics[name] = FakeTopic(partitions, replication, dict(config))
        if exists or self.race_on_create:
            raise TopicExistsError(name)

    def describe_topic(self, name: str) -> TopicLayout | None:
        self._check_reachable()
        t = self.topics.get(name)
        if t is None or self.unreadable:
            return None
        return TopicLayout(partition_count=t.partitions, first_partition_replicas=t.replication)

    # --- producer ------------------------------------------------------------

    def send(self, topic: str, value: bytes, timeout_s: float) -> None:
        if self.fail_sends:
            raise DeliveryError("simulated send failure", topic)
        with self._lock:
            t = self.topics.get(topic)
            if t is None:
                raise DeliveryError(f"unknown topic {topic}", topic)
            t.records.append(bytes(value))

    def records(self, topic: str) -> list[bytes]:
        t = self.topics.get(topic)
        return list(t.records) if t else []
