from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

from confluent_kafka import KafkaError, KafkaException, Producer
from confluent_kafka.admin import AdminClient, NewTopic
from domain.types import TopicLayout
from ports.log import LogAdminPort, LogProducerPort
from shared.errors import DeliveryError, LogAdminError, TopicExistsError

LOG: Final = logging.getLogger("reporter.kafka")

METADATA_TIMEOUT_S: Final = 10.0
REQUIRED_ACKS: Final = "1"


class ConfluentLogAdmin(LogAdminPort):
    """LogAdminPort over confluent-kafka's AdminClient."""

    def __init__(
        self,
        bootstrap_servers: str,
        timeout_s: float = METADATA_TIMEOUT_S,
        client: Any | None = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._client = client or AdminClient({"bootstrap.servers": bootstrap_servers})

    def _metadata(self) -> Any:
        try:
            return self._client.list_topics(timeout=self._timeout_s)
        except KafkaException as ex:
            raise LogAdminError(f"Could not fetch cluster metadata: {ex}") from ex

    def topic_exists(self, name: str) -> bool:
        t = self._metadata().topics.get(name)
        return t is not None and t.error is None

    def live_host_count(self) -> int:
        return len(self._metadata().brokers)

    def create_topic(
        self, name: str, partitions: int, replication: int, config: Mapping[str, str]
    ) -> None:
        new_topic = NewTopic(
            name,
            num_partitions=partitions,
            replication_factor=replication,
            config=dict(config),
        )
        futures = self._client.create_topics([new_topic], request_timeout=self._timeout_s)
        try:
            futures[name].result()
        except KafkaException as ex:
            err = ex.args[0] if ex.args else None
            if isinstance(err, KafkaError) and err.code() == KafkaError.TOPIC_ALREADY_EXISTS:
                raise TopicExistsError(name) from ex
            raise LogAdminError(f"Could not create topic {name}: {ex}") from ex

    def describe_topic(self, name: str) -> TopicLayout | None:
        try:
            t = self._metadata().topics.get(name)
        except LogAdminError as ex:
            LOG.debug("Metadata for topic %s unavailable: %s", name, ex)
            return None
        if t is None or t.error is not None:
            return None
        first = t.partitions.get(0)
        return TopicLayout(
            partition_count=len(t.partitions),
            first_partition_replicas=len(first.replicas) if first is not None else 0,
        )


class ConfluentLogProducer(LogProducerPort):
    """Produces one record at a time and waits for the broker's acknowledgement."""

    def __init__(self, bootstrap_servers: str, producer: Any | None = None) -> None:
        self._bootstrap_servers = bootstrap_servers
        self._producer = producer

    def _get_producer(self) -> Any:
        if self._producer is None:
            self._producer = Producer(
                {
                    "bootstrap.servers": self._bootstrap_servers,
                    "acks": REQUIRED_ACKS,
                }
            )
        return self._producer

    def send(self, topic: str, value: bytes, timeout_s: float) -> None:
        outcome: dict[str, Any] = {}

        def _on_delivery(err: Any, msg: Any) -> None:
            outcome["err"] = err
            outcome["done"] = True

        p = self._get_producer()
        try:
            p.produce(topic, value=value, on_delivery=_on_delivery)
        except (KafkaException, BufferError) as ex:
            raise DeliveryError(f"Could not enqueue record: {ex}", topic) from ex

        remaining = p.flush(timeout_s)
        if not outcome.get("done"):
            raise DeliveryError(
                f"No acknowledgement within {timeout_s:.1f}s ({remaining} pending)", topic
            )
        if outcome["err"] is not None:
            raise DeliveryError(f"Broker rejected record: {outcome['err']}", topic)
