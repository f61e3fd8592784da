from __future__ import annotations

from concurrent.futures import Future
from types import SimpleNamespace

import pytest

try:
    import confluent_kafka  # noqa: F401
except Exception:
    pytest.skip("confluent-kafka not installed", allow_module_level=True)

from adapters.kafka.confluent import ConfluentLogAdmin, ConfluentLogProducer
from confluent_kafka import KafkaError, KafkaException
from domain.types import TopicLayout
from shared.errors import DeliveryError, LogAdminError, TopicExistsError

pytestmark = pytest.mark.contract


def _partition(replicas: int) -> SimpleNamespace:
    return SimpleNamespace(replicas=list(range(replicas)))


class _StubAdminClient:
    """Mimics the parts of confluent_kafka.admin.AdminClient we call."""

    def __init__(self, brokers: int = 3) -> None:
        self.brokers = {i: object() for i in range(brokers)}
        self.topics: dict[str, SimpleNamespace] = {}
        self.create_error: KafkaException | None = None
        self.created: list = []

    def list_topics(self, timeout: float = -1):
        return SimpleNamespace(brokers=self.brokers, topics=self.topics)

    def create_topics(self, new_topics, request_timeout: float = -1):
        out = {}
        for nt in new_topics:
            self.created.append(nt)
            f: Future = Future()
            if self.create_error is not None:
                f.set_exception(self.create_error)
            else:
                f.set_result(None)
            out[nt.topic] = f
        return out


def test_admin_reports_existence_and_live_brokers():
    client = _StubAdminClient(brokers=2)
    client.topics["t"] = SimpleNamespace(error=None, partitions={0: _partition(2)})
    admin = ConfluentLogAdmin("b:9092", client=client)
    assert admin.topic_exists("t")
    assert not admin.topic_exists("missing")
    assert admin.live_host_count() == 2


def test_topic_with_error_counts_as_missing():
    client = _StubAdminClient()
    client.topics["t"] = SimpleNamespace(
        error=KafkaError(KafkaError.UNKNOWN_TOPIC_OR_PART), partitions={}
    )
    admin = ConfluentLogAdmin("b:9092", client=client)
    assert not admin.topic_exists("t")
    assert admin.describe_topic("t") is None


def test_describe_reads_first_partition_replicas():
    client = _StubAdminClient()
    client.topics["t"] = SimpleNamespace(
        error=None, partitions={0: _partition(1), 1: _partition(3)}
    )
    admin = ConfluentLogAdmin("b:9092", client=client)
    assert admin.describe_topic("t") == TopicLayout(partition_count=2, first_partition_replicas=1)


def test_create_passes_retention_config():
    client = _StubAdminClient()
    ConfluentLogAdmin("b:9092", client=client).create_topic("t", 1, 3, {"retention.ms": "1000"})
    (nt,) = client.created
    assert nt.topic == "t"
    assert nt.num_partitions == 1
    assert nt.replication_factor == 3
    assert nt.config == {"retention.ms": "1000"}


def test_create_race_maps_to_topic_exists():
    client = _StubAdminClient()
    client.create_error = KafkaException(KafkaError(KafkaError.TOPIC_ALREADY_EXISTS))
    with pytest.raises(TopicExistsError):
        ConfluentLogAdmin("b:9092", client=client).create_topic("t", 1, 3, {})


def test_other_create_errors_map_to_admin_error():
    client = _StubAdminClient()
    client.create_error = KafkaException(KafkaError(KafkaError.INVALID_REPLICATION_FACTOR))
    with pytest.raises(LogAdminError):
        ConfluentLogAdmin("b:9092", client=client).create_topic("t", 1, 3, {})


class _StubProducer:
    def __init__(self, err=None, ack: bool = True) -> None:
        self.err = err
        self.ack = ack
        self.produced: list[tuple[str, bytes]] = []
        self._pending = None

    def produce(self, topic, value=None, on_delivery=None):
        self.produced.append((topic, value))
        self._pending = on_delivery

    def flush(self, timeout=None):
        if self.ack and self._pending is not None:
            self._pending(self.err, None)
            self._pending = None
            return 0
        return 1


def test_producer_waits_for_ack():
    stub = _StubProducer()
    ConfluentLogProducer("b:9092", producer=stub).send("t", b"rec", timeout_s=1.0)
    assert stub.produced == [("t", b"rec")]


def test_producer_raises_on_timeout():
    with pytest.raises(DeliveryError, match="No acknowledgement"):
        ConfluentLogProducer("b:9092", producer=_StubProducer(ack=False)).send("t", b"rec", 0.1)


def test_producer_raises_on_broker_error():
    stub = _StubProducer(err=KafkaError(KafkaError.MSG_SIZE_TOO_LARGE))
    with pytest.raises(DeliveryError, match="Broker rejected record"):
        ConfluentLogProducer("b:9092", producer=stub).send("t", b"rec", 1.0)
