from __future__ import annotations

import logging
from typing import Final

from domain.provisioning import TopicProvisioner
from domain.types import ProvisioningOutcome, TopicSpec
from ports.delivery import ProvisionedChannelPort
from ports.log import LogProducerPort

LOG: Final = logging.getLogger("reporter.channels.log")

DEFAULT_SEND_TIMEOUT_S: Final = 10.0


class LogChannel(ProvisionedChannelPort):
    """Writes encoded snapshots to the cluster's durable metrics topic."""

    name = "log"

    def __init__(
        self,
        producer: LogProducerPort,
        provisioner: TopicProvisioner,
        topic: TopicSpec,
        send_timeout_s: float = DEFAULT_SEND_TIMEOUT_S,
    ) -> None:
        if not topic.name:
            raise ValueError("must specify topic")
        self.producer: Final = producer
        self.provisioner: Final = provisioner
        self.topic: Final = topic
        self._send_timeout_s = send_timeout_s
        self.last_outcome: ProvisioningOutcome | None = None

    def provision(self) -> ProvisioningOutcome:
        t = self.topic
        self.last_outcome = self.provisioner.ensure_exists(
            t.name, t.partitions, t.replication, t.retention_ms
        )
        return self.last_outcome

    def submit(self, payload: bytes | None) -> bool:
        if not payload:
            LOG.error(
                "Could not submit metrics to topic %s (metrics data missing)", self.topic.name
            )
            return False
        try:
            outcome = self.provision()
            if not outcome.usable:
                LOG.error(
                    "Skipping submission to topic %s: topic is %s",
                    self.topic.name,
                    outcome.value,
                )
                return False
            self.producer.send(self.topic.name, payload, self._send_timeout_s)
        except Exception as ex:
            LOG.error("Failed to submit metrics to topic %s: %s", self.topic.name, ex)
            return False
        LOG.info("Successfully submitted metrics to topic %s", self.topic.name)
        return True
