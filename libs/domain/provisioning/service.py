# libs/domain/provisioning/service.py
from __future__ import annotations

import logging
from typing import Final

from ports.log import LogAdminPort
from shared.errors import TopicExistsError

from domain.types import ProvisioningOutcome, TopicLayout

LOG: Final = logging.getLogger("reporter.provisioning")


class TopicProvisioner:
    """
    Makes sure the durable log topic exists and reports how well it is
    replicated. Safe to call repeatedly and from several hosts at once:
    an existing topic is only verified, and losing a creation race is fine.
    Never raises; every failure is a ProvisioningOutcome.
    """

    def __init__(self, admin: LogAdminPort) -> None:
        self.admin: Final = admin

    def ensure_exists(
        self, name: str, partitions: int, replication: int, retention_ms: int
    ) -> ProvisioningOutcome:
        if not name or partitions <= 0 or replication <= 0 or retention_ms <= 0:
            LOG.error(
                "Refusing to provision topic %r (partitions=%s, replication=%s, retention_ms=%s)",
                name,
                partitions,
                replication,
                retention_ms,
            )
            return ProvisioningOutcome.FAILED

        try:
            exists = self.admin.topic_exists(name)
        except Exception as ex:
            LOG.error("Could not look up topic %s: %s", name, ex)
            return ProvisioningOutcome.FAILED

        if not exists:
            outcome = self._create(name, partitions, replication, retention_ms)
            if outcome is not None:
                return outcome

        return self.verify(name, partitions, replication)

    def _create(
        self, name: str, partitions: int, replication: int, retention_ms: int
    ) -> ProvisioningOutcome | None:
        """Returns FAILED on error, None when verification should follow."""
        try:
            live_hosts = self.admin.live_host_count()
        except Exception as ex:
            LOG.error("Could not count live brokers while creating topic %s: %s", name, ex)
            return ProvisioningOutcome.FAILED
        if live_hosts <= 0:
            LOG.error("Could not create topic %s: no live brokers", name)
            return ProvisioningOutcome.FAILED

        effective = min(replication, live_hosts)
        if effective < replication:
            LOG.warning(
                "The replication factor of topic %s will be set to %d, which is less than the "
                "desired replication factor of %d (reason: this cluster contains only %d brokers). "
                "If you happen to add more brokers to this cluster, then it is important to "
                "increase the replication factor of the topic to eventually %d to ensure "
                "reliable and durable metrics collection.",
                name,
                effective,
                replication,
                live_hosts,
                replication,
            )

        LOG.info(
            "Attempting to create topic %s with %d replicas, assuming %d total brokers",
            name,
            effective,
            live_hosts,
        )
        try:
            self.admin.create_topic(
                name, partitions, effective, {"retention.ms": str(retention_ms)}
            )
        except TopicExistsError:
            LOG.info("Topic %s already exists", name)
        except Exception as ex:
            LOG.error("Could not create topic %s: %s", name, ex)
            return ProvisioningOutcome.FAILED
        return None

    def verify(self, name: str, partitions: int, replication: int) -> ProvisioningOutcome:
        try:
            layout: TopicLayout | None = self.admin.describe_topic(name)
        except Exception as ex:
            LOG.error("Could not read metadata of topic %s: %s", name, ex)
            return ProvisioningOutcome.INADEQUATE

        if layout is None or layout.partition_count <= 0:
            LOG.error("No partitions are assigned to topic %s", name)
            return ProvisioningOutcome.INADEQUATE

        if layout.partition_count != partitions:
            LOG.warning(
                "The topic %s should have only %d partitions. Having more partitions should "
                "not hurt but it is only needed under special circumstances.",
                name,
                partitions,
            )

        actual = layout.first_partition_replicas
        if actual <= 0:
            LOG.error("No replicas known for partition 0 of topic %s", name)
            return ProvisioningOutcome.INADEQUATE
        if actual < replication:
            LOG.warning(
                "The replication factor of topic %s is %d, which is less than the desired "
                "replication factor of %d. If you happen to add more brokers to this cluster, "
                "then it is important to increase the replication factor of the topic to "
                "eventually %d to ensure reliable and durable metrics collection.",
                name,
                actual,
                replication,
                replication,
            )
            return ProvisioningOutcome.DEGRADED
        return ProvisioningOutcome.ADEQUATE
