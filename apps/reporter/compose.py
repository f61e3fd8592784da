from __future__ import annotations

import logging
from typing import Final

import httpx
from adapters.channels import LogChannel, RemoteChannel
from adapters.metrics import BasicCollector, EnvelopeCodec, FullCollector, StatsFn, process_stats
from adapters.time import SystemClockPort
from domain.provisioning import TopicProvisioner
from domain.reporting import ReportingAgent, ReportingConfiguration
from domain.reporting.service import JOIN_TIMEOUT_S
from domain.types import TopicSpec
from ports.host import HostPort
from ports.log import LogAdminPort, LogProducerPort
from ports.metrics import CollectorPort
from ports.time import ClockPort
from shared.config.identity import is_anonymous

from apps.reporter.settings import ReporterSettings

LOG: Final = logging.getLogger("reporter")

LogBackend = tuple[LogAdminPort, LogProducerPort]


def build_config(settings: ReporterSettings) -> ReportingConfiguration:
    return ReportingConfiguration(
        customer_id=settings.customer_id,
        report_interval_hours=settings.report_interval_hours,
        topic=settings.topic,
        endpoint_secure=settings.endpoint_secure,
        endpoint_insecure=settings.endpoint_insecure,
    )


def build_log_backend(settings: ReporterSettings) -> LogBackend:
    if settings.log_impl == "kafka":
        from adapters.kafka.confluent import ConfluentLogAdmin, ConfluentLogProducer

        return (
            ConfluentLogAdmin(settings.bootstrap_servers, timeout_s=settings.admin_timeout_s),
            ConfluentLogProducer(settings.bootstrap_servers),
        )

    from adapters.kafka import InMemoryLogCluster

    cluster = InMemoryLogCluster()
    return cluster, cluster


def build_channels(
    settings: ReporterSettings,
    config: ReportingConfiguration,
    backend: LogBackend | None = None,
    transport: httpx.BaseTransport | None = None,
) -> tuple[LogChannel | None, RemoteChannel | None]:
    """Enablement is decided here, once, from configuration alone."""
    log_channel: LogChannel | None = None
    remote_channel: RemoteChannel | None = None

    if config.log_enabled:
        admin, producer = backend or build_log_backend(settings)
        log_channel = LogChannel(
            producer,
            TopicProvisioner(admin),
            TopicSpec(
                name=config.topic,
                partitions=settings.topic_partitions,
                replication=settings.topic_replication,
                retention_ms=settings.topic_retention_ms,
            ),
            send_timeout_s=settings.send_timeout_s,
        )

    if config.remote_enabled:
        remote_channel = RemoteChannel(
            config.customer_id,
            endpoint_secure=config.endpoint_secure,
            endpoint_insecure=config.endpoint_insecure,
            timeout_s=settings.request_timeout_s,
            transport=transport,
        )

    return log_channel, remote_channel


def build_collector(
    settings: ReporterSettings,
    clock: ClockPort,
    host_version: str,
    stats: StatsFn | None = process_stats,
) -> CollectorPort:
    if is_anonymous(settings.customer_id):
        return BasicCollector(clock, host_version)
    return FullCollector(
        clock,
        host_version,
        settings.customer_id,
        host_id=settings.host_id or None,
        stats=stats,
    )


def stop_budget_s(settings: ReporterSettings, config: ReportingConfiguration) -> float:
    """Upper bound on one final tick against unresponsive backends."""
    budget = 0.0
    if config.log_enabled:
        # exists, live hosts, create, describe; then the acknowledgement wait
        budget += 4 * settings.admin_timeout_s + settings.send_timeout_s
    if config.remote_enabled:
        budget += 2 * settings.request_timeout_s
    return max(JOIN_TIMEOUT_S, budget + 1.0)


def build_agent(
    settings: ReporterSettings,
    host: HostPort,
    host_version: str = "unknown",
    *,
    clock: ClockPort | None = None,
    backend: LogBackend | None = None,
    transport: httpx.BaseTransport | None = None,
    stats: StatsFn | None = process_stats,
) -> ReportingAgent | None:
    """None when proactive reporting is switched off entirely."""
    if not settings.enabled:
        LOG.warning("Proactive support reporting is disabled")
        return None

    config = build_config(settings)
    log_channel, remote_channel = build_channels(settings, config, backend, transport)
    return ReportingAgent(
        config,
        host,
        build_collector(settings, clock or SystemClockPort(), host_version, stats),
        EnvelopeCodec(),
        log_channel=log_channel,
        remote_channel=remote_channel,
        settling_s=settings.settling_s,
        join_timeout_s=stop_budget_s(settings, config),
    )
