# libs/domain/reporting/service.py
from __future__ import annotations

import logging
import random
import threading
from typing import Final

from ports.delivery import ChannelPort, ProvisionedChannelPort
from ports.host import HostPort
from ports.metrics import CodecPort, CollectorPort
from shared.errors import ConfigurationError

from .model import AgentState, ReportingConfiguration
from .schedule import SETTLING_TIME_S, add_jitter

LOG: Final = logging.getLogger("reporter.agent")

JOIN_TIMEOUT_S: Final = 30.0


class ReportingAgent:
    """
    Periodically collects a metrics snapshot and hands it to each enabled
    channel. Everything runs on one background thread:

        WAITING_FOR_HOST -> COLLECTING -> TERMINATED
        WAITING_FOR_HOST -> TERMINATED   (host shutting down, or stopped)

    Stopping while COLLECTING runs one last best-effort tick. Nothing raised
    on the reporting thread reaches the host.
    """

    def __init__(
        self,
        config: ReportingConfiguration,
        host: HostPort,
        collector: CollectorPort,
        codec: CodecPort,
        *,
        log_channel: ProvisionedChannelPort | None = None,
        remote_channel: ChannelPort | None = None,
        settling_s: float = SETTLING_TIME_S,
        report_interval_s: float | None = None,
        join_timeout_s: float = JOIN_TIMEOUT_S,
        rng: random.Random | None = None,
    ) -> None:
        if settling_s <= 0:
            raise ConfigurationError("settling time must be positive", "settling_s")
        if report_interval_s is not None and report_interval_s <= 0:
            raise ConfigurationError("report interval must be positive", "report_interval_s")
        self.config: Final = config
        self.host: Final = host
        self.collector: Final = collector
        self.codec: Final = codec
        self.log_channel: Final = log_channel
        self.remote_channel: Final = remote_channel
        self._settling_s = settling_s
        self._interval_s = (
            report_interval_s if report_interval_s is not None else config.report_interval_s
        )
        self._rng = rng or random.Random()
        self.join_timeout_s = join_timeout_s
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = AgentState.WAITING_FOR_HOST
        self.ticks = 0

        if not self.is_reporting_enabled():
            LOG.info("Metrics collection disabled by configuration")

    # --- lifecycle ------------------------------------------------------------

    @property
    def state(self) -> AgentState:
        return self._state

    def is_reporting_enabled(self) -> bool:
        return self.log_channel is not None or self.remote_channel is not None

    def start(self) -> None:
        if self._thread is not None:
            LOG.debug("Reporter thread already started")
            return
        t = threading.Thread(target=self.run, name="support-metrics-reporter", daemon=True)
        self._thread = t
        t.start()

    def stop(self, timeout: float | None = None) -> bool:
        """Request shutdown and join for at most ``timeout`` seconds
        (default ``join_timeout_s``, which should cover one final tick).

        Returns False if the thread is still running afterwards.
        """
        if timeout is None:
            timeout = self.join_timeout_s
        self._stop.set()
        t = self._thread
        if t is None or t is threading.current_thread():
            return True
        t.join(timeout)
        if t.is_alive():
            LOG.warning("Reporter thread did not stop within %.1fs", timeout)
            return False
        return True

    def run(self) -> None:
        try:
            if self._wait_for_host():
                self._collect()
        except Exception as ex:
            LOG.error("Terminating metrics collection: %s", ex)
        finally:
            self._state = AgentState.TERMINATED
            LOG.info("Metrics collection stopped")

    # --- phases ---------------------------------------------------------------

    def _wait_for_host(self) -> bool:
        LOG.info("Waiting for monitored host to start up...")
        while True:
            if self._stop.wait(add_jitter(self._settling_s, self._rng)):
                return False
            if self.host.is_shutting_down():
                LOG.info("Host is shutting down; not starting metrics collection")
                return False
            if self.host.is_ready_for_collection():
                return True

    def _collect(self) -> None:
        if not self.is_reporting_enabled():
            LOG.info("Metrics collection disabled by configuration")
            return

        self._state = AgentState.COLLECTING
        if self.log_channel is not None:
            self.log_channel.provision()

        LOG.info("Metrics collection started")
        while not self._stop.wait(add_jitter(self._interval_s, self._rng)):
            self.submit_metrics()
        # Submit a final metrics update before shutdown.
        self.submit_metrics()

    # --- one tick -------------------------------------------------------------

    def _channels(self) -> list[ChannelPort]:
        return [c for c in (self.log_channel, self.remote_channel) if c is not None]

    def submit_metrics(self) -> dict[str, bool]:
        """Collect, encode and submit once. Returns channel name -> success."""
        try:
            snapshot = self.collector.collect()
        except Exception as ex:
            LOG.error("Could not collect metrics: %s", ex)
            return {}

        try:
            payload = self.codec.encode(snapshot)
        except Exception as ex:
            LOG.error("Could not serialize metrics record: %s", ex)
            return {}
        if not payload:
            LOG.error("Serialized metrics record is empty; skipping submission")
            return {}

        results: dict[str, bool] = {}
        for channel in self._channels():
            try:
                results[channel.name] = channel.submit(payload)
            except Exception as ex:
                LOG.error("Could not submit metrics via %s channel: %s", channel.name, ex)
                results[channel.name] = False
        self.ticks += 1
        return results
