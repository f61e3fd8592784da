"""Error hierarchy for the support-metrics reporter.

Only construction-time problems escape to callers. Everything raised on the
reporting thread is caught, logged and turned into a skipped tick.
"""

from __future__ import annotations


class ReporterError(Exception):
    """Base exception for all reporter errors."""

    pass


class ConfigurationError(ReporterError, ValueError):
    """Raised when reporter configuration is unusable (bad interval, endpoints)."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class TopicExistsError(ReporterError):
    """Raised by a log admin when another creator won the race for a topic."""

    def __init__(self, topic: str) -> None:
        super().__init__(f"Topic {topic} already exists")
        self.topic = topic


class LogAdminError(ReporterError):
    """Raised when the durable log cluster cannot be queried or modified."""

    pass


class DeliveryError(ReporterError):
    """Raised when a record was not acknowledged by the durable log."""

    def __init__(self, message: str, topic: str | None = None) -> None:
        super().__init__(message)
        self.topic = topic


class CodecError(ReporterError):
    """Raised when a snapshot cannot be encoded or an envelope cannot be decoded."""

    pass
