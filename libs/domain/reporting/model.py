from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shared.errors import ConfigurationError


class AgentState(Enum):
    WAITING_FOR_HOST = "WAITING_FOR_HOST"
    COLLECTING = "COLLECTING"
    TERMINATED = "TERMINATED"


@dataclass(frozen=True)
class ReportingConfiguration:
    """Validated once; channel enablement derives from it and never changes."""

    customer_id: str
    report_interval_hours: int = 24
    topic: str = ""
    endpoint_secure: str = ""
    endpoint_insecure: str = ""

    def __post_init__(self) -> None:
        interval = self.report_interval_hours
        if isinstance(interval, bool) or not isinstance(interval, int):
            raise ConfigurationError(
                f"Interval is not an integer number: {interval!r}", "report_interval_hours"
            )
        if interval < 1:
            raise ConfigurationError(
                f"Interval must be >= 1, got {interval}", "report_interval_hours"
            )

    @property
    def report_interval_s(self) -> float:
        return self.report_interval_hours * 60.0 * 60.0

    @property
    def log_enabled(self) -> bool:
        return bool(self.topic)

    @property
    def remote_enabled(self) -> bool:
        return bool(self.endpoint_secure) or bool(self.endpoint_insecure)

    @property
    def reporting_enabled(self) -> bool:
        return self.log_enabled or self.remote_enabled
