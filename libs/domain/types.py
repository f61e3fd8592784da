from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ONE_YEAR_MS = 365 * 24 * 60 * 60 * 1000


class ProvisioningOutcome(Enum):
    """How well the durable log topic matches what we asked for."""

    ADEQUATE = "adequate"
    DEGRADED = "degraded"  # exists, fewer replicas than desired
    INADEQUATE = "inadequate"  # exists, but metadata unreadable
    FAILED = "failed"  # invalid request, or could not be created

    @property
    def usable(self) -> bool:
        return self in (ProvisioningOutcome.ADEQUATE, ProvisioningOutcome.DEGRADED)


@dataclass(frozen=True)
class TopicSpec:
    name: str
    partitions: int = 1
    replication: int = 3
    retention_ms: int = ONE_YEAR_MS


@dataclass(frozen=True)
class TopicLayout:
    partition_count: int
    first_partition_replicas: int
