from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class BasicMetrics(BaseModel):
    """Reduced snapshot sent for anonymous installations."""

    model_config = ConfigDict(frozen=True)

    api: Literal["v1"] = "v1"
    kind: Literal["basic"] = "basic"
    timestamp: int  # unix seconds
    host_version: str
    reporter_version: str


class FullMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    api: Literal["v1"] = "v1"
    kind: Literal["full"] = "full"
    timestamp: int
    host_version: str
    reporter_version: str
    customer_id: str
    host_id: str | None = None
    uptime_ms: int | None = None
    runtime: dict[str, int | float | str] = Field(default_factory=dict)


MetricsSnapshot = Annotated[BasicMetrics | FullMetrics, Field(discriminator="kind")]
