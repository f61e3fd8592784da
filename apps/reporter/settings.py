from __future__ import annotations

from typing import Literal

from domain.types import ONE_YEAR_MS
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.config.identity import ANONYMOUS_ID, endpoint_path, is_well_formed


class ReporterSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PSR_", extra="ignore")

    enabled: bool = True
    customer_id: str = ANONYMOUS_ID
    report_interval_hours: int = Field(default=24, ge=1)

    # durable log channel; empty topic disables it
    topic: str = "__confluent.support.metrics"
    topic_partitions: int = Field(default=1, ge=1)
    topic_replication: int = Field(default=3, ge=1)
    topic_retention_ms: int = Field(default=ONE_YEAR_MS, ge=1)
    log_impl: Literal["inproc", "kafka"] = "kafka"
    bootstrap_servers: str = "localhost:9092"
    send_timeout_s: float = Field(default=10.0, gt=0)
    admin_timeout_s: float = Field(default=10.0, gt=0)

    # broker identity reported in full snapshots
    host_id: str = ""

    # remote channel; URLs are derived, only switched on/off here
    endpoint_host: str = "support-metrics.confluent.io"
    endpoint_secure_enable: bool = True
    endpoint_insecure_enable: bool = True
    request_timeout_s: float = Field(default=2.0, gt=0)

    settling_s: float = Field(default=10.0, gt=0)

    @field_validator("customer_id", mode="before")
    @classmethod
    def _customer_id(cls, v: object) -> object:
        if v is None or v == "":
            return ANONYMOUS_ID
        if isinstance(v, int):
            v = str(v)
        if isinstance(v, str) and not is_well_formed(v):
            raise ValueError(f"customer_id {v!r} is not a well-formed identifier")
        return v

    @field_validator("host_id", mode="before")
    @classmethod
    def _host_id(cls, v: object) -> object:
        if v is None:
            return ""
        return str(v) if isinstance(v, int) else v

    @property
    def endpoint_secure(self) -> str:
        if not self.endpoint_secure_enable:
            return ""
        return f"https://{self.endpoint_host}{endpoint_path(self.customer_id)}"

    @property
    def endpoint_insecure(self) -> str:
        if not self.endpoint_insecure_enable:
            return ""
        return f"http://{self.endpoint_host}{endpoint_path(self.customer_id)}"
