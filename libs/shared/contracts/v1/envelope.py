from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ENVELOPE_MAGIC: Literal["PSR"] = "PSR"
SCHEMA_V1: Literal[1] = 1


class SnapshotEnvelope(BaseModel):
    """Self-describing container: carries the JSON Schema of its records."""

    magic: Literal["PSR"] = Field(default=ENVELOPE_MAGIC)
    schema_version: Literal[1] = Field(default=SCHEMA_V1)
    record_schema: dict[str, Any]
    records: list[dict[str, Any]]
