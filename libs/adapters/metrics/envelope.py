from __future__ import annotations

import json

from pydantic import BaseModel, TypeAdapter, ValidationError
from ports.metrics import CodecPort
from shared.contracts.v1.envelope import SnapshotEnvelope
from shared.contracts.v1.snapshot import MetricsSnapshot
from shared.errors import CodecError

_SNAPSHOT: TypeAdapter = TypeAdapter(MetricsSnapshot)


class EnvelopeCodec(CodecPort):
    """
    Encodes a snapshot as a JSON SnapshotEnvelope. The record's JSON Schema
    travels with the data so offline readers need no out-of-band schema.
    """

    def encode(self, snapshot: MetricsSnapshot) -> bytes:
        if not isinstance(snapshot, BaseModel):
            raise CodecError(f"Cannot encode {type(snapshot).__name__}: not a snapshot model")
        env = SnapshotEnvelope(
            record_schema=type(snapshot).model_json_schema(),
            records=[snapshot.model_dump(mode="json")],
        )
        return env.model_dump_json().encode("utf-8")

    def decode(self, data: bytes) -> list[MetricsSnapshot]:
        if not data:
            raise CodecError("Cannot decode an empty envelope")
        try:
            env = SnapshotEnvelope.model_validate(json.loads(data.decode("utf-8")))
            return [_SNAPSHOT.validate_python(rec) for rec in env.records]
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise CodecError(f"Malformed snapshot envelope: {e}") from e
