from __future__ import annotations

import json

import pytest
from adapters.metrics import BasicCollector, EnvelopeCodec, FullCollector
from adapters.time import FixedClockPort
from shared.contracts.v1.snapshot import BasicMetrics, FullMetrics
from shared.errors import CodecError

pytestmark = pytest.mark.contract


def test_envelope_carries_schema_and_record():
    snap = BasicCollector(FixedClockPort(1_700_000_000.0), "3.9.0").collect()
    raw = EnvelopeCodec().encode(snap)
    doc = json.loads(raw)
    assert doc["magic"] == "PSR"
    assert doc["schema_version"] == 1
    assert doc["record_schema"]["title"] == "BasicMetrics"
    assert doc["records"][0]["timestamp"] == 1_700_000_000


def test_decode_restores_the_snapshot_type():
    clock = FixedClockPort()
    full = FullCollector(clock, "3.9.0", "c42", host_id="0", stats=lambda: {"heap": 12}).collect()
    (decoded,) = EnvelopeCodec().decode(EnvelopeCodec().encode(full))
    assert isinstance(decoded, FullMetrics)
    assert decoded == full
    assert decoded.runtime == {"heap": 12}


def test_encode_rejects_non_snapshots():
    with pytest.raises(CodecError):
        EnvelopeCodec().encode(None)  # type: ignore[arg-type]


@pytest.mark.parametrize("raw", [b"", b"\xff\xfe", b"{}", b'{"magic": "XXX"}', b"not json"])
def test_decode_rejects_garbage(raw):
    with pytest.raises(CodecError):
        EnvelopeCodec().decode(raw)


def test_collectors_follow_the_clock():
    clock = FixedClockPort(100.0)
    coll = FullCollector(clock, "3.9.0", "c1")
    clock.advance(2.5)
    snap = coll.collect()
    assert snap.timestamp == 102
    assert snap.uptime_ms == 2500
    assert isinstance(BasicCollector(clock, "3.9.0").collect(), BasicMetrics)
