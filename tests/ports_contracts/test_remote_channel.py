from __future__ import annotations

import logging

import httpx
import pytest
from adapters.channels import RemoteChannel
from shared.errors import ConfigurationError

SECURE = "https://collector.test/anon"
INSECURE = "http://collector.test/anon"

pytestmark = pytest.mark.contract


class _Endpoints:
    """MockTransport handler answering per scheme and recording requests."""

    def __init__(self, secure: int | Exception = 200, insecure: int | Exception = 200) -> None:
        self.behaviour = {"https": secure, "http": insecure}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        b = self.behaviour[request.url.scheme]
        if isinstance(b, Exception):
            raise b
        return httpx.Response(b)

    def hits(self, scheme: str) -> int:
        return sum(1 for r in self.requests if r.url.scheme == scheme)


def _channel(endpoints: _Endpoints, secure=SECURE, insecure=INSECURE) -> RemoteChannel:
    return RemoteChannel(
        "anonymous",
        endpoint_secure=secure,
        endpoint_insecure=insecure,
        transport=httpx.MockTransport(endpoints),
    )


@pytest.mark.parametrize("secure,insecure", [("", ""), (None, None), ("", None)])
def test_constructor_requires_an_endpoint(secure, insecure):
    with pytest.raises(ConfigurationError, match="must specify endpoints"):
        RemoteChannel("anonymous", endpoint_secure=secure, endpoint_insecure=insecure)


@pytest.mark.parametrize(
    "secure,insecure",
    [
        ("http://collector.test/anon", ""),  # secure must be https
        ("", "ftp://collector.test/anon"),
        ("not a url", ""),
        ("https://", ""),
    ],
)
def test_constructor_rejects_malformed_endpoints(secure, insecure):
    with pytest.raises(ConfigurationError):
        RemoteChannel("anonymous", endpoint_secure=secure, endpoint_insecure=insecure)


def test_valid_constructor():
    ch = RemoteChannel("anonymous", endpoint_secure=SECURE, endpoint_insecure=INSECURE)
    assert ch.endpoint_secure == SECURE and ch.endpoint_insecure == INSECURE


def test_secure_success_never_touches_insecure():
    ep = _Endpoints(secure=200)
    assert _channel(ep).submit(b"payload") is True
    assert ep.hits("https") == 1
    assert ep.hits("http") == 0


@pytest.mark.parametrize("failure", [502, 404, 201, httpx.ConnectError("refused")])
def test_secure_failure_falls_back_to_insecure_once(failure):
    ep = _Endpoints(secure=failure, insecure=200)
    assert _channel(ep).submit(b"payload") is True
    assert ep.hits("https") == 1
    assert ep.hits("http") == 1


def test_both_fail_returns_false():
    ep = _Endpoints(secure=500, insecure=httpx.ReadTimeout("slow"))
    assert _channel(ep).submit(b"payload") is False
    assert ep.hits("http") == 1


def test_secure_only_failure_does_not_fall_back():
    ep = _Endpoints(secure=503)
    assert _channel(ep, insecure="").submit(b"payload") is False
    assert ep.hits("http") == 0


def test_insecure_only_is_attempted_directly():
    ep = _Endpoints(insecure=200)
    assert _channel(ep, secure="").submit(b"payload") is True
    assert ep.hits("https") == 0
    assert ep.hits("http") == 1


@pytest.mark.parametrize("payload", [b"", None])
def test_missing_payload_is_not_sent(caplog, payload):
    ep = _Endpoints()
    assert _channel(ep).submit(payload) is False
    assert ep.requests == []
    assert any("metrics data missing" in r.getMessage() for r in caplog.records)


def test_request_is_multipart_with_key_and_data():
    ep = _Endpoints()
    _channel(ep).submit(b"\x00\x01binary")
    req = ep.requests[0]
    assert req.method == "POST"
    assert req.headers["content-type"].startswith("multipart/form-data")
    body = req.read()
    assert b'name="key"' in body and b"anonymous" in body
    assert b'name="data"' in body and b"\x00\x01binary" in body


def test_fallback_is_logged_as_warning(caplog):
    caplog.set_level(logging.INFO, logger="reporter.channels.remote")
    _channel(_Endpoints(secure=502)).submit(b"payload")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "falling back to insecure channel" in warnings[0].getMessage()
