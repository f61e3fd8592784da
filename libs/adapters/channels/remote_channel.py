from __future__ import annotations

import logging
from typing import Final

import httpx
from ports.delivery import ChannelPort
from shared.errors import ConfigurationError

LOG: Final = logging.getLogger("reporter.channels.remote")

REQUEST_TIMEOUT_S: Final = 2.0
# Reported when no response arrived at all.
DEFAULT_STATUS_CODE: Final = 502


def _check_endpoint(url: str, scheme: str, setting: str) -> str:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid endpoint {url!r}: {e}", setting) from e
    if parsed.scheme != scheme or not parsed.host:
        raise ConfigurationError(f"Endpoint {url!r} must be an {scheme}:// URL", setting)
    return url


class RemoteChannel(ChannelPort):
    """
    POSTs encoded snapshots to the external collection service.

    The secure endpoint is tried first; if it does not answer 200 and an
    insecure endpoint is configured, that one is tried exactly once.
    """

    name = "remote"

    def __init__(
        self,
        customer_id: str,
        endpoint_secure: str = "",
        endpoint_insecure: str = "",
        timeout_s: float = REQUEST_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not endpoint_secure and not endpoint_insecure:
            raise ConfigurationError("must specify endpoints")
        self.customer_id = customer_id
        self.endpoint_secure = (
            _check_endpoint(endpoint_secure, "https", "endpoint_secure") if endpoint_secure else ""
        )
        self.endpoint_insecure = (
            _check_endpoint(endpoint_insecure, "http", "endpoint_insecure")
            if endpoint_insecure
            else ""
        )
        self._timeout = httpx.Timeout(timeout_s)
        self._transport = transport

    def submit(self, payload: bytes | None) -> bool:
        if not payload:
            LOG.error("Could not submit metrics remotely (metrics data missing)")
            return False

        if self.endpoint_secure:
            if self._send(self.endpoint_secure, payload) == 200:
                LOG.info("Successfully submitted metrics via secure channel")
                return True
            if not self.endpoint_insecure:
                LOG.warning("Failed to submit metrics via secure channel")
                return False
            LOG.warning(
                "Failed to submit metrics via secure channel, falling back to insecure channel"
            )

        LOG.info("Attempting insecure transmission of metrics, using key %s", self.customer_id)
        if self._send(self.endpoint_insecure, payload) == 200:
            LOG.info("Successfully submitted metrics via insecure channel")
            return True
        LOG.warning("Failed to submit metrics via insecure channel")
        return False

    def _send(self, endpoint: str, payload: bytes) -> int:
        status = DEFAULT_STATUS_CODE
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                LOG.debug("Executing POST request to %s with key %s", endpoint, self.customer_id)
                resp = client.post(
                    endpoint,
                    data={"key": self.customer_id},
                    files={"data": ("metrics", payload, "application/octet-stream")},
                )
            status = resp.status_code
            LOG.debug("POST request to %s returned %s", endpoint, status)
        except httpx.HTTPError as e:
            LOG.debug("Could not submit metrics via endpoint %s: %s", endpoint, e)
        except Exception as e:
            LOG.debug("Unexpected error submitting metrics via endpoint %s: %r", endpoint, e)
        return status
