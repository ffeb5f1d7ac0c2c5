"""httpx transport for the EAN-Search API.

Notes:
- One `httpx.Client` per call, opened and closed inside a `with` block: no
  pooling between calls, no retries, httpx default timeouts.
- TLS certificate and hostname verification stay on (httpx default).
- Network/TLS failures are logged here and reported as `None`; they never
  propagate to the facade.
"""

from __future__ import annotations

import logging

import httpx

from eansearch.core.config import API_BASE_URL, AppSettings
from eansearch.core.interfaces.transport import ApiTransport

logger = logging.getLogger(__name__)

RESPONSE_FORMAT = "json"


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with the client's default headers."""

    # Defaults only: a library call must not depend on the environment.
    settings = settings or AppSettings.model_construct()
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.Client(headers=headers, transport=transport)


def build_request_url(params: str, token: str) -> str:
    """Full request URL: `<base>?<params>&token=<token>&format=json`."""

    return f"{API_BASE_URL}?{params}&token={token}&format={RESPONSE_FORMAT}"


class HttpxTransport(ApiTransport):
    """Blocking HTTPS transport bound to one API token."""

    def __init__(
        self,
        token: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = token
        self._settings = settings or AppSettings.model_construct()
        self._transport = transport

    def call(self, params: str) -> str | None:
        url = build_request_url(params, self._token)
        op = params.split("&", 1)[0]
        try:
            with build_client(self._settings, transport=self._transport) as client:
                response = client.get(url)
                body = response.text
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("EAN-Search request failed (%s): %s", op, exc)
            return None

        if response.is_error:
            # The API reports most problems in the JSON body, so keep it.
            logger.warning("EAN-Search answered HTTP %s (%s)", response.status_code, op)
        logger.debug("EAN-Search %s -> %d bytes", op, len(body))
        return body
