"""Transport contract for the EAN-Search API.

Why a Protocol:
- The facade only needs "send these query parameters, give me the body".
- Tests and alternative HTTP stacks can plug in without inheriting anything.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ApiTransport(Protocol):
    """Minimal contract for executing one API request.

    Rules:
    - `params` is an already encoded query string (`op=...&ean=...`), without
      the token or the response format flag; the transport appends both.
    - Returns the raw response body, or `None` when the request failed. A
      transport never raises for network or TLS problems.
    """

    def call(self, params: str) -> str | None:
        ...
