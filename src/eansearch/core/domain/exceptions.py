"""Domain exceptions.

These never cross the `EANSearch` facade: the facade turns them into the
sentinel value of the operation (or a failed `ApiResult`).
"""

from __future__ import annotations

from eansearch.core.domain.models import FailureReason


class EANSearchError(Exception):
    """Base error for the package."""


class DecodeError(EANSearchError):
    """A response body could not be turned into the expected result."""

    def __init__(self, reason: FailureReason, detail: str) -> None:
        super().__init__(detail)
        self.reason = reason
        self.detail = detail

    def __repr__(self) -> str:
        return f"DecodeError(reason={self.reason.value!r}, detail={self.detail!r})"
