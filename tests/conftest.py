"""Pytest fixtures: a scripted transport and sample payloads."""

from __future__ import annotations

import json

import pytest

from eansearch import EANSearch

FULL_PRODUCT = {
    "ean": "5099750442227",
    "name": "Michael Jackson - Thriller",
    "categoryId": "45",
    "categoryName": "Music",
    "issuingCountry": "UK",
    "googleCategoryId": "855",
}

BASIC_PRODUCT = {
    "ean": "4007249146001",
    "name": "Bananaboat Single",
    "categoryId": "45",
    "categoryName": "Music",
    "issuingCountry": "DE",
}


class FakeTransport:
    """Returns a fixed body (or `None` for a failed request) and records params."""

    def __init__(self, body: str | None) -> None:
        self.body = body
        self.calls: list[str] = []

    def call(self, params: str) -> str | None:
        self.calls.append(params)
        return self.body


@pytest.fixture
def make_client():
    def _make(body: object | None) -> tuple[EANSearch, FakeTransport]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        transport = FakeTransport(body)
        return EANSearch("test-token", transport=transport), transport

    return _make
