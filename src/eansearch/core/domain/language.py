"""Language identifiers understood by the EAN-Search API.

The numeric values are fixed by the upstream service and are sent verbatim
in the `language` query parameter. Keeping them in the domain layer lets the
facade, the CLI and the tests share a single source of truth.
"""

from __future__ import annotations

from enum import IntEnum


class Language(IntEnum):
    """Product-name languages accepted by the search operations."""

    ENGLISH = 1
    DANISH = 2
    GERMAN = 3
    SPANISH = 4
    FINISH = 5
    FINNISH = 5
    FRENCH = 6
    ITALIAN = 8
    DUTCH = 10
    NORWEGIAN = 11
    POLISH = 12
    PORTUGUESE = 13
    SWEDISH = 15
    ANY = 99

    @classmethod
    def default(cls) -> "Language":
        """Language used by single-barcode lookups when none is given."""

        return cls.ENGLISH

    @classmethod
    def parse(cls, value: str | int) -> "Language":
        """Resolve a CLI-style value (`"german"`, `"3"`, `3`) to a member."""

        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"unknown language: {value!r}") from None

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.name.capitalize()
