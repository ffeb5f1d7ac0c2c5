"""Public facade over the EAN-Search API.

Every operation is the same pipeline: build the query string, hand it to the
transport, decode the body. Two flavours are exposed per operation:

- `barcode_lookup(...)` & co. return the plain value or the operation's
  sentinel (`None`, `False`, `""`) and never raise.
- `barcode_lookup_result(...)` & co. return an `ApiResult` that also tells
  *why* nothing came back (transport error, invalid JSON, missing field...).

Search operations return `[]` when the service reports zero matches and
`None` when the call or the decode failed.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from eansearch.adapters.http_client import HttpxTransport
from eansearch.adapters.query_encoder import build_query, encode_query_value
from eansearch.adapters.response_decoder import (
    decode_product,
    decode_product_list,
    decode_scalar_field,
)
from eansearch.core.config import AppSettings
from eansearch.core.domain.exceptions import DecodeError
from eansearch.core.domain.language import Language
from eansearch.core.domain.models import (
    ApiResult,
    FailureReason,
    ProductList,
    ProductResult,
)
from eansearch.core.interfaces.transport import ApiTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_IMAGE_WIDTH = 102
DEFAULT_IMAGE_HEIGHT = 50

# Barcodes, ISBNs and prefixes are sent unencoded; these would cut the query.
_UNSAFE_VERBATIM = frozenset("#&")


class EANSearch:
    """Client for the EAN-Search barcode database.

    Holds nothing but the token (and the transport built from it), so one
    instance can be shared between threads.
    """

    def __init__(
        self,
        token: str,
        settings: AppSettings | None = None,
        *,
        transport: ApiTransport | None = None,
    ) -> None:
        self._transport = transport or HttpxTransport(token, settings)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(token=<hidden>)"

    def _reject_unsafe(self, name: str, value: str) -> ApiResult | None:
        """Verbatim parameters must not break out of their query slot."""

        if any(ch in _UNSAFE_VERBATIM for ch in value):
            logger.warning("Refusing %s=%r: contains '#' or '&'", name, value)
            return ApiResult.failed(FailureReason.INVALID_ARGUMENT, f"{name} contains '#' or '&'")
        return None

    def _execute(self, params: str, decode: Callable[[str], T]) -> ApiResult[T]:
        body = self._transport.call(params)
        if body is None:
            return ApiResult.failed(FailureReason.TRANSPORT_ERROR, "request failed")
        try:
            return ApiResult.success(decode(body))
        except DecodeError as exc:
            logger.warning("Could not decode EAN-Search response (%s): %s", exc.reason.value, exc.detail)
            return ApiResult.failed(exc.reason, exc.detail)

    # Lookups

    def barcode_lookup_result(
        self, barcode: str, language: Language | int = Language.ENGLISH
    ) -> ApiResult[ProductResult]:
        rejected = self._reject_unsafe("ean", barcode)
        if rejected is not None:
            return rejected
        params = build_query(
            [("op", "barcode-lookup"), ("ean", barcode), ("language", int(language))]
        )
        return self._execute(params, decode_product)

    def barcode_lookup(
        self, barcode: str, language: Language | int = Language.ENGLISH
    ) -> ProductResult | None:
        """Look up one EAN/UPC; `None` when not found or on any failure."""

        return self.barcode_lookup_result(barcode, language).unwrap_or(None)

    def isbn_lookup_result(self, isbn: str) -> ApiResult[ProductResult]:
        rejected = self._reject_unsafe("isbn", isbn)
        if rejected is not None:
            return rejected
        params = build_query([("op", "barcode-lookup"), ("isbn", isbn)])
        return self._execute(params, decode_product)

    def isbn_lookup(self, isbn: str) -> ProductResult | None:
        """Look up a book by ISBN-10 or ISBN-13."""

        return self.isbn_lookup_result(isbn).unwrap_or(None)

    def verify_checksum_result(self, barcode: str) -> ApiResult[bool]:
        rejected = self._reject_unsafe("ean", barcode)
        if rejected is not None:
            return rejected
        params = build_query([("op", "verify-checksum"), ("ean", barcode)])
        result = self._execute(params, lambda body: decode_scalar_field(body, "valid"))
        if not result.ok:
            return ApiResult.failed(result.failure, result.detail)
        return ApiResult.success(result.value == "1")

    def verify_checksum(self, barcode: str) -> bool:
        """`True` if the service says the check digit is valid."""

        return self.verify_checksum_result(barcode).unwrap_or(False)

    # Searches

    def product_search_result(
        self, name: str, language: Language | int = Language.ANY, page: int = 0
    ) -> ApiResult[ProductList]:
        params = build_query(
            [
                ("op", "product-search"),
                ("name", encode_query_value(name)),
                ("language", int(language)),
                ("page", int(page)),
            ]
        )
        return self._execute(params, decode_product_list)

    def product_search(
        self, name: str, language: Language | int = Language.ANY, page: int = 0
    ) -> ProductList | None:
        """Search product names (exact words)."""

        return self.product_search_result(name, language, page).unwrap_or(None)

    def similar_product_search_result(
        self, name: str, language: Language | int = Language.ANY, page: int = 1
    ) -> ApiResult[ProductList]:
        params = build_query(
            [
                ("op", "similar-product-search"),
                ("name", encode_query_value(name)),
                ("language", int(language)),
                ("page", int(page)),
            ]
        )
        return self._execute(params, decode_product_list)

    def similar_product_search(
        self, name: str, language: Language | int = Language.ANY, page: int = 1
    ) -> ProductList | None:
        """Search for products whose names resemble `name`."""

        return self.similar_product_search_result(name, language, page).unwrap_or(None)

    def category_search_result(
        self,
        category: int,
        name: str,
        language: Language | int = Language.ANY,
        page: int = 0,
    ) -> ApiResult[ProductList]:
        params = build_query(
            [
                ("op", "category-search"),
                ("category", int(category)),
                ("name", encode_query_value(name)),
                ("language", int(language)),
                ("page", int(page)),
            ]
        )
        return self._execute(params, decode_product_list)

    def category_search(
        self,
        category: int,
        name: str,
        language: Language | int = Language.ANY,
        page: int = 0,
    ) -> ProductList | None:
        """Search product names within one EAN-Search category."""

        return self.category_search_result(category, name, language, page).unwrap_or(None)

    def barcode_prefix_search_result(
        self, prefix: str, language: Language | int = Language.ENGLISH, page: int = 0
    ) -> ApiResult[ProductList]:
        rejected = self._reject_unsafe("prefix", prefix)
        if rejected is not None:
            return rejected
        params = build_query(
            [
                ("op", "barcode-prefix-search"),
                ("prefix", prefix),
                ("language", int(language)),
                ("page", int(page)),
            ]
        )
        return self._execute(params, decode_product_list)

    def barcode_prefix_search(
        self, prefix: str, language: Language | int = Language.ENGLISH, page: int = 0
    ) -> ProductList | None:
        """List products whose barcode starts with `prefix`."""

        return self.barcode_prefix_search_result(prefix, language, page).unwrap_or(None)

    # Scalars

    def issuing_country_lookup_result(self, barcode: str) -> ApiResult[str]:
        rejected = self._reject_unsafe("ean", barcode)
        if rejected is not None:
            return rejected
        params = build_query([("op", "issuing-country"), ("ean", barcode)])
        return self._execute(params, lambda body: decode_scalar_field(body, "issuingCountry"))

    def issuing_country_lookup(self, barcode: str) -> str:
        """Country code of the barcode's issuing GS1 organisation, or `""`."""

        return self.issuing_country_lookup_result(barcode).unwrap_or("")

    def barcode_image_result(
        self,
        barcode: str,
        width: int = DEFAULT_IMAGE_WIDTH,
        height: int = DEFAULT_IMAGE_HEIGHT,
    ) -> ApiResult[str]:
        rejected = self._reject_unsafe("ean", barcode)
        if rejected is not None:
            return rejected
        params = build_query(
            [
                ("op", "barcode-image"),
                ("ean", barcode),
                ("width", int(width)),
                ("height", int(height)),
            ]
        )
        return self._execute(params, lambda body: decode_scalar_field(body, "barcode"))

    def barcode_image(
        self,
        barcode: str,
        width: int = DEFAULT_IMAGE_WIDTH,
        height: int = DEFAULT_IMAGE_HEIGHT,
    ) -> str:
        """Base64-encoded PNG of the barcode, or `""`."""

        return self.barcode_image_result(barcode, width, height).unwrap_or("")
