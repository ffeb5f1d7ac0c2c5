"""Decoding of EAN-Search JSON responses.

Response shapes handled:
- single product:  `{...}` or `[{...}]` (lookups)
- product list:    `{"productlist": [{...}, ...]}` (searches)
- scalar field:    `[{"valid": "1"}]`, `[{"issuingCountry": "UK"}]`, `[{"barcode": "<png>"}]`

Every failure raises `DecodeError` with a `FailureReason`; the facade turns
it into the operation's sentinel. A bad item inside a product list is
skipped instead of failing the whole list.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from eansearch.core.domain.exceptions import DecodeError
from eansearch.core.domain.models import (
    BasicProduct,
    FailureReason,
    FullProduct,
    ProductList,
    ProductResult,
)

logger = logging.getLogger(__name__)

PRODUCT_LIST_FIELD = "productlist"
ERROR_FIELD = "error"


def _load(body: str | bytes) -> Any:
    try:
        return json.loads(body)
    except (ValueError, TypeError) as exc:
        raise DecodeError(FailureReason.INVALID_JSON, f"response is not JSON: {exc}") from exc
    except RecursionError as exc:
        raise DecodeError(FailureReason.INVALID_JSON, "response JSON is nested too deeply") from exc


def _first_object(payload: Any) -> dict[str, Any]:
    """Unwrap `{...}` or `[{...}, ...]` into the object."""

    if isinstance(payload, list):
        if not payload:
            raise DecodeError(FailureReason.UNEXPECTED_SHAPE, "empty array")
        payload = payload[0]
    if not isinstance(payload, dict):
        raise DecodeError(
            FailureReason.UNEXPECTED_SHAPE,
            f"expected a JSON object, got {type(payload).__name__}",
        )
    return payload


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _raise_service_error(obj: dict[str, Any]) -> None:
    message = obj.get(ERROR_FIELD)
    if message is not None:
        raise DecodeError(FailureReason.SERVICE_ERROR, str(message))


def product_from_json(obj: dict[str, Any]) -> ProductResult:
    """Map one JSON object to `FullProduct` or `BasicProduct`.

    The variant depends only on `googleCategoryId` being present and an
    integer; anything else about that field falls back to `BasicProduct`.
    """

    google_category_id = _parse_int(obj.get("googleCategoryId"))
    data = {k: v for k, v in obj.items() if k not in ("googleCategoryId", "kind")}
    try:
        if google_category_id is not None:
            return FullProduct.model_validate({**data, "googleCategoryId": google_category_id})
        return BasicProduct.model_validate(data)
    except ValidationError as exc:
        missing = [".".join(str(p) for p in err["loc"]) for err in exc.errors() if err["type"] == "missing"]
        if missing:
            raise DecodeError(
                FailureReason.MISSING_FIELD, f"missing field(s): {', '.join(missing)}"
            ) from exc
        raise DecodeError(
            FailureReason.UNEXPECTED_SHAPE, f"invalid product: {exc.error_count()} error(s)"
        ) from exc


def decode_product(body: str | bytes) -> ProductResult:
    """Decode a single-product response (barcode and ISBN lookups)."""

    obj = _first_object(_load(body))
    try:
        return product_from_json(obj)
    except DecodeError:
        _raise_service_error(obj)
        raise


def decode_product_list(body: str | bytes) -> ProductList:
    """Decode a search response.

    `{"productlist": []}` is a valid empty result; a missing or non-array
    `productlist` is a `DecodeError`.
    """

    payload = _load(body)
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        _raise_service_error(payload[0])
    if not isinstance(payload, dict):
        raise DecodeError(
            FailureReason.UNEXPECTED_SHAPE,
            f"expected a JSON object, got {type(payload).__name__}",
        )
    if PRODUCT_LIST_FIELD not in payload:
        _raise_service_error(payload)
        raise DecodeError(FailureReason.MISSING_FIELD, f"missing field: {PRODUCT_LIST_FIELD}")
    items = payload[PRODUCT_LIST_FIELD]
    if not isinstance(items, list):
        raise DecodeError(
            FailureReason.UNEXPECTED_SHAPE,
            f"{PRODUCT_LIST_FIELD} is {type(items).__name__}, not an array",
        )

    products: ProductList = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug("Skipping productlist[%d]: not an object", index)
            continue
        try:
            products.append(product_from_json(item))
        except DecodeError as exc:
            logger.debug("Skipping productlist[%d]: %s", index, exc.detail)
    return products


def decode_scalar_field(body: str | bytes, field: str) -> str:
    """Extract one string field from a `[{...}]` response."""

    obj = _first_object(_load(body))
    if field not in obj:
        _raise_service_error(obj)
        raise DecodeError(FailureReason.MISSING_FIELD, f"missing field: {field}")
    value = obj[field]
    if not isinstance(value, str):
        raise DecodeError(
            FailureReason.UNEXPECTED_SHAPE,
            f"{field} is {type(value).__name__}, not a string",
        )
    return value


def decode_checksum(body: str | bytes) -> bool:
    """`True` only when the response says `"valid": "1"`."""

    try:
        return decode_scalar_field(body, "valid") == "1"
    except DecodeError:
        return False
