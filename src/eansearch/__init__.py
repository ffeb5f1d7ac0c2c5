"""Python client for the EAN-Search barcode database (api.ean-search.org)."""

from eansearch.core.domain.exceptions import DecodeError, EANSearchError
from eansearch.core.domain.language import Language
from eansearch.core.domain.models import (
    ApiResult,
    BasicProduct,
    FailureReason,
    FullProduct,
    ProductList,
    ProductResult,
)
from eansearch.core.services.ean_search import EANSearch

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "BasicProduct",
    "DecodeError",
    "EANSearch",
    "EANSearchError",
    "FailureReason",
    "FullProduct",
    "Language",
    "ProductList",
    "ProductResult",
]
