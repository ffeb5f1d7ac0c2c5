"""JSON export of decoded products.

Used by the CLI (`--json PATH`) to hand search results to other tools.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from eansearch.core.domain.models import ProductResult


def products_to_payload(products: Iterable[ProductResult]) -> list[dict[str, Any]]:
    """Serialize products with their wire field names plus `kind`."""

    return [p.model_dump(mode="json", by_alias=True) for p in products]


def export_products_json(*, products: Iterable[ProductResult], output_path: Path) -> Path:
    """Write products to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"productlist": products_to_payload(products)}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
