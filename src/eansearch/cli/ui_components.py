"""Rich components for the CLI.

Kept apart from the commands so tables and panels can be reused by every
lookup/search command.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from eansearch.core.domain.models import FullProduct, ProductResult


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in `--json` / quiet modes)."""

    title = Text("EAN-Search", style="bold cyan")
    subtitle = Text("Barcode • ISBN • Product database", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_products_table(products: Iterable[ProductResult], *, title: str = "Products") -> Table:
    table = Table(title=title)
    table.add_column("EAN", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Category", style="green")
    table.add_column("Country", style="magenta", no_wrap=True)
    # Upstream strings are plain text, never Rich markup.
    for product in products:
        table.add_row(
            Text(product.barcode),
            Text(product.name),
            Text(f"{product.category_id} [{product.category_name}]"),
            Text(product.issuing_country),
        )
    return table


def build_product_panel(product: ProductResult) -> Panel:
    """Detail panel for a single lookup result."""

    body = Text()
    body.append(product.name + "\n\n", style="bold")
    body.append(f"EAN: {product.barcode}\n")
    body.append(f"Category: {product.category_id} [{product.category_name}]\n")
    if isinstance(product, FullProduct):
        body.append(f"Google category: {product.google_category_id}\n")
    body.append(f"Issued in: {product.issuing_country}")
    return Panel(body, title=Text("Product", style="bold yellow"), border_style="yellow")
