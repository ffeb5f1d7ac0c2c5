"""`eansearch` command-line program.

Thin layer over `EANSearch`: parses options, calls the facade, renders the
result with Rich. Exit code 1 means "nothing found" or "no API token".
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from eansearch.adapters.json_exporter import export_products_json
from eansearch.cli import doctor
from eansearch.cli.ui_components import build_product_panel, build_products_table, print_banner
from eansearch.core.config import AppSettings
from eansearch.core.domain.language import Language
from eansearch.core.domain.models import ApiResult, ProductList
from eansearch.core.services.ean_search import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    EANSearch,
)

app = typer.Typer(no_args_is_help=True, help="Query the EAN-Search barcode database.")
app.add_typer(doctor.app, name="doctor")

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_client() -> EANSearch:
    settings = AppSettings()
    if not settings.api_token:
        err_console.print(
            "[red]No API token.[/red] Set EAN_SEARCH_API_TOKEN or run `eansearch doctor set-token`."
        )
        raise typer.Exit(code=1)
    return EANSearch(settings.api_token, settings)


def _language(value: Optional[str]) -> Optional[Language]:
    if value is None:
        return None
    try:
        return Language.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _render_list(result: ApiResult[ProductList], title: str, json_path: Optional[Path]) -> None:
    if not result.ok:
        err_console.print(f"[red]{title} failed:[/red] {result.failure.value} ({result.detail})")
        raise typer.Exit(code=1)
    products = result.value or []
    if json_path is not None:
        export_products_json(products=products, output_path=json_path)
        console.print(f"[green]Wrote {len(products)} product(s) to[/green] {json_path}")
        return
    if not products:
        console.print("[yellow]No products found.[/yellow]")
        return
    console.print(build_products_table(products, title=title))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner first."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(console)


@app.command()
def barcode(
    ean: str = typer.Argument(..., help="EAN/UPC/GTIN to look up."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language name or id."),
) -> None:
    """Look up one barcode."""

    lang = _language(language) or Language.default()
    product = get_client().barcode_lookup(ean, lang)
    if product is None:
        console.print(f"{ean} not found")
        raise typer.Exit(code=1)
    console.print(build_product_panel(product))


@app.command()
def isbn(isbn_code: str = typer.Argument(..., metavar="ISBN", help="ISBN-10 or ISBN-13.")) -> None:
    """Look up a book by ISBN."""

    product = get_client().isbn_lookup(isbn_code)
    if product is None:
        console.print(f"{isbn_code} not found")
        raise typer.Exit(code=1)
    console.print(build_product_panel(product))


@app.command()
def verify(ean: str = typer.Argument(..., help="Barcode to check.")) -> None:
    """Verify a barcode's check digit."""

    valid = get_client().verify_checksum(ean)
    console.print(f"{ean} is {'' if valid else 'not '}valid")
    if not valid:
        raise typer.Exit(code=1)


@app.command()
def search(
    name: str = typer.Argument(..., help="Words of the product name."),
    language: Optional[str] = typer.Option(None, "--language", "-l"),
    page: int = typer.Option(0, "--page", min=0),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write results to a JSON file."),
) -> None:
    """Search products by name."""

    lang = _language(language) or Language.ANY
    _render_list(get_client().product_search_result(name, lang, page), "Product search", json_path)


@app.command()
def similar(
    name: str = typer.Argument(...),
    language: Optional[str] = typer.Option(None, "--language", "-l"),
    page: int = typer.Option(1, "--page", min=0),
    json_path: Optional[Path] = typer.Option(None, "--json"),
) -> None:
    """Search products with a similar name."""

    lang = _language(language) or Language.ANY
    _render_list(
        get_client().similar_product_search_result(name, lang, page), "Similar products", json_path
    )


@app.command()
def category(
    category_id: int = typer.Argument(..., metavar="CATEGORY"),
    name: str = typer.Argument(...),
    language: Optional[str] = typer.Option(None, "--language", "-l"),
    page: int = typer.Option(0, "--page", min=0),
    json_path: Optional[Path] = typer.Option(None, "--json"),
) -> None:
    """Search products by name within a category."""

    lang = _language(language) or Language.ANY
    _render_list(
        get_client().category_search_result(category_id, name, lang, page), "Category search", json_path
    )


@app.command()
def prefix(
    barcode_prefix: str = typer.Argument(..., metavar="PREFIX"),
    language: Optional[str] = typer.Option(None, "--language", "-l"),
    page: int = typer.Option(0, "--page", min=0),
    json_path: Optional[Path] = typer.Option(None, "--json"),
) -> None:
    """List products whose barcode starts with PREFIX."""

    lang = _language(language) or Language.default()
    _render_list(
        get_client().barcode_prefix_search_result(barcode_prefix, lang, page), "Prefix search", json_path
    )


@app.command()
def country(ean: str = typer.Argument(...)) -> None:
    """Show the issuing country of a barcode."""

    issuing_country = get_client().issuing_country_lookup(ean)
    if not issuing_country:
        console.print(f"{ean}: issuing country unknown")
        raise typer.Exit(code=1)
    console.print(f"{ean} was issued in {issuing_country}")


@app.command()
def image(
    ean: str = typer.Argument(...),
    width: int = typer.Option(DEFAULT_IMAGE_WIDTH, "--width", min=1),
    height: int = typer.Option(DEFAULT_IMAGE_HEIGHT, "--height", min=1),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the PNG here."),
) -> None:
    """Fetch a barcode image (base64 PNG)."""

    encoded = get_client().barcode_image(ean, width, height)
    if not encoded:
        console.print(f"{ean}: no image")
        raise typer.Exit(code=1)
    if output is None:
        console.print(encoded, soft_wrap=True)
        return
    try:
        data = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        err_console.print(f"[red]Image payload is not base64:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]Saved[/green] {output} ({len(data)} bytes)")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
