"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from eansearch.adapters.http_client import build_client
from eansearch.core.config import API_BASE_URL, AppSettings, write_user_env_vars
from eansearch.core.services.ean_search import EANSearch

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Known-valid EAN used to exercise the whole pipeline.
_PROBE_EAN = "5099750442227"


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    if not settings.api_token:
        return False, "skipped (no token)"
    result = EANSearch(settings.api_token, settings).verify_checksum_result(_PROBE_EAN)
    if result.ok:
        return True, f"verify-checksum {_PROBE_EAN} -> {result.value}"
    return False, f"{result.failure.value}: {result.detail}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="EAN-Search Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_token:
        table.add_row("API token", "OK", "EAN_SEARCH_API_TOKEN is set")
    else:
        table.add_row("API token", "MISSING", "Run `eansearch doctor set-token`")

    ok_http, detail_http = _check_http(API_BASE_URL, settings)
    table.add_row("HTTPS connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_api, detail_api = _check_api(settings)
    table.add_row("API call", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] api.ean-search.org is not reachable; check proxy/firewall and CA certificates."
        )


@app.command(name="set-token")
def set_token() -> None:
    """Store the API token in the user config .env."""

    token = typer.prompt("EAN-Search API token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"EAN_SEARCH_API_TOKEN": token})
    _console.print(f"[green]Saved API token to:[/green] {env_path}")
