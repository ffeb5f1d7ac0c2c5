"""CLI commands with the facade replaced by a scripted client."""

import base64
import json

import pytest
from typer.testing import CliRunner

from conftest import BASIC_PRODUCT, FULL_PRODUCT
from eansearch.adapters.response_decoder import decode_product_list
from eansearch.cli import main as cli_main
from eansearch.core.config import AppSettings
from eansearch.core.domain.models import FullProduct

runner = CliRunner()


@pytest.fixture
def use_client(monkeypatch, make_client):
    def _use(body):
        client, transport = make_client(body)
        monkeypatch.setattr(cli_main, "get_client", lambda: client)
        return transport

    return _use


def test_barcode_found(use_client):
    use_client([FULL_PRODUCT])

    result = runner.invoke(cli_main.app, ["barcode", "5099750442227"])

    assert result.exit_code == 0
    assert "Michael Jackson - Thriller" in result.output
    assert "Google category: 855" in result.output


def test_barcode_not_found_exits_1(use_client):
    use_client(None)

    result = runner.invoke(cli_main.app, ["barcode", "5099750442227"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_bad_language_is_rejected(use_client):
    use_client([FULL_PRODUCT])

    result = runner.invoke(cli_main.app, ["barcode", "5099750442227", "--language", "klingon"])

    assert result.exit_code == 2


def test_search_json_export(use_client, tmp_path):
    transport = use_client({"productlist": [FULL_PRODUCT, BASIC_PRODUCT]})
    out = tmp_path / "out.json"

    result = runner.invoke(cli_main.app, ["search", "Bananaboat", "-l", "german", "--json", str(out)])

    assert result.exit_code == 0
    assert transport.calls == ["op=product-search&name=Bananaboat&language=3&page=0"]
    products = decode_product_list(out.read_text(encoding="utf-8"))
    assert [p.barcode for p in products] == ["5099750442227", "4007249146001"]
    assert isinstance(products[0], FullProduct)
    assert json.loads(out.read_text(encoding="utf-8"))["productlist"][1]["kind"] == "basic"


def test_search_failure_exits_1(use_client):
    use_client({"foo": 1})

    result = runner.invoke(cli_main.app, ["search", "Bananaboat"])

    assert result.exit_code == 1


def test_verify(use_client):
    use_client([{"valid": "0"}])

    result = runner.invoke(cli_main.app, ["verify", "5099750442228"])

    assert result.exit_code == 1
    assert "5099750442228 is not valid" in result.output


def test_image_written_to_file(use_client, tmp_path):
    png = b"\x89PNG\r\n\x1a\nfake"
    use_client([{"barcode": base64.b64encode(png).decode("ascii")}])
    out = tmp_path / "code.png"

    result = runner.invoke(cli_main.app, ["image", "5099750442227", "-o", str(out)])

    assert result.exit_code == 0
    assert out.read_bytes() == png


def test_missing_token(monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "AppSettings",
        lambda: AppSettings.model_construct(api_token=None, user_agent="x", log_level="WARNING"),
    )

    result = runner.invoke(cli_main.app, ["country", "5099750442227"])

    assert result.exit_code == 1


@pytest.mark.parametrize("name", ["Live [/bold] edition", "Best of [red]Rock"])
def test_bracketed_names_are_printed_literally(use_client, name):
    use_client({"productlist": [{**BASIC_PRODUCT, "name": name}]})

    result = runner.invoke(cli_main.app, ["search", "Live"])

    assert result.exit_code == 0
    assert name in result.output
