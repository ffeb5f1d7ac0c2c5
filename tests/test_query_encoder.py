"""Percent-encoding of free-text query values."""

import re
from urllib.parse import unquote, unquote_to_bytes

import pytest

from eansearch.adapters.query_encoder import build_query, encode_query_value

SAFE = re.compile(r"^[A-Za-z0-9\-_.~%]*$")


def test_unreserved_characters_pass_through():
    assert encode_query_value("AZaz09-_.~") == "AZaz09-_.~"


def test_space_and_punctuation_become_uppercase_escapes():
    assert encode_query_value("iPhone Max/whatever?") == "iPhone%20Max%2Fwhatever%3F"
    assert encode_query_value("a+b&c=d") == "a%2Bb%26c%3Dd"


def test_non_ascii_is_encoded_byte_by_byte():
    assert encode_query_value("Café") == "Caf%C3%A9"


def test_bytes_input_uses_raw_byte_values():
    assert encode_query_value(b"\xff\x00 x") == "%FF%00%20x"


@pytest.mark.parametrize(
    "text",
    ["Bananaboat", "iPhone Max whatever", "Müsli 500g (Bio!)", "50% off ~ today", "日本語", ""],
)
def test_output_alphabet_and_percent_decoding(text):
    encoded = encode_query_value(text)

    assert SAFE.match(encoded)
    assert unquote(encoded) == text


def test_encoding_is_not_idempotent():
    once = encode_query_value("50% off")

    assert encode_query_value(once) != once


def test_lone_surrogate_does_not_raise():
    encoded = encode_query_value("a\ud800b")

    assert SAFE.match(encoded)
    assert unquote_to_bytes(encoded) == "a\ud800b".encode("utf-8", "surrogatepass")


def test_build_query_keeps_order():
    assert build_query([("op", "product-search"), ("name", "x"), ("page", 0)]) == (
        "op=product-search&name=x&page=0"
    )
