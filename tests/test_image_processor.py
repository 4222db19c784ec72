"""
Tests for screenshot data-URL decoding
"""
import pytest

from utils.image_processor import decode_data_url, to_inline_image


def test_decodes_png_data_url():
    assert decode_data_url("data:image/png;base64,AAAA") == {
        "mimeType": "image/png",
        "data": "AAAA",
    }


def test_keeps_subtype_with_punctuation():
    image = decode_data_url("data:image/svg+xml;base64,PHN2Zz48L3N2Zz4=")
    assert image["mimeType"] == "image/svg+xml"


@pytest.mark.parametrize(
    "value",
    [
        "not-a-data-url",
        "",
        None,
        123,
        "data:text/plain;base64,AAAA",
        "data:image/png,AAAA",
        "data:image/png;base64,",
        "data:image/png;base64,@@@@",
        "data:image/png;base64,AAA",
    ],
)
def test_rejects_malformed_values(value):
    assert decode_data_url(value) is None


def test_inline_image_wraps_payload():
    assert to_inline_image("data:image/jpeg;base64,AAAA") == {
        "inlineData": {"mimeType": "image/jpeg", "data": "AAAA"}
    }
    assert to_inline_image("not-a-data-url") is None
