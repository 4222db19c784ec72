"""
Tests for Gemini prompt assembly
"""
from analyzer.prompts import (
    CRO_SYSTEM,
    MAX_HTML_CHARS,
    MAX_IMAGE_SEGMENTS,
    build_prompt_parts,
)
from models import ScreenshotMeta

VALID_TILE = {"dataUrl": "data:image/png;base64,AAAA"}


def test_parts_are_ordered_instructions_meta_html():
    parts = build_prompt_parts("https://shop.example", "<h1>Hi</h1>")

    assert parts[0] == {"text": CRO_SYSTEM}
    assert parts[1] == {
        "text": "URL: https://shop.example\nDevice DPR: 1\nViewportH: 0\nTotalH: 0"
    }
    assert parts[2] == {"text": "HTML_START\n<h1>Hi</h1>\nHTML_END"}
    assert len(parts) == 3


def test_instructions_describe_output_contract():
    assert '"findings"' in CRO_SYSTEM
    assert "5-7 findings" in CRO_SYSTEM
    assert "JSON only" in CRO_SYSTEM


def test_metadata_uses_screenshot_meta():
    meta = {"devicePixelRatio": 2, "viewportH": 844, "totalH": 5120}
    parts = build_prompt_parts("https://a.example", "", screenshot_meta=meta)

    assert parts[1]["text"] == "URL: https://a.example\nDevice DPR: 2\nViewportH: 844\nTotalH: 5120"


def test_metadata_accepts_model_instance():
    meta = ScreenshotMeta(devicePixelRatio=1.5, viewportH=900)
    parts = build_prompt_parts("", "<p>x</p>", screenshot_meta=meta)

    assert parts[1]["text"] == "URL: \nDevice DPR: 1.5\nViewportH: 900\nTotalH: 0"


def test_html_is_truncated_by_character_count():
    html = "a" * (MAX_HTML_CHARS + 5000)
    parts = build_prompt_parts("", html)

    assert parts[2]["text"] == "HTML_START\n" + "a" * MAX_HTML_CHARS + "\nHTML_END"


def test_attaches_at_most_eight_images():
    parts = build_prompt_parts("", "<p>x</p>", segments=[VALID_TILE] * 12)

    images = [p for p in parts if "inlineData" in p]
    assert len(images) == MAX_IMAGE_SEGMENTS
    assert images[0] == {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}


def test_bad_tiles_are_skipped():
    segments = ["not-a-dict", {"dataUrl": "not-a-data-url"}, {}, None, VALID_TILE]
    parts = build_prompt_parts("", "<p>x</p>", segments=segments)

    assert len([p for p in parts if "inlineData" in p]) == 1


def test_only_first_eight_tiles_are_considered():
    segments = [{"dataUrl": "broken"}] * 8 + [VALID_TILE, VALID_TILE]
    parts = build_prompt_parts("", "<p>x</p>", segments=segments)

    assert not [p for p in parts if "inlineData" in p]
