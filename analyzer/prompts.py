"""
CRO Analysis Prompts for the Gemini API

Builds the ordered content parts sent to the model: instructions, page
metadata, the (truncated) page HTML and a bounded set of screenshot tiles.
"""

from typing import Any, List, Optional

from utils.image_processor import to_inline_image

# Hard caps on request payload size. Truncation is by raw character count,
# so markup may be cut mid-tag.
MAX_HTML_CHARS = 120_000
MAX_IMAGE_SEGMENTS = 8

CRO_SYSTEM = """
You are a senior CRO specialist. Analyze the supplied page HTML and screenshots.
Return JSON ONLY, matching this schema:

{
  "score": number,                     // 0..100
  "findings": [
    {
      "title": string,
      "category": "CTA"|"Trust"|"Offer"|"Messaging"|"Layout"|"Mobile"|"Form"|"Speed"|"AOV"|"Nav",
      "impact": "high"|"medium"|"low",
      "effort": "low"|"medium"|"high",
      "confidence": number,            // 0..1
      "selector_hint": string,         // comma-separated CSS guesses e.g. "header .cta, .btn-primary"
      "recommendation_html": string,   // optional snippet/wireframe
      "example_snippet": string,       // short rationale or copy change
      "how_to_test": string            // concise A/B suggestion + primary metric
    }
  ]
}

Rules:
- Produce 5-7 findings, prioritized by impact.
- If unsure, still output best-guess "selector_hint" (compose from class names visible in HTML).
- Avoid brand-specific CTAs like "See Plans" unless the page clearly has plans/pricing.
- No preamble, no backticks. JSON only.
""".strip()


def build_prompt_parts(
    url: str,
    html: str,
    segments: Optional[List[Any]] = None,
    screenshot_meta: Optional[Any] = None,
) -> List[dict]:
    """
    Assemble the Gemini content parts for one audit.

    Args:
        url: Page URL (may be empty)
        html: Raw page HTML, truncated to MAX_HTML_CHARS
        segments: Screenshot tiles, each {"dataUrl": "data:image/...;base64,..."}.
                  Only the first MAX_IMAGE_SEGMENTS are considered and tiles
                  that fail to decode are skipped.
        screenshot_meta: Object or dict with devicePixelRatio, viewportH, totalH

    Returns:
        Ordered list of {"text": ...} and {"inlineData": ...} parts
    """
    parts = [{"text": CRO_SYSTEM}]
    parts.append({"text": _format_page_meta(url, screenshot_meta)})

    compact_html = str(html or "")[:MAX_HTML_CHARS]
    parts.append({"text": f"HTML_START\n{compact_html}\nHTML_END"})

    for segment in (segments or [])[:MAX_IMAGE_SEGMENTS]:
        image = to_inline_image(_segment_data_url(segment))
        if image:
            parts.append(image)

    return parts


def _format_page_meta(url: str, screenshot_meta: Optional[Any]) -> str:
    dpr = _meta_value(screenshot_meta, "devicePixelRatio") or 1
    viewport_h = _meta_value(screenshot_meta, "viewportH") or 0
    total_h = _meta_value(screenshot_meta, "totalH") or 0
    return (
        f"URL: {url}\n"
        f"Device DPR: {_format_number(dpr)}\n"
        f"ViewportH: {_format_number(viewport_h)}\n"
        f"TotalH: {_format_number(total_h)}"
    )


def _meta_value(screenshot_meta: Optional[Any], key: str):
    if screenshot_meta is None:
        return None
    if isinstance(screenshot_meta, dict):
        return screenshot_meta.get(key)
    return getattr(screenshot_meta, key, None)


def _format_number(value) -> str:
    # 2.0 -> "2", 1.5 -> "1.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _segment_data_url(segment: Any) -> Optional[str]:
    if isinstance(segment, dict):
        return segment.get("dataUrl")
    return getattr(segment, "dataUrl", None)
