"""
Image utilities for CRO Audit Relay.

Screenshot tiles arrive from the client as base64 data-URLs. This module
turns them into inline image payloads for the Gemini API, dropping anything
that is not a well-formed image data-URL.
"""

import base64
import binascii
import re
from typing import Optional

DATA_URL_PATTERN = re.compile(
    r"^data:(image/[\w.+-]+);base64,([\s\S]+)$", re.IGNORECASE
)


def decode_data_url(data_url) -> Optional[dict]:
    """
    Parse a base64 image data-URL.

    Args:
        data_url: String like "data:image/jpeg;base64,...."

    Returns:
        {"mimeType": "image/jpeg", "data": "<base64 payload>"}, or None when the
        value is not a string, lacks the data:image prefix, or carries a payload
        that is not valid base64.
    """
    if not isinstance(data_url, str):
        return None

    match = DATA_URL_PATTERN.match(data_url)
    if not match:
        return None

    mime_type, payload = match.group(1), match.group(2)
    try:
        base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError):
        return None

    return {"mimeType": mime_type, "data": payload}


def to_inline_image(data_url) -> Optional[dict]:
    """Wrap a decoded data-URL as a Gemini inlineData part."""
    image = decode_data_url(data_url)
    if image is None:
        return None
    return {"inlineData": image}
