# Utils package - model client, data-URL and JSON helpers

from .gemini_client import GeminiClient
from .json_parser import extract_json_object
from .image_processor import decode_data_url, to_inline_image

__all__ = [
    "GeminiClient",
    "extract_json_object",
    "decode_data_url",
    "to_inline_image",
]
