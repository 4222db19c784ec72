"""
Gemini API client utilities for CRO Audit Relay.

This module contains the single call made to the Generative Language
REST API. Failures never raise: every problem is logged and reported as
"no result" so the caller can fall back to heuristics.
"""

import logging
from typing import Any, List, Optional

import requests

from utils.json_parser import extract_json_object

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper around models/{model}:generateContent."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def generate(self, parts: List[dict]) -> Optional[str]:
        """
        Send the prompt parts as one user turn and return the response text.

        No retries are attempted. Non-2xx responses and network errors are
        logged and yield None.

        Args:
            parts: Gemini content parts ({"text": ...} / {"inlineData": ...})

        Returns:
            Concatenated text of the first candidate, or None on failure
        """
        body = {"contents": [{"role": "user", "parts": parts}]}

        try:
            response = requests.post(
                self.endpoint,
                params={"key": self.api_key},
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Gemini request failed: %s", e.__class__.__name__)
            return None

        if not response.ok:
            logger.error("Gemini HTTP error %s: %s", response.status_code, response.text)
            return None

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        return _candidate_text(payload)

    def analyze(self, parts: List[dict]) -> Optional[Any]:
        """Run generate() and extract the JSON object from the answer."""
        text = self.generate(parts)
        if text is None:
            return None
        return extract_json_object(text)


def _candidate_text(payload: Any) -> str:
    """Join the text of candidates[0].content.parts, tolerating missing keys."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content") if isinstance(first.get("content"), dict) else {}
    parts = content.get("parts") if isinstance(content.get("parts"), list) else []
    return "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
