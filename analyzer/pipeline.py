"""
Audit pipeline: prompt → Gemini → normalize → heuristics fallback → padding.
"""

import logging
from typing import Optional

from analyzer.heuristics import extract_signals, heuristic_audit
from analyzer.normalizer import normalize_result, pad_findings
from analyzer.prompts import build_prompt_parts
from config import Settings
from models import AuditRequest, AuditResult
from utils.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> Optional[GeminiClient]:
    """Create a Gemini client, or None when no API key is configured."""
    if not settings.llm_enabled:
        return None
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        api_base=settings.GEMINI_API_BASE,
        timeout=settings.GEMINI_TIMEOUT,
    )


def run_audit(request: AuditRequest, settings: Settings) -> AuditResult:
    """
    Produce a padded audit for one request.

    The model path runs only when include_llm is set and an API key is
    configured. Any model failure, or a result without findings, switches
    to the heuristic audit of the submitted HTML.
    """
    parts = build_prompt_parts(
        request.url, request.html, request.segments, request.screenshot_meta
    )

    model_json = None
    client = build_client(settings)
    if request.include_llm and client is not None:
        model_json = client.analyze(parts)
    elif client is None:
        logger.warning("GEMINI_API_KEY not set; using fallback heuristics.")

    result = normalize_result(model_json)

    if result is None or not result.findings:
        signals = extract_signals(request.html)
        logger.info(
            "Using heuristic audit for %s (sticky=%s ctas=%d trust=%d hero_len=%d)",
            request.url or "<no url>",
            signals.has_sticky,
            signals.cta_count,
            signals.trust_count,
            signals.hero_length,
        )
        result = heuristic_audit(request.html)

    return AuditResult(
        score=result.score,
        findings=pad_findings(result.findings, request.want_min_findings),
    )
