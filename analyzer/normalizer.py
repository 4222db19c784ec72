"""
Normalization of model output into the audit schema.

Model JSON is untrusted: every field is optional and coerced to a safe
default, so these functions never raise on malformed input.
"""

import math
from typing import Any, List, Optional

from models import CATEGORIES, EFFORTS, IMPACTS, AuditResult, Finding

MIN_FINDINGS = 5
MAX_FINDINGS = 7

DEFAULT_CATEGORY = "Layout"
DEFAULT_IMPACT = "medium"
DEFAULT_EFFORT = "low"
DEFAULT_CONFIDENCE = 0.6

STRING_FIELDS = (
    "title",
    "selector_hint",
    "recommendation_html",
    "example_snippet",
    "how_to_test",
)

# Appended when fewer findings than requested are available
PADDING_FINDING = {
    "title": "Add a benefits checklist near the hero",
    "category": "Messaging",
    "impact": "medium",
    "effort": "low",
    "confidence": 0.6,
    "selector_hint": ".hero, header, .above-the-fold",
    "recommendation_html": "",
    "example_snippet": "Quick bullets: outcome, timeframe, proof.",
    "how_to_test": "A/B; monitor CTR and time-on-page.",
}


def normalize_result(value: Any) -> Optional[AuditResult]:
    """
    Coerce an arbitrary parsed JSON value into an AuditResult.

    Returns None when the value is not a JSON object, which tells the
    caller there is nothing usable and the heuristics should run.
    """
    if not isinstance(value, dict):
        return None

    score = _clamp(_to_number(value.get("score")), 0, 100)
    raw_findings = value.get("findings")
    if not isinstance(raw_findings, list):
        raw_findings = []

    return AuditResult(
        score=int(round(score)),
        findings=[normalize_finding(item) for item in raw_findings],
    )


def normalize_finding(value: Any) -> Finding:
    """Apply per-field defaults to a single finding."""
    if not isinstance(value, dict):
        value = {}

    fields = {name: _to_text(value.get(name)) for name in STRING_FIELDS}
    fields["category"] = _choice(value.get("category"), CATEGORIES, DEFAULT_CATEGORY)
    fields["impact"] = _choice(value.get("impact"), IMPACTS, DEFAULT_IMPACT)
    fields["effort"] = _choice(value.get("effort"), EFFORTS, DEFAULT_EFFORT)

    confidence = value.get("confidence")
    if _is_real_number(confidence):
        fields["confidence"] = _clamp(float(confidence), 0.0, 1.0)
    else:
        fields["confidence"] = DEFAULT_CONFIDENCE

    return Finding(**fields)


def pad_findings(findings: List[Finding], want_min_findings: Optional[int] = None) -> List[Finding]:
    """
    Top up findings with the generic checklist suggestion, then cap at seven.

    Existing findings keep their order and always win over padding.
    """
    target = min(max(MIN_FINDINGS, want_min_findings or MIN_FINDINGS), MAX_FINDINGS)
    padded = list(findings)
    while len(padded) < target:
        padded.append(Finding(**PADDING_FINDING))
    return padded[:MAX_FINDINGS]


def _to_number(value: Any) -> float:
    # Infinities survive so the clamp pins them to a bound; NaN becomes 0
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return 0.0 if math.isnan(value) else value
    return 0.0


def _is_real_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return ""
    return str(value)


def _choice(value: Any, allowed: tuple, default: str) -> str:
    if not isinstance(value, str):
        return default
    lookup = {option.lower(): option for option in allowed}
    return lookup.get(value.strip().lower(), default)
