"""
Rule-based CRO audit used when the model is unavailable or unusable.

Works purely on the submitted HTML so the service always returns a
deterministic, plausible result without any external call.
"""

import re
from dataclasses import dataclass

from analyzer.normalizer import normalize_result
from models import AuditResult

SCRIPT_BLOCK = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_BLOCK = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
ANY_TAG = re.compile(r"<[^>]+>")
WHITESPACE = re.compile(r"\s+")

STICKY_PATTERN = re.compile(r"position:\s*sticky|data-sticky|sticky-cta|sticky", re.IGNORECASE)
CTA_PATTERN = re.compile(
    r"<(a|button)[^>]*>(?:[^<]*(call|buy|start|trial|checkout|add to cart|subscribe))[^<]*</\1>",
    re.IGNORECASE,
)
TRUST_PATTERN = re.compile(
    r"\b(guarantee|secure|trust|reviews?|testimonials?|refund|money back)\b",
    re.IGNORECASE,
)

HERO_TOKENS = 25
MIN_HERO_LENGTH = 40

STICKY_CTA_FINDING = {
    "title": "Make the primary CTA sticky on mobile",
    "category": "CTA",
    "impact": "high",
    "effort": "low",
    "confidence": 0.7,
    "selector_hint": "button, .btn, [role='button'], .cta, .cta-primary",
    "recommendation_html": "",
    "example_snippet": "Keep the primary CTA visible while scrolling.",
    "how_to_test": "A/B test sticky vs non-sticky; track CTR to checkout.",
}

SECONDARY_CTA_FINDING = {
    "title": "Add a secondary CTA under the hero",
    "category": "CTA",
    "impact": "medium",
    "effort": "low",
    "confidence": 0.6,
    "selector_hint": "main, .hero, .subhero, .section-cta",
    "recommendation_html": "",
    "example_snippet": "Offer a lower-friction path for information seekers.",
    "how_to_test": "Measure click-through and scroll depth.",
}

TRUST_PLACEMENT_FINDING = {
    "title": "Place trust signals within ~100px of CTAs",
    "category": "Trust",
    "impact": "medium",
    "effort": "low",
    "confidence": 0.6,
    "selector_hint": ".trust, .badges, .reviews, .guarantee",
    "recommendation_html": "<ul><li>30-day guarantee</li><li>Secure checkout</li><li>4,900+ reviews</li></ul>",
    "example_snippet": "Surface proof near purchase CTAs.",
    "how_to_test": "A/B trust badges vs control; track add-to-cart.",
}


@dataclass(frozen=True)
class PageSignals:
    """Conversion signals measured from raw page HTML."""

    has_sticky: bool
    cta_count: int
    trust_count: int
    hero_length: int

    @property
    def score(self) -> int:
        score = 50 + min(3, self.cta_count) * 8 + min(4, self.trust_count) * 4
        if not self.has_sticky:
            score -= 6
        if self.hero_length < MIN_HERO_LENGTH:
            score -= 6
        return max(20, min(100, score))


def visible_text(html: str) -> str:
    """Strip scripts, styles and tags, then collapse whitespace."""
    text = SCRIPT_BLOCK.sub("", html)
    text = STYLE_BLOCK.sub("", text)
    text = ANY_TAG.sub(" ", text)
    return WHITESPACE.sub(" ", text).strip()


def extract_signals(html: str) -> PageSignals:
    raw_html = str(html or "")
    text = visible_text(raw_html)
    hero = " ".join(text.split()[:HERO_TOKENS])

    return PageSignals(
        has_sticky=bool(STICKY_PATTERN.search(raw_html)),
        cta_count=sum(1 for _ in CTA_PATTERN.finditer(raw_html)),
        trust_count=len(TRUST_PATTERN.findall(text)),
        hero_length=len(hero),
    )


def heuristic_audit(html: str) -> AuditResult:
    """
    Score a page and emit up to three findings from HTML alone.

    Findings are included only when their trigger holds: no sticky CTA,
    fewer than two CTAs, fewer than two trust signals.
    """
    signals = extract_signals(html)

    findings = []
    if not signals.has_sticky:
        findings.append(STICKY_CTA_FINDING)
    if signals.cta_count < 2:
        findings.append(SECONDARY_CTA_FINDING)
    if signals.trust_count < 2:
        findings.append(TRUST_PLACEMENT_FINDING)

    return normalize_result({"score": signals.score, "findings": findings})
