# Analyzer package - CRO audit engine
from .prompts import build_prompt_parts
from .normalizer import normalize_result, normalize_finding, pad_findings
from .heuristics import heuristic_audit, extract_signals
from .pipeline import run_audit

__all__ = [
    "build_prompt_parts",
    "normalize_result",
    "normalize_finding",
    "pad_findings",
    "heuristic_audit",
    "extract_signals",
    "run_audit",
]
