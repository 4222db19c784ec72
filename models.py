import math
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


CATEGORIES = (
    "CTA", "Trust", "Offer", "Messaging", "Layout",
    "Mobile", "Form", "Speed", "AOV", "Nav",
)
IMPACTS = ("high", "medium", "low")
EFFORTS = ("low", "medium", "high")

Category = Literal[
    "CTA", "Trust", "Offer", "Messaging", "Layout",
    "Mobile", "Form", "Speed", "AOV", "Nav",
]
Impact = Literal["high", "medium", "low"]
Effort = Literal["low", "medium", "high"]


# Request models
FALSE_STRINGS = ("", "false", "0", "no", "off")


def _finite_number(value) -> Optional[float]:
    """Numbers and numeric strings as a finite float, anything else as None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


class ScreenshotMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    devicePixelRatio: Optional[float] = None
    viewportH: Optional[float] = None
    totalH: Optional[float] = None

    @field_validator("devicePixelRatio", "viewportH", "totalH", mode="before")
    @classmethod
    def _numbers_only(cls, value):
        return _finite_number(value)


class AuditRequest(BaseModel):
    """
    Body of POST /audit.

    Every field is coerced rather than rejected: nulls and wrongly typed
    values fall back to their defaults so a sloppy client still gets an audit.
    """

    model_config = ConfigDict(extra="ignore")

    url: str = ""
    html: str = ""
    segments: List[Any] = Field(default_factory=list)  # [{"dataUrl": "data:image/...;base64,..."}]
    screenshot_meta: Optional[ScreenshotMeta] = None
    include_llm: bool = True
    want_min_findings: int = 7

    @field_validator("url", "html", mode="before")
    @classmethod
    def _as_text(cls, value):
        if value is None or isinstance(value, (dict, list)):
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("segments", mode="before")
    @classmethod
    def _as_segment_list(cls, value):
        return value if isinstance(value, list) else []

    @field_validator("screenshot_meta", mode="before")
    @classmethod
    def _as_meta(cls, value):
        return value if isinstance(value, (dict, ScreenshotMeta)) else None

    @field_validator("include_llm", mode="before")
    @classmethod
    def _as_flag(cls, value):
        if value is None:
            return True
        if isinstance(value, str):
            return value.strip().lower() not in FALSE_STRINGS
        return bool(value)

    @field_validator("want_min_findings", mode="before")
    @classmethod
    def _as_count(cls, value):
        number = _finite_number(value)
        return 7 if number is None else int(number)


# Result models
class Finding(BaseModel):
    title: str = ""
    category: Category = "Layout"
    impact: Impact = "medium"
    effort: Effort = "low"
    confidence: float = 0.6
    selector_hint: str = ""
    recommendation_html: str = ""
    example_snippet: str = ""
    how_to_test: str = ""


class AuditResult(BaseModel):
    score: int = Field(default=0, ge=0, le=100)
    findings: List[Finding] = Field(default_factory=list)


# Response models
class AuditResponse(BaseModel):
    ok: bool = True
    model: str
    ts: int
    url: str
    score: int
    findings: List[Finding]


class HealthResponse(BaseModel):
    ok: bool = True
    ts: int


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    detail: Optional[str] = None
