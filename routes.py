import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from analyzer.pipeline import run_audit
from config import Settings, get_settings
from models import AuditRequest, AuditResponse, ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def _now_ms() -> int:
    return int(time.time() * 1000)


def _error(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.get("/")
async def root():
    return {
        "service": "CRO Audit Relay",
        "status": "running",
        "endpoints": {"audit": "/audit (POST)", "health": "/health (GET)"},
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(ts=_now_ms())


@router.get("/status/detailed")
async def detailed_status_check(settings: Settings = Depends(get_settings)):
    """
    Configuration status for monitoring.

    "degraded" means no Gemini key is set and every audit is served by the
    heuristic fallback.
    """
    gemini_status = "configured" if settings.llm_enabled else "missing"
    return {
        "api": "healthy",
        "gemini_api": gemini_status,
        "model": settings.GEMINI_MODEL,
        "overall_status": "healthy" if settings.llm_enabled else "degraded",
    }


@router.post("/audit", response_model=AuditResponse)
def audit_page(
    request: Optional[AuditRequest] = None,
    settings: Settings = Depends(get_settings),
):
    """
    Audits a page for CRO issues and returns a score with 5-7 findings.

    Page HTML and up to 8 screenshot tiles are sent to Gemini when
    include_llm is true and GEMINI_API_KEY is configured. When the model is
    skipped, fails, or returns nothing usable, findings come from HTML
    heuristics instead.
    """
    request = request or AuditRequest()

    if not request.url and not request.html:
        return _error(400, "missing_url_or_html")

    try:
        result = run_audit(request, settings)
        return AuditResponse(
            model=settings.GEMINI_MODEL,
            ts=_now_ms(),
            url=request.url,
            score=result.score,
            findings=result.findings,
        )
    except Exception as e:
        logger.exception("AUDIT_ERROR for %s", request.url or "<no url>")
        return _error(500, "analysis_failed", str(e))
