"""
CRO Audit Relay - Main Application

A FastAPI service that forwards a page's HTML and screenshot tiles to
Google Gemini for a structured Conversion Rate Optimization (CRO) critique,
falling back to HTML heuristics when the model is unavailable.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from config import settings
from routes import router
from utils.body_limit import BodySizeLimitMiddleware

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="CRO Audit Relay")

# Body cap sits inside CORS so 413 responses still carry CORS headers
app.add_middleware(BodySizeLimitMiddleware, settings=settings)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Bodies that are not a JSON object get the standard error envelope."""
    errors = [
        f"{'.'.join(str(part) for part in e['loc'][1:]) or 'body'}: {e['msg']}"
        for e in exc.errors()
    ]
    logger.warning("Invalid request on %s: %s", request.url.path, "; ".join(errors))
    return JSONResponse(
        status_code=400,
        content={"ok": False, "error": "invalid_request", "detail": "; ".join(errors)},
    )


# Include all routes from routes.py
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting CRO Audit Relay on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, timeout_keep_alive=60)
