"""
Request body size cap for CRO Audit Relay.

Declared sizes (Content-Length) are rejected up front. Chunked uploads carry
no length, so their bytes are counted as the application reads them and the
response is replaced with a 413 once the cap is passed.
"""

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class _BodyTooLarge(Exception):
    pass


def payload_too_large() -> JSONResponse:
    return JSONResponse(status_code=413, content={"ok": False, "error": "payload_too_large"})


class BodySizeLimitMiddleware:
    """
    ASGI middleware enforcing settings.MAX_BODY_BYTES.

    The limit is read from the settings object on every request so it can be
    changed at runtime (tests lower it).
    """

    def __init__(self, app, settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.settings.MAX_BODY_BYTES
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            logger.warning("Rejected %s byte body on %s", content_length, scope.get("path"))
            await payload_too_large()(scope, receive, send)
            return

        received = 0
        exceeded = False

        async def counting_receive():
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    exceeded = True
                    raise _BodyTooLarge()
            return message

        async def guarded_send(message):
            # Whatever the app answers after the cap was hit is discarded
            if not exceeded:
                await send(message)

        try:
            await self.app(scope, counting_receive, guarded_send)
        except Exception:
            if not exceeded:
                raise

        if exceeded:
            logger.warning("Rejected streamed body over %s bytes on %s", limit, scope.get("path"))
            await payload_too_large()(scope, receive, send)
