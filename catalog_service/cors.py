# catalog_service/cors.py
import logging

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import PlainTextResponse
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)


class StrictCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that refuses, rather than merely un-decorates,
    requests from origins outside the allowlist.

    Preflight requests keep starlette's own handling (400 for a
    disallowed origin).
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)
            origin = headers.get("origin")
            preflight = scope["method"] == "OPTIONS" and "access-control-request-method" in headers
            if origin is not None and not preflight and not self.is_allowed_origin(origin=origin):
                logger.info("rejected %s %s from origin %s", scope["method"], scope["path"], origin)
                response = PlainTextResponse("Disallowed CORS origin", status_code=403)
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)
