"""CORS and error-boundary middleware.

Every response gets the CORS headers computed from the request's Origin.
OPTIONS requests are answered here without reaching the routes. Any
exception raised while dispatching becomes a plain-text 500.
"""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from oauth.origins import cors_headers

logger = logging.getLogger(__name__)


class CORSRelayMiddleware(BaseHTTPMiddleware):
    """Attach CORS headers and turn uncaught errors into `Error: <message>`."""

    async def dispatch(self, request: Request, call_next):
        config = request.app.state.config
        origin = request.headers.get("Origin", "")
        headers = cors_headers(origin, config.allowed_origins)

        if origin and not headers["Access-Control-Allow-Origin"]:
            logger.info(
                f"[CORS] Origin not allowed: {origin}",
                extra={"method": request.method, "path": request.url.path, "origin": origin},
            )

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"[ERROR] {request.method} {request.url.path} failed: {e}",
                extra={"method": request.method, "path": request.url.path, "status": 500},
            )
            return PlainTextResponse(f"Error: {e}", status_code=500, headers=headers)

        response.headers.update(headers)
        return response
