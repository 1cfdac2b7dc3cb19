"""OAuth relay endpoints for Decap CMS.

This module contains all routes:
- Authorization redirect (/auth)
- Code exchange and postMessage handoff (/callback)
- Server identification for every other path

CORS headers, OPTIONS preflight and the 500 fallback are handled by
oauth.middleware.CORSRelayMiddleware.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from oauth.github import GitHubOAuthClient
from oauth.templates import render_error, render_success

logger = logging.getLogger(__name__)

SERVER_NAME = "Decap CMS OAuth Server"

# OPTIONS never reaches the router
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

router = APIRouter(tags=["oauth"])


def get_github_client(request: Request) -> GitHubOAuthClient:
    return request.app.state.github


# ============== Authorization Flow ==============

@router.api_route("/auth", methods=ROUTE_METHODS)
async def auth(github: GitHubOAuthClient = Depends(get_github_client)):
    """Redirect the popup to GitHub's authorize page."""
    logger.info("[AUTH] Redirecting to GitHub authorize endpoint")
    return RedirectResponse(url=github.authorize_url(), status_code=302)


@router.api_route("/callback", methods=ROUTE_METHODS)
async def callback(
    request: Request,
    github: GitHubOAuthClient = Depends(get_github_client),
):
    """Exchange the code for a token and hand it to the opener window."""
    code = request.query_params.get("code")
    if not code:
        logger.info("[CALLBACK] Rejected: missing code parameter", extra={"path": "/callback", "status": 400})
        return PlainTextResponse("Missing code parameter", status_code=400)

    token_response = await github.exchange_code(code)

    if token_response.is_error:
        logger.warning(
            f"[CALLBACK] Token exchange failed: {token_response.error}",
            extra={"path": "/callback", "status": 400},
        )
        return HTMLResponse(render_error(token_response.error_message), status_code=400)

    logger.info("[CALLBACK] Token issued, posting to opener", extra={"path": "/callback", "status": 200})
    return HTMLResponse(
        render_success(token_response.access_token, token_response.token_type)
    )


# ============== Server Info ==============

@router.api_route("/{path:path}", methods=ROUTE_METHODS)
async def identify(path: str):
    """Catch-all for any path other than /auth and /callback."""
    return PlainTextResponse(SERVER_NAME)
