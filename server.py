"""Application factory for the relay.

Importing this module has no side effects: it neither reads the
environment nor touches logging. `main.py` and `cli.py` load the config
and pass it in.
"""
import logging
from typing import Optional

import httpx
from fastapi import FastAPI

from config import Config, VERSION
from oauth.endpoints import router as oauth_router
from oauth.github import GitHubOAuthClient
from oauth.middleware import CORSRelayMiddleware
from oauth.origins import AllowedOrigins

logger = logging.getLogger(__name__)


def create_app(config: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the relay app for `config`.

    Args:
        config: Deployment configuration, shared by all requests.
        transport: Optional httpx transport for the GitHub client.
    """
    # Docs routes would shadow the catch-all identification route
    app = FastAPI(
        title="Decap CMS OAuth Server",
        description="GitHub OAuth relay for Decap CMS",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config
    app.state.github = GitHubOAuthClient(config.client_id, config.client_secret, transport=transport)

    app.add_middleware(CORSRelayMiddleware)
    app.include_router(oauth_router)

    return app


def log_startup(config: Config) -> None:
    missing = config.missing()
    if missing:
        logger.warning(f"[STARTUP] Missing configuration: {', '.join(missing)}")
    else:
        logger.info("[STARTUP] Configuration loaded")

    origins = AllowedOrigins(config.allowed_origins)
    if not origins:
        logger.warning("[STARTUP] ALLOWED_ORIGINS is empty, all cross-origin reads will be denied")
    elif origins.wildcard:
        logger.warning("[STARTUP] ALLOWED_ORIGINS contains '*', any origin is allowed")
    else:
        logger.info(f"[STARTUP] Allowed origins: {', '.join(origins.entries)}")
