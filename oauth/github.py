"""GitHub OAuth client.

Builds the authorize URL and exchanges authorization codes for access
tokens. The exchange runs server-side so the client secret never reaches
the browser.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_SCOPES = ["repo", "user"]

DEFAULT_TOKEN_TYPE = "bearer"


class TokenResponse:
    """Parsed body of GitHub's token endpoint."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    @classmethod
    def from_json(cls, data: Any) -> "TokenResponse":
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected token response: expected a JSON object, got {type(data).__name__}")
        return cls(data)

    @property
    def access_token(self) -> Optional[str]:
        return self.data.get("access_token")

    @property
    def token_type(self) -> str:
        return self.data.get("token_type") or DEFAULT_TOKEN_TYPE

    @property
    def error(self) -> Optional[str]:
        return self.data.get("error")

    @property
    def error_description(self) -> Optional[str]:
        return self.data.get("error_description")

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    @property
    def error_message(self) -> str:
        return str(self.error_description or self.error or "")


class GitHubOAuthClient:
    """Talks to github.com on behalf of the browser.

    Args:
        client_id: OAuth App client ID.
        client_secret: OAuth App client secret.
        transport: Optional httpx transport, used by tests to fake GitHub.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.transport = transport

    def authorize_url(self) -> str:
        """Build the complete authorization URL."""
        params = {
            "client_id": self.client_id,
            "scope": ",".join(GITHUB_SCOPES),
        }
        return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"

    def prepare_token_request_data(self, code: str) -> dict[str, str]:
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
        }

    def prepare_token_request_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def exchange_code(self, code: str) -> TokenResponse:
        """Exchange an authorization code for an access token.

        GitHub reports OAuth errors in a JSON body, so the status code is not
        checked; the body is parsed either way. Network and JSON decode
        errors propagate to the caller.
        """
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                GITHUB_TOKEN_URL,
                json=self.prepare_token_request_data(code),
                headers=self.prepare_token_request_headers(),
            )

        logger.debug(f"[CALLBACK] Token endpoint responded with HTTP {response.status_code}")
        return TokenResponse.from_json(response.json())
