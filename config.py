"""Config management for decap-oauth-relay.

Configuration comes from the environment only. A `.env` file in the working
directory is loaded first when present, without overriding variables that
are already set.
"""
import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv


ENV_FILE = Path(".env")

VERSION = "1.0.0"

REQUIRED_VARS = ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "ALLOWED_ORIGINS")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


class Config:
    """Configuration container.

    Built once at startup and shared read-only by every request.
    """

    def __init__(self, data: Optional[Mapping[str, str]] = None):
        self._data = MappingProxyType(dict(data or {}))

    @property
    def client_id(self) -> str:
        return self._data.get("GITHUB_CLIENT_ID", "")

    @property
    def client_secret(self) -> str:
        return self._data.get("GITHUB_CLIENT_SECRET", "")

    @property
    def allowed_origins(self) -> str:
        return self._data.get("ALLOWED_ORIGINS", "")

    @property
    def host(self) -> str:
        return self._data.get("OAUTH_HOST") or DEFAULT_HOST

    @property
    def port(self) -> int:
        return int(self._data.get("OAUTH_PORT") or DEFAULT_PORT)

    @property
    def log_level(self) -> str:
        return (self._data.get("LOG_LEVEL") or "INFO").upper()

    @property
    def log_format(self) -> str:
        return (self._data.get("LOG_FORMAT") or "plain").lower()

    def missing(self) -> list[str]:
        """Names of required variables that are unset or empty."""
        return [name for name in REQUIRED_VARS if not self._data.get(name, "").strip()]

    def is_valid(self) -> bool:
        """Check if config has required fields."""
        return not self.missing()

    def __repr__(self) -> str:
        # Never print the secret
        return (
            f"Config(client_id={self.client_id!r}, "
            f"client_secret={'***' if self.client_secret else ''!r}, "
            f"allowed_origins={self.allowed_origins!r})"
        )


def load_env_files() -> bool:
    """Load .env from the working directory if it exists."""
    if ENV_FILE.exists():
        return load_dotenv(ENV_FILE, override=False)
    return False


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load config from the environment.

    Raises:
        ValueError: If OAUTH_PORT is set but is not an integer.
    """
    source = os.environ if environ is None else environ
    keys = REQUIRED_VARS + ("OAUTH_HOST", "OAUTH_PORT", "LOG_LEVEL", "LOG_FORMAT")
    data = {key: source[key] for key in keys if key in source}

    port = data.get("OAUTH_PORT")
    if port:
        try:
            int(port)
        except ValueError:
            raise ValueError(f"OAUTH_PORT must be an integer, got {port!r}") from None

    return Config(data)
