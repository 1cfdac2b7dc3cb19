"""Origin allow-list and CORS header computation."""

from typing import Optional

WILDCARD = "*"

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


class AllowedOrigins:
    """Parsed ALLOWED_ORIGINS value.

    Entries are split on commas and trimmed. Only exact matches count, plus
    a bare `*` entry which admits every origin. Patterns such as
    `https://*.example.com` are compared literally.
    """

    def __init__(self, raw: Optional[str]):
        entries = []
        for entry in (raw or "").split(","):
            entry = entry.strip()
            if entry and entry not in entries:
                entries.append(entry)
        self.entries: tuple[str, ...] = tuple(entries)

    @property
    def wildcard(self) -> bool:
        return WILDCARD in self.entries

    def allows(self, origin: str) -> bool:
        if not self.entries:
            return False
        return origin in self.entries or self.wildcard

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __repr__(self) -> str:
        return f"AllowedOrigins({list(self.entries)!r})"


def validate_origin(origin: str, allowed_origins: Optional[str]) -> bool:
    """Return True if `origin` may read responses from this server."""
    if not allowed_origins:
        return False
    return AllowedOrigins(allowed_origins).allows(origin)


def cors_headers(origin: str, allowed_origins: Optional[str]) -> dict[str, str]:
    """CORS headers attached to every response.

    A rejected origin gets an empty Access-Control-Allow-Origin, which
    browsers treat as a denial.
    """
    return {
        "Access-Control-Allow-Origin": origin if validate_origin(origin, allowed_origins) else "",
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
