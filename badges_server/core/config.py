"""
Application configuration for the Badges server.

Reads the environment exactly once into an immutable ``ServerSettings``
snapshot. Every consumer receives that object (directly or through a FastAPI
dependency) instead of reaching for ``os.environ`` on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Optional

from badges_server.core.errors import InvalidNumberError, MissingConfigurationError
from badges_server.core.ipfs import validate_gateway_template
from badges_server.core.logging import get_logger

logger = get_logger(__name__)

VERCEL_ENV = "NEXT_PUBLIC_VERCEL_ENV"
IPFS_GATEWAY_TEMPLATE = "NEXT_PUBLIC_IPFS_GATEWAY_TEMPLATE"
SITE_URL = "NEXT_PUBLIC_SITE_URL"
VERCEL_URL = "NEXT_PUBLIC_VERCEL_URL"
NFT_STORAGE_API_KEY = "NFT_STORAGE_API_KEY"
DISABLED_ACTIONS = "NEXT_PUBLIC_DISABLED_ACTIONS"
WEB_SOCKET_PUSHER_APP_KEY = "NEXT_PUBLIC_WEB_SOCKET_PUSHER_APP_KEY"
WEB_SOCKET_PUSHER_HOST = "NEXT_PUBLIC_WEB_SOCKET_PUSHER_HOST"
WEB_SOCKET_PUSHER_PORT = "NEXT_PUBLIC_WEB_SOCKET_PUSHER_PORT"
WEB_PUSH_PUBLIC_KEY = "NEXT_PUBLIC_WEB_PUSH_PUBLIC_KEY"

DEFAULT_WEB_SOCKET_PUSHER_PORT = 6001
PRODUCTION = "production"


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server settings derived from environment variables."""

    vercel_env: Optional[str]
    ipfs_gateway_template: str
    site_url: str
    nft_storage_api_key: str = field(repr=False)
    disabled_actions: tuple[str, ...]
    web_socket_pusher_app_key: str
    web_socket_pusher_host: str
    web_socket_pusher_port: int
    web_push_public_key: str
    version: str = "0.1.0"
    debug: bool = False

    @property
    def is_production(self) -> bool:
        return _is_production(self.vercel_env)

    def public_dict(self) -> dict[str, Any]:
        """Settings that are safe to hand to browser clients."""
        return {
            "site_url": self.site_url,
            "ipfs_gateway_template": self.ipfs_gateway_template,
            "disabled_actions": list(self.disabled_actions),
            "web_socket_pusher_app_key": self.web_socket_pusher_app_key,
            "web_socket_pusher_host": self.web_socket_pusher_host,
            "web_socket_pusher_port": self.web_socket_pusher_port,
            "web_push_public_key": self.web_push_public_key,
        }


def parse_flag(value: str | None) -> bool:
    """Only the literal string ``"true"`` enables a flag."""
    return value == "true"


def parse_port(name: str, value: str | None, *, default: int = DEFAULT_WEB_SOCKET_PUSHER_PORT) -> int:
    if value is None or value.strip() == "":
        return default
    digits = value.strip()
    # int() alone would also accept "6_001", "+80" and non-ASCII digits.
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidNumberError(f"{name} must be an integer, got {value!r}", key=name)
    port = int(digits)
    if not 0 < port < 65536:
        raise InvalidNumberError(f"{name} must be between 1 and 65535, got {port}", key=name)
    return port


def parse_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated value.

    Unset or empty input yields an empty tuple; blank items are dropped, so
    ``"a,,b"`` and ``" a , b "`` both give ``("a", "b")``.
    """
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key)
    if value is None or value == "":
        raise MissingConfigurationError(key)
    return value


def _is_production(vercel_env: Optional[str]) -> bool:
    # Local dev leaves the variable unset and behaves like production.
    return not vercel_env or vercel_env == PRODUCTION


def derive_site_url(environ: Mapping[str, str]) -> str:
    """Pick the configured site URL, or the deployment URL on preview builds."""
    if _is_production(environ.get(VERCEL_ENV)):
        return _require(environ, SITE_URL)
    return f"https://{_require(environ, VERCEL_URL)}"


def load_settings(environ: Mapping[str, str] | None = None) -> ServerSettings:
    """Build settings from ``environ`` (``os.environ`` by default).

    Raises
    ------
    ConfigurationError
        If a required variable is missing, the gateway template is malformed
        or a numeric value cannot be parsed.
    """
    if environ is None:
        environ = os.environ

    settings = ServerSettings(
        vercel_env=environ.get(VERCEL_ENV) or None,
        ipfs_gateway_template=validate_gateway_template(_require(environ, IPFS_GATEWAY_TEMPLATE)),
        site_url=derive_site_url(environ),
        nft_storage_api_key=_require(environ, NFT_STORAGE_API_KEY),
        disabled_actions=parse_list(environ.get(DISABLED_ACTIONS)),
        web_socket_pusher_app_key=_require(environ, WEB_SOCKET_PUSHER_APP_KEY),
        web_socket_pusher_host=_require(environ, WEB_SOCKET_PUSHER_HOST),
        web_socket_pusher_port=parse_port(WEB_SOCKET_PUSHER_PORT, environ.get(WEB_SOCKET_PUSHER_PORT)),
        web_push_public_key=_require(environ, WEB_PUSH_PUBLIC_KEY),
        version=environ.get("APP_VERSION", "0.1.0"),
        debug=parse_flag(environ.get("APP_DEBUG")),
    )
    logger.debug(
        "Settings loaded",
        extra={
            "site_url": settings.site_url,
            "vercel_env": settings.vercel_env,
            "disabled_actions": len(settings.disabled_actions),
        },
    )
    return settings


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """Process-wide settings snapshot, read from the environment once."""
    return load_settings()
