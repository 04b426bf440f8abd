"""
API v1 router.

Mounted under /api/v1 in badges_server.main.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from badges_server.api.v1.deps import get_settings
from badges_server.core.config import ServerSettings
from badges_server.core.ipfs import is_ipfs_url, transform_ipfs_url
from badges_server.core.logging import get_logger

logger = get_logger(__name__)

api_router = APIRouter()


class PublicConfigResponse(BaseModel):
    site_url: str
    ipfs_gateway_template: str
    disabled_actions: list[str]
    web_socket_pusher_app_key: str
    web_socket_pusher_host: str
    web_socket_pusher_port: int
    web_push_public_key: str


class ResolvedUrlResponse(BaseModel):
    url: str
    resolved: str
    rewritten: bool


@api_router.get("/status", tags=["api"])
def status() -> dict[str, str]:
    """Lightweight API status endpoint."""
    return {"service": "badges-server", "status": "ok"}


@api_router.get("/config", tags=["api"], response_model=PublicConfigResponse)
def public_config(settings: ServerSettings = Depends(get_settings)) -> PublicConfigResponse:
    """Client-facing configuration. Secrets are never included."""
    return PublicConfigResponse(**settings.public_dict())


@api_router.get("/ipfs/resolve", tags=["ipfs"], response_model=ResolvedUrlResponse)
def resolve_ipfs_url(
    request: Request,
    url: str = Query(..., description="URL to convert; non-IPFS URLs are echoed back"),
    settings: ServerSettings = Depends(get_settings),
) -> ResolvedUrlResponse:
    rewritten = is_ipfs_url(url)
    resolved = transform_ipfs_url(url, settings)
    if rewritten:
        request.app.state.ipfs_rewrites.inc()
        logger.debug("Rewrote %s to %s", url, resolved)
    return ResolvedUrlResponse(url=url, resolved=resolved, rewritten=rewritten)
