"""
Main application entrypoint for the Badges server.

Operational endpoints:
  - /health: shallow liveness probe to confirm the process is running
  - /ready: readiness probe confirming the settings snapshot is usable
  - /metrics: Prometheus exposition endpoint for scraping

Feature routes live under /api/v1 (see badges_server.api.v1.routes).

Settings are loaded once in create_app and attached to ``app.state``; a
missing or malformed variable raises ConfigurationError here, before the
server accepts traffic.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, generate_latest
from starlette.responses import Response

from badges_server.api.v1.routes import api_router
from badges_server.core.config import ServerSettings, get_server_settings
from badges_server.core.ipfs import validate_gateway_template
from badges_server.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Parameters
    ----------
    settings : ServerSettings, optional
        Settings to serve with. Defaults to the process-wide snapshot.

    Returns
    -------
    FastAPI
        Configured FastAPI app with metadata and routes registered.
    """
    if settings is None:
        settings = get_server_settings()
    # Injected settings skip load_settings, so check the template here too.
    validate_gateway_template(settings.ipfs_gateway_template)
    setup_logging(debug=settings.debug)

    app = FastAPI(
        title="Badges Server",
        version=settings.version,
        docs_url="/docs",
        openapi_url="/openapi.json",
        description="Backend for the NFT badges app: client configuration and IPFS URL resolution.",
    )
    app.state.settings = settings

    # Per-app registry so several apps (e.g. in tests) do not collide.
    registry = CollectorRegistry()
    readiness_gauge = Gauge("badges_readiness", "Readiness state", registry=registry)
    liveness_gauge = Gauge("badges_liveness", "Liveness state", registry=registry)
    app.state.ipfs_rewrites = Counter(
        "badges_ipfs_urls_rewritten",
        "ipfs:// URLs rewritten to gateway URLs",
        registry=registry,
    )

    readiness_gauge.set(1)
    liveness_gauge.set(1)

    @app.get("/health", tags=["ops"])  # Shallow liveness
    def health() -> dict[str, str]:
        """Return basic liveness signal."""
        return {"status": "ok"}

    @app.get("/ready", tags=["ops"])  # Deeper readiness
    def ready(request: Request) -> dict[str, str]:
        """Return readiness based on the attached settings snapshot.

        The environment is not re-read; the snapshot is fixed at startup.
        """
        try:
            validate_gateway_template(request.app.state.settings.ipfs_gateway_template)
            readiness_gauge.set(1)
            return {"status": "ready"}
        except Exception as e:
            logger.error(f"Readiness check failed: {e}", exc_info=True)
            readiness_gauge.set(0)
            return {"status": "not_ready", "error": str(type(e).__name__)}

    @app.get("/metrics", tags=["ops"])  # Prometheus exposition
    def metrics() -> Response:
        """Expose Prometheus metrics for scraping."""
        data = generate_latest(registry)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    app.include_router(api_router, prefix="/api/v1")

    logger.info(
        "Badges server configured",
        extra={"version": settings.version, "site_url": settings.site_url, "production": settings.is_production},
    )
    return app
