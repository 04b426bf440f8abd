"""
Reusable dependencies.
"""

from __future__ import annotations

from fastapi import Request

from badges_server.core.config import ServerSettings


def get_settings(request: Request) -> ServerSettings:
    """Return the settings snapshot the application was created with."""
    return request.app.state.settings
