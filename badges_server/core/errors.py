"""
Configuration error taxonomy.

All of these are raised while the settings snapshot is being built, so a
misconfigured process stops at startup instead of producing broken URLs later.
"""

from __future__ import annotations

from typing import Optional


class ConfigurationError(ValueError):
    """Base class for settings that cannot be loaded."""

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class MissingConfigurationError(ConfigurationError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required environment variable {key}", key=key)


class InvalidGatewayTemplateError(ConfigurationError):
    pass


class InvalidNumberError(ConfigurationError):
    pass
