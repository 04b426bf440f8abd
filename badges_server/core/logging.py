"""
Logging configuration for the Badges server.

Everything goes to stdout in one line-oriented format so container log
collectors can pick it up unchanged.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger.

    Parameters
    ----------
    debug : bool
        Log at DEBUG instead of INFO. ``create_app`` passes ``settings.debug``.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set specific log levels for noisy third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    get_logger(__name__).info("Logging configured", extra={"debug": debug})


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(name)
