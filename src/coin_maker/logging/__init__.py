"""Logging setup (structlog + Logfire)."""

from coin_maker.logging.config import configure_logging

__all__ = ["configure_logging"]
