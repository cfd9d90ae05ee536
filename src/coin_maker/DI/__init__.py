"""Dependency injection."""

from coin_maker.DI.container import Container

__all__ = ["Container"]
