"""HTTP API (FastAPI)."""

from coin_maker.api.app import create_app

__all__ = ["create_app"]
