# -*- coding: utf-8 -*-
"""
Entry point for the marketplace HTTP server.

Orchestrates: logging, settings check, container, FastAPI app, uvicorn.

Run with: python -m coin_maker.main (or the coin-maker console script).
"""
from __future__ import annotations

import structlog
import uvicorn

from coin_maker.api import create_app
from coin_maker.config import get_settings
from coin_maker.DI import Container
from coin_maker.exceptions import MissingRequiredConfigError
from coin_maker.logging.config import configure_logging
from coin_maker.utils import mask_address


def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")

    if not (settings.chain.api_key or "").strip():
        logger.error(
            "main_missing_chain_api_key",
            message="CHAIN__API_KEY is not set",
        )
        raise MissingRequiredConfigError("CHAIN__API_KEY")

    if not settings.marketplace.platform_wallet_configured:
        logger.warning(
            "main_platform_wallet_not_configured",
            message="MARKETPLACE__PLATFORM_WALLET is not set, using the placeholder wallet",
            platform_wallet=mask_address(settings.marketplace.platform_wallet),
        )

    container = Container()
    app = create_app(container)

    logger.info(
        "main_server_starting",
        host=settings.server.host,
        port=settings.server.port,
        chain_base_url=settings.chain.base_url,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


def main() -> None:
    run()


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
