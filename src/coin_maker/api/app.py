# -*- coding: utf-8 -*-
"""FastAPI application factory."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from structlog.contextvars import bound_contextvars

from coin_maker import __version__
from coin_maker.api.errors import register_exception_handlers
from coin_maker.api.routes import api_router
from coin_maker.DI import Container


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the chain HTTP session on shutdown."""
    logger = structlog.get_logger("api")
    container: Container = app.state.container
    logger.info("api_startup")
    try:
        yield
    finally:
        await container.http_client().aclose()
        logger.info("api_shutdown_complete")


async def bind_request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Any]],
) -> Any:
    """Bind request id, method and path to every log emitted while handling the request."""
    with bound_contextvars(
        request_id=uuid.uuid4().hex[:12],
        http_method=request.method,
        http_path=request.url.path,
    ):
        return await call_next(request)


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the app around a container (a fresh one when not given)."""
    container = container or Container()
    settings = container.config()

    app = FastAPI(
        title="Coin Maker API",
        description="Token marketplace: mint, quote, confirm on-chain payments, transfer.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(bind_request_context)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app
