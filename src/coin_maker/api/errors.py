"""Map service exceptions to HTTP error responses ``{ok: false, error, detail}``."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coin_maker.exceptions import (
    CoinMakerError,
    InsufficientBalanceError,
    InsufficientSupplyError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger("api")

_STATUS_BY_ERROR: tuple[tuple[type[CoinMakerError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidAmountError, status.HTTP_400_BAD_REQUEST),
    (InsufficientSupplyError, status.HTTP_400_BAD_REQUEST),
    (InsufficientBalanceError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
)


def status_for(exc: CoinMakerError) -> int:
    """HTTP status of a service error; unmapped errors are server errors."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, error: str, detail: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": error, "detail": detail},
    )


async def coin_maker_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = cast(CoinMakerError, exc)
    status_code = status_for(error)
    if status_code >= 500:
        logger.error(
            "api_service_error",
            path=request.url.path,
            error_code=error.code,
            error_message=str(error),
        )
        return error_response(status_code, "server_error")
    logger.info(
        "api_request_rejected",
        path=request.url.path,
        status_code=status_code,
        error_code=error.code,
    )
    return error_response(status_code, error.code, str(error))


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    validation_error = cast(RequestValidationError, exc)
    logger.info(
        "api_request_invalid",
        path=request.url.path,
        errors=len(validation_error.errors()),
    )
    return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.code, "invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "api_unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error_message=str(exc),
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "server_error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CoinMakerError, coin_maker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
