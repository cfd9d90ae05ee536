"""API routers, all mounted under /api."""

from fastapi import APIRouter

from coin_maker.api.routes import balances, health, sales, tokens, transfer

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(tokens.router)
api_router.include_router(sales.router)
api_router.include_router(transfer.router)
api_router.include_router(balances.router)

__all__ = ["api_router"]
