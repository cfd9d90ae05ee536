"""Liveness endpoint."""

from fastapi import APIRouter

from coin_maker.api.schemas import HealthResponse
from coin_maker.utils.ids import to_millis, utc_now

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True, ts=to_millis(utc_now()))
