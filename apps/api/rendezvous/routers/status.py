"""Read-only counters for status pages."""
from __future__ import annotations

from fastapi import APIRouter

from ..schemas.status import StatusResponse
from ..services.signaling import router as signaling_router

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
async def get_status() -> StatusResponse:
    """Return the current room and connection counts."""

    current = signaling_router.status()
    return StatusResponse(rooms=current.rooms, connections=current.connections)
