"""Data contracts for the status endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    rooms: int = Field(..., ge=0, description="Rooms with at least one member")
    connections: int = Field(..., ge=0, description="Live signaling connections")


class ServerInfoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    active_rooms: int = Field(..., ge=0, alias="activeRooms")
    active_users: int = Field(..., ge=0, alias="activeUsers")
