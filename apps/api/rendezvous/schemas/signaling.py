"""Wire contracts for signaling events."""
from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, enum.Enum):
    # inbound
    JOIN_ROOM = "join-room"
    OFFER = "offer"
    ANSWER = "answer"
    ICE_CANDIDATE = "ice-candidate"
    MESSAGE = "message"
    # outbound only
    CONNECTED = "connected"
    USERS_IN_ROOM = "users-in-room"
    USER_JOINED = "user-joined"
    USER_LEFT = "user-left"


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class JoinRoomPayload(_Payload):
    room_id: str = Field(..., alias="roomId", min_length=1)
    username: str | None = Field(default=None, description="Display name, not validated")


class OfferPayload(_Payload):
    target_id: str | None = Field(default=None, alias="targetId")
    offer: Any = None


class AnswerPayload(_Payload):
    target_id: str | None = Field(default=None, alias="targetId")
    answer: Any = None


class IceCandidatePayload(_Payload):
    target_id: str | None = Field(default=None, alias="targetId")
    candidate: Any = None


class ChatMessagePayload(_Payload):
    message: str | None = None


class ConnectedEvent(_Payload):
    id: str


class Participant(_Payload):
    id: str
    display_name: str | None = Field(default=None, alias="displayName")


class OfferRelay(_Payload):
    from_id: str = Field(..., alias="fromId")
    from_display_name: str | None = Field(default=None, alias="fromDisplayName")
    offer: Any = None


class AnswerRelay(_Payload):
    from_id: str = Field(..., alias="fromId")
    from_display_name: str | None = Field(default=None, alias="fromDisplayName")
    answer: Any = None


class IceCandidateRelay(_Payload):
    from_id: str = Field(..., alias="fromId")
    candidate: Any = None


class ChatMessageRelay(_Payload):
    from_id: str = Field(..., alias="fromId")
    display_name: str | None = Field(default=None, alias="displayName")
    message: str | None = None
    timestamp: int = Field(..., description="Relay time in epoch milliseconds")


def envelope(event_type: EventType, body: BaseModel | list[BaseModel]) -> dict:
    """Frame an outbound event as ``{"type": ..., "payload": ...}``."""

    if isinstance(body, list):
        payload: Any = [item.model_dump(by_alias=True) for item in body]
    else:
        payload = body.model_dump(by_alias=True)
    return {"type": event_type.value, "payload": payload}
