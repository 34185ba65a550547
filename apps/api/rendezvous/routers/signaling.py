"""WebSocket transport for the signaling router."""
from __future__ import annotations

import json
import logging
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..schemas.signaling import ConnectedEvent, EventType, envelope
from ..services.signaling import router as signaling_router

logger = logging.getLogger(__name__)

router = APIRouter()


def decode_frame(text: str) -> tuple[Any, Any] | None:
    """Split a JSON text frame into ``(event_type, payload)``.

    Frames may carry the payload under ``"payload"`` or inline next to ``"type"``.
    Returns ``None`` for frames that are not JSON objects.
    """

    try:
        message = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(message, dict):
        return None

    event_type = message.get("type")
    payload = message.get("payload")
    if payload is None:
        payload = {key: value for key, value in message.items() if key != "type"}
    return event_type, payload


@router.websocket("/signaling")
async def signaling_endpoint(websocket: WebSocket) -> None:
    """Relay join, offer, answer, ICE and chat events between room members."""

    connection_id = uuid4().hex
    await websocket.accept()
    await signaling_router.connect(connection_id, websocket.send_json)

    try:
        await websocket.send_json(envelope(EventType.CONNECTED, ConnectedEvent(id=connection_id)))
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break

            text = frame.get("text")
            decoded = decode_frame(text) if text is not None else None
            if decoded is None:
                logger.debug("Ignoring unreadable frame from %s", connection_id)
                continue

            event_type, payload = decoded
            await signaling_router.dispatch(connection_id, event_type, payload)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("Signaling connection %s failed", connection_id)
    finally:
        await signaling_router.disconnect(connection_id)
