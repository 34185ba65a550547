"""In-memory WebRTC signaling router.

Every inbound event is applied as one atomic step under a single lock: mutate the
connection and room directories, compute the outbound messages, release the lock,
then send. Sends are fire-and-forget; failures are logged and dropped.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from pydantic import BaseModel, ValidationError

from ..schemas import signaling as schemas
from .connections import Connection, ConnectionDirectory, SendCallable
from .rooms import RoomDirectory

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class DispatchOutcome(str, enum.Enum):
    DELIVERED = "delivered"
    TARGET_NOT_FOUND = "target_not_found"
    NOT_JOINED = "not_joined"
    CLOSED = "closed"
    IGNORED = "ignored"


@dataclass(slots=True)
class Outbound:
    """A message addressed to one connection, ready to send."""

    connection_id: str
    send: SendCallable
    message: dict


@dataclass(slots=True)
class SignalingStatus:
    rooms: int
    connections: int


HandlerResult = Tuple[DispatchOutcome, list[Outbound]]
Handler = Callable[[Connection, Any], HandlerResult]


class SignalingRouter:
    """Track rooms and connections and route signaling events between participants."""

    def __init__(
        self,
        connections: ConnectionDirectory | None = None,
        rooms: RoomDirectory | None = None,
        clock: Clock = time.time,
    ) -> None:
        self._connections = connections if connections is not None else ConnectionDirectory()
        self._rooms = rooms if rooms is not None else RoomDirectory()
        self._clock = clock
        self._lock = asyncio.Lock()
        self._handlers: Dict[schemas.EventType, Tuple[Handler, type[BaseModel]]] = {
            schemas.EventType.JOIN_ROOM: (self._join_room, schemas.JoinRoomPayload),
            schemas.EventType.OFFER: (self._offer, schemas.OfferPayload),
            schemas.EventType.ANSWER: (self._answer, schemas.AnswerPayload),
            schemas.EventType.ICE_CANDIDATE: (self._ice_candidate, schemas.IceCandidatePayload),
            schemas.EventType.MESSAGE: (self._message, schemas.ChatMessagePayload),
        }

    @property
    def connections(self) -> ConnectionDirectory:
        return self._connections

    @property
    def rooms(self) -> RoomDirectory:
        return self._rooms

    def status(self) -> SignalingStatus:
        return SignalingStatus(rooms=len(self._rooms), connections=len(self._connections))

    async def connect(self, connection_id: str, send: SendCallable) -> Connection:
        """Register a freshly accepted transport session as an unjoined connection."""

        async with self._lock:
            if connection_id in self._connections:
                raise ValueError(f"Connection {connection_id} is already registered")
            connection = Connection(connection_id=connection_id, send=send)
            self._connections.add(connection)

        logger.info("Connection %s opened (%d live)", connection_id, len(self._connections))
        return connection

    async def dispatch(self, connection_id: str, event_type: str, payload: Any = None) -> DispatchOutcome:
        """Apply one inbound event from ``connection_id`` and deliver the resulting messages."""

        try:
            kind = schemas.EventType(event_type)
            handler, model = self._handlers[kind]
        except (ValueError, KeyError):
            logger.debug("Ignoring unknown event %r from %s", event_type, connection_id)
            return DispatchOutcome.IGNORED

        try:
            parsed = model.model_validate(payload if payload is not None else {})
        except ValidationError as exc:
            logger.debug("Ignoring malformed %s from %s: %s", kind.value, connection_id, exc)
            return DispatchOutcome.IGNORED

        async with self._lock:
            sender = self._connections.get(connection_id)
            if sender is None:
                logger.debug("Dropping %s from closed connection %s", kind.value, connection_id)
                return DispatchOutcome.CLOSED
            outcome, outbound = handler(sender, parsed)

        await self._deliver(outbound)
        return outcome

    async def disconnect(self, connection_id: str) -> DispatchOutcome:
        """Remove a connection and tell its room it left. Safe to call more than once."""

        async with self._lock:
            connection = self._connections.remove(connection_id)
            if connection is None:
                return DispatchOutcome.CLOSED

            outbound: list[Outbound] = []
            if connection.room_id is not None:
                self._rooms.leave(connection.room_id, connection_id)
                outbound = self._broadcast(
                    connection.room_id,
                    connection_id,
                    schemas.EventType.USER_LEFT,
                    schemas.Participant(id=connection_id, display_name=connection.display_name),
                )
                logger.info("%s disconnected from room %s", connection.display_name, connection.room_id)

        logger.info("Connection %s closed (%d live)", connection_id, len(self._connections))
        await self._deliver(outbound)
        return DispatchOutcome.DELIVERED

    # Handlers run with the lock held and must not await.

    def _join_room(self, sender: Connection, payload: schemas.JoinRoomPayload) -> HandlerResult:
        connection_id = sender.connection_id
        room_id = payload.room_id
        outbound: list[Outbound] = []

        previous_room = sender.room_id
        if previous_room is not None and previous_room != room_id:
            self._rooms.leave(previous_room, connection_id)
            outbound.extend(
                self._broadcast(
                    previous_room,
                    connection_id,
                    schemas.EventType.USER_LEFT,
                    schemas.Participant(id=connection_id, display_name=sender.display_name),
                )
            )
            logger.info("%s left room %s", sender.display_name, previous_room)

        self._rooms.join(room_id, connection_id)
        self._connections.put(connection_id, payload.username, room_id)

        others = []
        for member_id in self._rooms.members(room_id):
            member = self._connections.get(member_id)
            if member_id != connection_id and member is not None:
                others.append(schemas.Participant(id=member_id, display_name=member.display_name))

        outbound.append(
            Outbound(connection_id, sender.send, schemas.envelope(schemas.EventType.USERS_IN_ROOM, others))
        )
        outbound.extend(
            self._broadcast(
                room_id,
                connection_id,
                schemas.EventType.USER_JOINED,
                schemas.Participant(id=connection_id, display_name=payload.username),
            )
        )

        logger.info("%s joined room %s (%d members)", payload.username, room_id, len(others) + 1)
        return DispatchOutcome.DELIVERED, outbound

    def _offer(self, sender: Connection, payload: schemas.OfferPayload) -> HandlerResult:
        if not sender.joined:
            return DispatchOutcome.NOT_JOINED, []
        body = schemas.OfferRelay(
            from_id=sender.connection_id,
            from_display_name=sender.display_name,
            offer=payload.offer,
        )
        return self._unicast(sender, payload.target_id, schemas.EventType.OFFER, body)

    def _answer(self, sender: Connection, payload: schemas.AnswerPayload) -> HandlerResult:
        if not sender.joined:
            return DispatchOutcome.NOT_JOINED, []
        body = schemas.AnswerRelay(
            from_id=sender.connection_id,
            from_display_name=sender.display_name,
            answer=payload.answer,
        )
        return self._unicast(sender, payload.target_id, schemas.EventType.ANSWER, body)

    def _ice_candidate(self, sender: Connection, payload: schemas.IceCandidatePayload) -> HandlerResult:
        if not sender.joined:
            return DispatchOutcome.NOT_JOINED, []
        body = schemas.IceCandidateRelay(from_id=sender.connection_id, candidate=payload.candidate)
        return self._unicast(sender, payload.target_id, schemas.EventType.ICE_CANDIDATE, body)

    def _message(self, sender: Connection, payload: schemas.ChatMessagePayload) -> HandlerResult:
        room_id = sender.room_id
        if room_id is None:
            return DispatchOutcome.NOT_JOINED, []
        body = schemas.ChatMessageRelay(
            from_id=sender.connection_id,
            display_name=sender.display_name,
            message=payload.message,
            timestamp=int(self._clock() * 1000),
        )
        outbound = self._broadcast(room_id, sender.connection_id, schemas.EventType.MESSAGE, body)
        return DispatchOutcome.DELIVERED, outbound

    def _unicast(
        self,
        sender: Connection,
        target_id: str | None,
        event_type: schemas.EventType,
        body: BaseModel,
    ) -> HandlerResult:
        target = self._connections.get(target_id) if target_id else None
        if target is None or target.connection_id == sender.connection_id:
            logger.debug("%s from %s to %s dropped: no such target", event_type.value, sender.connection_id, target_id)
            return DispatchOutcome.TARGET_NOT_FOUND, []

        logger.debug("%s sent from %s to %s", event_type.value, sender.connection_id, target_id)
        return DispatchOutcome.DELIVERED, [
            Outbound(target.connection_id, target.send, schemas.envelope(event_type, body))
        ]

    def _broadcast(
        self,
        room_id: str,
        sender_id: str,
        event_type: schemas.EventType,
        body: BaseModel,
    ) -> list[Outbound]:
        """Address a message to every member of the room except the sender."""

        message = schemas.envelope(event_type, body)
        outbound = []
        for member_id in self._rooms.members(room_id):
            if member_id == sender_id:
                continue
            member = self._connections.get(member_id)
            if member is not None:
                outbound.append(Outbound(member_id, member.send, message))
        return outbound

    async def _deliver(self, outbound: list[Outbound]) -> None:
        if not outbound:
            return

        results = await asyncio.gather(
            *(item.send(item.message) for item in outbound),
            return_exceptions=True,
        )
        for item, result in zip(outbound, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Dropping %s for %s: %s",
                    item.message.get("type"),
                    item.connection_id,
                    result,
                )


router = SignalingRouter()
