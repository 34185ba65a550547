"""In-memory directory of live signaling connections."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterator, Optional

SendCallable = Callable[[dict], Awaitable[None]]


@dataclass(slots=True)
class Connection:
    """One live transport session."""

    connection_id: str
    send: SendCallable
    room_id: str | None = None
    display_name: str | None = None

    @property
    def joined(self) -> bool:
        return self.room_id is not None


class ConnectionDirectory:
    """Map connection IDs to their room membership and display name.

    Not safe for concurrent mutation on its own; the signaling router serializes access.
    """

    def __init__(self) -> None:
        self._connections: Dict[str, Connection] = {}

    def add(self, connection: Connection) -> None:
        self._connections[connection.connection_id] = connection

    def put(self, connection_id: str, display_name: str | None, room_id: str | None) -> Optional[Connection]:
        """Assign room and display name to a live connection.

        The previous room is overwritten; callers must leave it in the room directory first.
        Returns ``None`` when the connection is no longer live.
        """

        connection = self._connections.get(connection_id)
        if connection is None:
            return None
        connection.display_name = display_name
        connection.room_id = room_id
        return connection

    def get(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def remove(self, connection_id: str) -> Optional[Connection]:
        return self._connections.pop(connection_id, None)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._connections.values()))
