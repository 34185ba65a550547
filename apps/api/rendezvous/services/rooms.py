"""Self-cleaning registry of signaling rooms."""
from __future__ import annotations

from typing import Dict


class RoomDirectory:
    """Map room IDs to the connection IDs joined to them.

    Rooms are created on first join and dropped as soon as their last member leaves.
    Members are kept in join order so snapshots are stable.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, Dict[str, None]] = {}

    def join(self, room_id: str, connection_id: str) -> None:
        self._rooms.setdefault(room_id, {})[connection_id] = None

    def leave(self, room_id: str, connection_id: str) -> None:
        """Remove a member, deleting the room once it is empty."""

        members = self._rooms.get(room_id)
        if members is None:
            return
        members.pop(connection_id, None)
        if not members:
            self._rooms.pop(room_id, None)

    def members(self, room_id: str) -> tuple[str, ...]:
        """Return a snapshot of the room's members; empty for unknown rooms."""

        return tuple(self._rooms.get(room_id, ()))

    def exists(self, room_id: str) -> bool:
        return room_id in self._rooms

    def room_ids(self) -> list[str]:
        return list(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)
