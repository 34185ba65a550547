"""Tests for the connection and room directories."""
from __future__ import annotations

from rendezvous.services.connections import Connection, ConnectionDirectory
from rendezvous.services.rooms import RoomDirectory


async def _noop_send(message: dict) -> None:
    return None


def test_connection_directory_put_get_remove():
    directory = ConnectionDirectory()
    directory.add(Connection("a", _noop_send))

    connection = directory.get("a")
    assert connection is not None
    assert connection.room_id is None
    assert not connection.joined

    updated = directory.put("a", "Alice", "r1")
    assert updated is connection
    assert connection.display_name == "Alice"
    assert connection.room_id == "r1"
    assert connection.joined

    directory.put("a", "Alice", "r2")
    assert directory.get("a").room_id == "r2"

    assert len(directory) == 1
    assert "a" in directory
    assert directory.remove("a") is connection
    assert directory.get("a") is None
    assert directory.remove("a") is None
    assert len(directory) == 0


def test_connection_directory_put_ignores_closed_connection():
    directory = ConnectionDirectory()

    assert directory.put("ghost", "Ghost", "r1") is None
    assert "ghost" not in directory


def test_room_directory_self_cleans():
    rooms = RoomDirectory()

    rooms.join("r1", "a")
    rooms.join("r1", "b")
    rooms.join("r1", "a")
    assert rooms.members("r1") == ("a", "b")
    assert rooms.exists("r1")
    assert len(rooms) == 1

    rooms.leave("r1", "a")
    assert rooms.members("r1") == ("b",)

    rooms.leave("r1", "b")
    assert not rooms.exists("r1")
    assert rooms.members("r1") == ()
    assert len(rooms) == 0

    rooms.join("r1", "c")
    assert rooms.members("r1") == ("c",)


def test_room_directory_reads_do_not_create_rooms():
    rooms = RoomDirectory()

    assert rooms.members("missing") == ()
    rooms.leave("missing", "a")
    assert not rooms.exists("missing")
    assert rooms.room_ids() == []
