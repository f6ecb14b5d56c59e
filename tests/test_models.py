from __future__ import annotations

import pytest
from pydantic import ValidationError

from adventure.core.errors import CapacityError, GraphInvariantError
from adventure.models import MAX_CONNECTIONS, Graph, Room, RoomRole


def test_room_defaults_and_capacity() -> None:
    room = Room(name="Hall")
    assert room.role == RoomRole.mid
    assert room.connections == []

    for i in range(MAX_CONNECTIONS):
        room.add_connection(f"Room{i}")

    assert not room.has_capacity()
    with pytest.raises(CapacityError):
        room.add_connection("Extra")


def test_room_rejects_self_and_duplicate_connections() -> None:
    room = Room(name="Hall")
    room.add_connection("Study")

    with pytest.raises(ValueError):
        room.add_connection("Hall")
    with pytest.raises(ValueError):
        room.add_connection("Study")
    assert room.connections == ["Study"]


@pytest.mark.parametrize("name", ["", "Dining Room", "Hall.", "a,b", "x" * 33])
def test_room_name_constraints(name: str) -> None:
    with pytest.raises(ValidationError):
        Room(name=name)


def test_graph_requires_seven_unique_rooms() -> None:
    with pytest.raises(ValidationError):
        Graph(rooms=[Room(name=f"R{i}") for i in range(6)])

    with pytest.raises(ValidationError):
        Graph(rooms=[Room(name=f"R{i}") for i in range(8)])

    rooms = [Room(name=f"R{i}") for i in range(6)] + [Room(name="R0")]
    with pytest.raises(ValidationError) as e:
        Graph(rooms=rooms)
    assert "Duplicate room names" in str(e.value)


def test_kitchen_graph_is_valid(kitchen_graph: Graph) -> None:
    kitchen_graph.ensure_valid()
    assert kitchen_graph.is_full()
    assert kitchen_graph.start_room.name == "Kitchen"
    assert kitchen_graph.end_room.name == "Courtyard"
    assert kitchen_graph.room("Kitchen").connections == ["Library", "Hall", "Study"]


def test_room_lookup_is_exact(kitchen_graph: Graph) -> None:
    with pytest.raises(KeyError):
        kitchen_graph.room("kitchen")


def test_connect_adds_both_directions_or_nothing() -> None:
    graph = Graph(rooms=[Room(name=f"R{i}") for i in range(7)])
    graph.connect("R0", "R1")
    assert graph.room("R0").connections == ["R1"]
    assert graph.room("R1").connections == ["R0"]

    with pytest.raises(ValueError):
        graph.connect("R1", "R0")
    with pytest.raises(ValueError):
        graph.connect("R2", "R2")

    for name in ("R3", "R4", "R5", "R6"):
        graph.connect("R2", name)
    graph.room("R2").add_connection("Elsewhere")
    graph.room("R2").add_connection("Nowhere")
    assert not graph.room("R2").has_capacity()

    # R2 is full, so R0 must not gain a dangling half-edge.
    with pytest.raises(CapacityError):
        graph.connect("R0", "R2")
    assert graph.room("R0").connections == ["R1"]


def test_problems_reports_every_violation(kitchen_graph: Graph) -> None:
    kitchen_graph.room("Hall").role = RoomRole.end
    kitchen_graph.room("Library").connections.remove("Kitchen")

    with pytest.raises(GraphInvariantError) as e:
        kitchen_graph.ensure_valid()

    problems = e.value.problems
    assert "expected 1 END_ROOM, found 2" in problems
    assert "expected 5 MID_ROOM, found 4" in problems
    assert "Library has 2 connections" in problems
    assert "Kitchen -> Library is not mirrored" in problems


def test_start_room_requires_exactly_one(kitchen_graph: Graph) -> None:
    kitchen_graph.room("Hall").role = RoomRole.start
    with pytest.raises(ValueError):
        _ = kitchen_graph.start_room
