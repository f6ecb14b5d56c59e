from __future__ import annotations

from collections import Counter
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from adventure.core.errors import CapacityError, GraphInvariantError

NUM_ROOMS = 7
MIN_CONNECTIONS = 3
MAX_CONNECTIONS = 6
MAX_ROOM_NAME_LENGTH = 32

# The mansion. Seven of these end up in every generated graph.
ROOM_NAMES: tuple[str, ...] = (
    "Conservatory",
    "Lounge",
    "Kitchen",
    "Library",
    "Hall",
    "Study",
    "Ballroom",
    "DiningRoom",
    "BilliardRoom",
    "Courtyard",
)

# Names are matched against whitespace/comma/period separated input, so they cannot contain those.
ROOM_NAME_PATTERN = r"^[^\s,.]+$"


class RoomRole(StrEnum):
    start = "START_ROOM"
    mid = "MID_ROOM"
    end = "END_ROOM"


class Room(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_ROOM_NAME_LENGTH, pattern=ROOM_NAME_PATTERN)

    # Outgoing connections in the order they were added.
    connections: list[str] = Field(default_factory=list, max_length=MAX_CONNECTIONS)

    role: RoomRole = RoomRole.mid

    def has_capacity(self) -> bool:
        return len(self.connections) < MAX_CONNECTIONS

    def is_connected_to(self, name: str) -> bool:
        return name in self.connections

    def add_connection(self, name: str) -> None:
        if name == self.name:
            raise ValueError(f"Room '{self.name}' cannot connect to itself")
        if self.is_connected_to(name):
            raise ValueError(f"Room '{self.name}' is already connected to '{name}'")
        if not self.has_capacity():
            raise CapacityError(f"Room '{self.name}' already has {MAX_CONNECTIONS} connections")
        self.connections.append(name)


class Graph(BaseModel):
    """The fixed-size room graph.

    Built once by the generator (or the loader) and treated as read-only afterwards.
    Structural invariants are checked on demand by `ensure_valid()`; the model itself only
    enforces the room count and unique names so partially connected graphs can exist
    while the generator is still adding edges.
    """

    rooms: list[Room] = Field(..., min_length=NUM_ROOMS, max_length=NUM_ROOMS)

    @model_validator(mode="after")
    def _unique_names(self) -> "Graph":
        dupes = sorted(n for n, c in Counter(r.name for r in self.rooms).items() if c > 1)
        if dupes:
            raise ValueError(f"Duplicate room names: {', '.join(dupes)}")
        return self

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.rooms]

    def room(self, name: str) -> Room:
        found = next((r for r in self.rooms if r.name == name), None)
        if found is None:
            raise KeyError(name)
        return found

    def _single(self, role: RoomRole) -> Room:
        matches = [r for r in self.rooms if r.role == role]
        if len(matches) != 1:
            raise ValueError(f"Expected exactly one {role.value}, found {len(matches)}")
        return matches[0]

    @property
    def start_room(self) -> Room:
        return self._single(RoomRole.start)

    @property
    def end_room(self) -> Room:
        return self._single(RoomRole.end)

    def is_full(self) -> bool:
        return all(MIN_CONNECTIONS <= len(r.connections) <= MAX_CONNECTIONS for r in self.rooms)

    def connect(self, a: str, b: str) -> None:
        """Connect two rooms in both directions, or not at all."""

        room_a = self.room(a)
        room_b = self.room(b)
        if room_a.name == room_b.name:
            raise ValueError(f"Room '{a}' cannot connect to itself")
        if room_a.is_connected_to(b) or room_b.is_connected_to(a):
            raise ValueError(f"Rooms '{a}' and '{b}' are already connected")
        for r in (room_a, room_b):
            if not r.has_capacity():
                raise CapacityError(f"Room '{r.name}' already has {MAX_CONNECTIONS} connections")

        room_a.add_connection(b)
        room_b.add_connection(a)

    def problems(self) -> list[str]:
        out: list[str] = []

        if len(self.rooms) != NUM_ROOMS:
            out.append(f"expected {NUM_ROOMS} rooms, found {len(self.rooms)}")

        names = set(self.names)
        if len(names) != len(self.rooms):
            out.append("room names are not unique")

        roles = Counter(r.role for r in self.rooms)
        if roles[RoomRole.start] != 1:
            out.append(f"expected 1 START_ROOM, found {roles[RoomRole.start]}")
        if roles[RoomRole.end] != 1:
            out.append(f"expected 1 END_ROOM, found {roles[RoomRole.end]}")
        if roles[RoomRole.mid] != NUM_ROOMS - 2:
            out.append(f"expected {NUM_ROOMS - 2} MID_ROOM, found {roles[RoomRole.mid]}")

        for r in self.rooms:
            n = len(r.connections)
            if not MIN_CONNECTIONS <= n <= MAX_CONNECTIONS:
                out.append(f"{r.name} has {n} connections")
            if r.name in r.connections:
                out.append(f"{r.name} connects to itself")
            for name, count in Counter(r.connections).items():
                if count > 1:
                    out.append(f"{r.name} connects to {name} {count} times")
            for name in r.connections:
                if name not in names:
                    out.append(f"{r.name} connects to unknown room {name}")
                elif not self.room(name).is_connected_to(r.name):
                    out.append(f"{r.name} -> {name} is not mirrored")

        return out

    def ensure_valid(self) -> None:
        problems = self.problems()
        if problems:
            raise GraphInvariantError(problems)
