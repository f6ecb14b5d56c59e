from __future__ import annotations

import random

import pytest

from adventure.models import Graph

KITCHEN_LAYOUT: dict[str, tuple[str, list[str]]] = {
    "Kitchen": ("START_ROOM", ["Library", "Hall", "Study"]),
    "Library": ("MID_ROOM", ["Kitchen", "Courtyard", "Ballroom"]),
    "Hall": ("MID_ROOM", ["Kitchen", "Ballroom", "DiningRoom"]),
    "Study": ("MID_ROOM", ["Kitchen", "DiningRoom", "Courtyard"]),
    "Ballroom": ("MID_ROOM", ["Library", "Hall", "DiningRoom"]),
    "DiningRoom": ("MID_ROOM", ["Hall", "Study", "Ballroom", "Courtyard"]),
    "Courtyard": ("END_ROOM", ["Library", "Study", "DiningRoom"]),
}


def make_graph(layout: dict[str, tuple[str, list[str]]]) -> Graph:
    return Graph.model_validate(
        {"rooms": [{"name": name, "role": role, "connections": list(conns)} for name, (role, conns) in layout.items()]}
    )


class FakeClock:
    """Stands in for the time worker; counts requests."""

    def __init__(self, stamp: str = "1:03pm, Monday, October 19, 2026") -> None:
        self.stamp = stamp
        self.calls = 0

    def request_time(self) -> str:
        self.calls += 1
        return self.stamp


@pytest.fixture()
def kitchen_graph() -> Graph:
    return make_graph(KITCHEN_LAYOUT)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()
