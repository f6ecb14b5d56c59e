from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from adventure.core.errors import GraphBuildError
from adventure.models import NUM_ROOMS, ROOM_NAMES, Graph, Room, RoomRole
from adventure.settings import Settings
from adventure.storage.discovery import make_rooms_dir
from adventure.storage.room_files import write_graph

logger = logging.getLogger(__name__)


def pick_rooms(*, names: Sequence[str], rng: random.Random) -> list[Room]:
    """Return NUM_ROOMS fresh MID rooms drawn from `names` without replacement."""

    if len(set(names)) != len(names):
        raise ValueError("Candidate room names must be distinct")
    if len(names) < NUM_ROOMS:
        raise ValueError(f"At least {NUM_ROOMS} candidate room names required")

    return [Room(name=n) for n in rng.sample(list(names), k=NUM_ROOMS)]


def assign_start_and_end(*, graph: Graph, rng: random.Random) -> None:
    start = rng.choice(graph.rooms)
    end = rng.choice(graph.rooms)
    while end.name == start.name:
        start = rng.choice(graph.rooms)
        end = rng.choice(graph.rooms)

    start.role = RoomRole.start
    end.role = RoomRole.end


def add_random_connection(*, graph: Graph, rng: random.Random) -> tuple[str, str]:
    """Add one mirrored connection between two random rooms that can take it.

    Rules:
    - `a` is any room with fewer than the maximum number of connections.
    - `b` also has capacity, is not `a`, and is not already connected to `a`.

    Valid candidates are filtered first and one is drawn uniformly, which picks the
    same pairs as drawing at random and retrying on an invalid pick. With seven rooms
    and a cap of six, any room that is full is connected to every other room, so a
    room with capacity always has at least one valid partner.
    """

    open_rooms = [r for r in graph.rooms if r.has_capacity()]
    if not open_rooms:
        raise GraphBuildError("No room can take another connection")

    a = rng.choice(open_rooms)
    partners = [r for r in open_rooms if r.name != a.name and not a.is_connected_to(r.name)]
    if not partners:
        raise GraphBuildError(f"No valid connection partner for '{a.name}'")

    b = rng.choice(partners)
    graph.connect(a.name, b.name)
    return a.name, b.name


def build_graph(*, rng: random.Random, names: Sequence[str] = ROOM_NAMES) -> Graph:
    graph = Graph(rooms=pick_rooms(names=names, rng=rng))
    assign_start_and_end(graph=graph, rng=rng)

    while not graph.is_full():
        a, b = add_random_connection(graph=graph, rng=rng)
        logger.debug("connected %s <-> %s", a, b)

    logger.debug(
        "built graph: start=%s end=%s rooms=%s",
        graph.start_room.name,
        graph.end_room.name,
        ",".join(graph.names),
    )
    return graph


def generate(*, root: Path, settings: Settings, rng: random.Random | None = None) -> Path:
    """Build a random graph and write it to a fresh `<prefix><pid>` directory under `root`."""

    graph = build_graph(rng=rng or random.Random())
    directory = make_rooms_dir(root=root, prefix=settings.rooms_prefix)
    write_graph(graph, directory)
    logger.info("wrote %d rooms to %s", len(graph.rooms), directory)
    return directory
