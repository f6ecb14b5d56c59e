from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from adventure.core.errors import NotFoundError, ParseError, RoomWriteError
from adventure.models import MAX_CONNECTIONS, NUM_ROOMS, Graph, Room, RoomRole

logger = logging.getLogger(__name__)

ROOM_FILE_SUFFIX = "_room"

NAME_PREFIX = "ROOM NAME: "
TYPE_PREFIX = "ROOM TYPE: "
_CONNECTION_RE = re.compile(r"^CONNECTION (?P<index>[^:]*): (?P<name>.*)$")


def room_file_name(room: Room) -> str:
    return f"{room.name}{ROOM_FILE_SUFFIX}"


def format_room(room: Room) -> str:
    lines = [f"{NAME_PREFIX}{room.name}"]
    lines.extend(f"CONNECTION {i}: {name}" for i, name in enumerate(room.connections, start=1))
    lines.append(f"{TYPE_PREFIX}{room.role.value}")
    return "\n".join(lines) + "\n"


def write_graph(graph: Graph, directory: Path) -> list[Path]:
    """Write one file per room into `directory`.

    Every room is attempted. Rooms that fail are logged and collected; if any failed,
    RoomWriteError is raised after the remaining rooms have been written.
    """

    written: list[Path] = []
    failed: dict[str, str] = {}

    for room in graph.rooms:
        path = directory / room_file_name(room)
        try:
            path.write_text(format_room(room), encoding="utf-8")
        except OSError as e:
            logger.error("failed to write room file %s: %s", path, e)
            failed[room.name] = e.strerror or str(e)
            continue
        written.append(path)

    if failed:
        raise RoomWriteError(failed)
    return written


def parse_room(text: str, *, source: str = "<room>") -> Room:
    """Parse one room file.

    Recognized lines are the name, numbered connections and the room type; anything
    else is ignored. Connections must be numbered 1..n in order.
    """

    name: str | None = None
    role: RoomRole | None = None
    connections: list[str] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip("\r")

        if line.startswith(NAME_PREFIX):
            if name is not None:
                raise ParseError(f"{source}:{lineno}: duplicate room name line")
            name = line[len(NAME_PREFIX) :].strip()
            continue

        if line.startswith(TYPE_PREFIX):
            tag = line[len(TYPE_PREFIX) :].strip()
            try:
                role = RoomRole(tag)
            except ValueError as e:
                raise ParseError(f"{source}:{lineno}: unknown room type {tag!r}") from e
            continue

        m = _CONNECTION_RE.match(line)
        if m is None:
            continue

        index_text = m.group("index").strip()
        if not (index_text.isascii() and index_text.isdigit()):
            raise ParseError(f"{source}:{lineno}: bad connection number {index_text!r}")
        if int(index_text) != len(connections) + 1:
            raise ParseError(f"{source}:{lineno}: expected connection {len(connections) + 1}, found {index_text}")
        if len(connections) >= MAX_CONNECTIONS:
            raise ParseError(f"{source}:{lineno}: more than {MAX_CONNECTIONS} connections")
        connections.append(m.group("name").strip())

    if name is None:
        raise ParseError(f"{source}: missing '{NAME_PREFIX.strip()}' line")
    if role is None:
        raise ParseError(f"{source}: missing '{TYPE_PREFIX.strip()}' line")

    try:
        return Room(name=name, connections=connections, role=role)
    except ValidationError as e:
        raise ParseError(f"{source}: {e}") from e


def load_room(path: Path) -> Room:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ParseError(f"Room file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Unreadable room file {path}: {e}") from e
    return parse_room(text, source=str(path))


def load_graph(directory: Path, *, validate: bool = False) -> Graph:
    """Rebuild a Graph from the files written by `write_graph`.

    With `validate=True` every graph invariant is checked as well
    (GraphInvariantError on failure).
    """

    if not directory.is_dir():
        raise NotFoundError(f"Room directory not found: {directory}")

    paths = sorted(p for p in directory.iterdir() if p.is_file())
    if len(paths) != NUM_ROOMS:
        raise ParseError(f"Expected {NUM_ROOMS} room files in {directory}, found {len(paths)}")

    rooms = [load_room(p) for p in paths]
    try:
        graph = Graph(rooms=rooms)
    except ValidationError as e:
        raise ParseError(f"{directory}: {e}") from e

    if validate:
        graph.ensure_valid()

    logger.info("loaded %d rooms from %s", len(graph.rooms), directory)
    return graph
