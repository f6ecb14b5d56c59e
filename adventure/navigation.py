from __future__ import annotations

import logging
from typing import Protocol, TextIO

from adventure.commands import CommandParser, MoveCommand, TimeCommand
from adventure.core.errors import InvalidInputError, IoError
from adventure.core.events import SessionEvent
from adventure.fsm import SessionFSM
from adventure.models import Graph, Room

logger = logging.getLogger(__name__)

PROMPT = "WHERE TO? >"
NOT_UNDERSTOOD = "HUH? I DON'T UNDERSTAND THAT ROOM. TRY AGAIN."
VICTORY = "YOU HAVE FOUND THE END ROOM. CONGRATULATIONS!"
TIME_UNAVAILABLE = "THE TIME IS NOT AVAILABLE RIGHT NOW."


class Clock(Protocol):
    def request_time(self) -> str:  # pragma: no cover
        ...


def format_connections(room: Room) -> str:
    return ", ".join(room.connections) + "."


class NavigationSession:
    """One walk through a loaded graph, from the START room to the END room.

    `handle()` applies a single line of input and returns the text to show; it never
    raises for bad input. The path record grows by one room name per move.
    """

    def __init__(self, graph: Graph, *, clock: Clock, parser: CommandParser | None = None) -> None:
        self.graph = graph
        self.clock = clock
        self.parser = parser or CommandParser()
        self.fsm = SessionFSM()

        self.current: Room = graph.start_room
        self._end_name = graph.end_room.name
        self.steps = 0
        self._path: list[str] = []
        self.history: list[SessionEvent] = [
            SessionEvent.now(type="SESSION_STARTED", step=0, payload={"room": self.current.name})
        ]

    @property
    def path(self) -> list[str]:
        return list(self._path)

    @property
    def finished(self) -> bool:
        return self.fsm.is_finished

    def prompt_text(self) -> str:
        return "\n".join(
            [
                f"CURRENT LOCATION: {self.current.name}",
                f"POSSIBLE CONNECTIONS: {format_connections(self.current)}",
                PROMPT,
            ]
        )

    def _move(self, target: str) -> str:
        self.current = self.graph.room(target)
        self._path.append(self.current.name)
        self.steps += 1
        logger.debug("moved to %s (step %d)", self.current.name, self.steps)
        self.history.append(SessionEvent.now(type="MOVED", step=self.steps, payload={"room": self.current.name}))

        if self.current.name == self._end_name:
            self.fsm.arrive()
            self.history.append(SessionEvent.now(type="SESSION_ENDED", step=self.steps, payload={"path": self.path}))
        else:
            self.fsm.move()
        return ""

    def _time(self) -> str:
        self.fsm.check_time()
        try:
            stamp = self.clock.request_time()
        except IoError as e:
            logger.warning("time request failed: %s", e)
            self.history.append(SessionEvent.now(type="TIME_UNAVAILABLE", step=self.steps, payload={"error": str(e)}))
            return TIME_UNAVAILABLE
        self.history.append(SessionEvent.now(type="TIME_REPORTED", step=self.steps, payload={"time": stamp}))
        return stamp

    def handle(self, line: str) -> str:
        if self.finished:
            raise RuntimeError("Session is already finished")

        try:
            command = self.parser.parse(line, room=self.current)
        except InvalidInputError as e:
            logger.debug("rejected input %r in %s", e.text, self.current.name)
            self.history.append(SessionEvent.now(type="INPUT_REJECTED", step=self.steps, payload={"input": e.text}))
            return NOT_UNDERSTOOD

        if isinstance(command, MoveCommand):
            return self._move(command.target)
        if isinstance(command, TimeCommand):
            return self._time()
        raise TypeError(f"Unhandled command: {command!r}")

    def summary(self) -> str:
        lines = [VICTORY, f"YOU TOOK {self.steps} STEPS. YOUR PATH TO VICTORY WAS:"]
        lines.extend(self._path)
        return "\n".join(lines) + "\n"


def run_session(session: NavigationSession, *, stdin: TextIO, stdout: TextIO) -> bool:
    """Drive `session` from `stdin` until the END room is reached.

    Returns False if input runs out first.
    """

    while not session.finished:
        stdout.write(session.prompt_text())
        stdout.flush()

        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return False

        reply = session.handle(line)
        stdout.write("\n")
        if reply:
            stdout.write(reply + "\n\n")

    stdout.write(session.summary())
    stdout.flush()
    return True
