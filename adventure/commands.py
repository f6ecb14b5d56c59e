from __future__ import annotations

from dataclasses import dataclass

from adventure.core.errors import InvalidInputError
from adventure.models import Room
from adventure.settings import DEFAULT_STRIP_CHARS, DEFAULT_TIME_COMMAND


@dataclass(frozen=True, slots=True)
class MoveCommand:
    target: str


@dataclass(frozen=True, slots=True)
class TimeCommand:
    pass


Command = MoveCommand | TimeCommand


@dataclass(frozen=True, slots=True)
class CommandParser:
    """Turns one line of player input into a command for the current room.

    The line terminator is always dropped; matching is then exact and case-sensitive
    after trailing `strip_chars` are removed.
    A room name wins over the time command if a room is ever named like it.
    """

    time_command: str = DEFAULT_TIME_COMMAND
    strip_chars: str = DEFAULT_STRIP_CHARS

    def normalize(self, line: str) -> str:
        text = line.rstrip("\r\n")
        return text.rstrip(self.strip_chars) if self.strip_chars else text

    def parse(self, line: str, *, room: Room) -> Command:
        text = self.normalize(line)
        if text and room.is_connected_to(text):
            return MoveCommand(target=text)
        if text == self.time_command:
            return TimeCommand()
        raise InvalidInputError(text)
