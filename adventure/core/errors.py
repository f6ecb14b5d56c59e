from __future__ import annotations


class AdventureError(RuntimeError):
    pass


class NotFoundError(AdventureError):
    """No eligible room directory (or the requested one is missing)."""


class ParseError(AdventureError):
    """A room file or room directory does not have the expected shape."""


class IoError(AdventureError):
    pass


class RoomWriteError(IoError):
    def __init__(self, failed: dict[str, str]):
        self.failed = dict(failed)
        detail = ", ".join(f"{name} ({reason})" for name, reason in sorted(self.failed.items()))
        super().__init__(f"Failed to write room files: {detail}")


class TimeWriteError(IoError):
    pass


class WorkerStartError(AdventureError):
    pass


class WorkerStoppedError(AdventureError):
    """The time worker thread exited and can no longer answer requests."""


class InvalidInputError(AdventureError):
    """Input that names neither a connection of the current room nor a command."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Not understood: {text!r}")


class CapacityError(AdventureError):
    pass


class GraphBuildError(AdventureError):
    pass


class GraphInvariantError(AdventureError):
    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid graph: " + "; ".join(self.problems))
