from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "SESSION_STARTED",
    "MOVED",
    "TIME_REPORTED",
    "TIME_UNAVAILABLE",
    "INPUT_REJECTED",
    "SESSION_ENDED",
]


@dataclass(frozen=True, slots=True)
class SessionEvent:
    type: EventType
    step: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, step: int, payload: dict[str, Any]) -> "SessionEvent":
        return SessionEvent(type=type, step=step, payload=payload, ts=datetime.now(timezone.utc))
