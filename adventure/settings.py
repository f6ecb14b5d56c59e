from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ROOMS_PREFIX = "rooms."
DEFAULT_TIME_FILE = "currentTime.txt"
DEFAULT_TIME_COMMAND = "time"
DEFAULT_STRIP_CHARS = " \t\r\n,."
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    rooms_prefix: str = DEFAULT_ROOMS_PREFIX
    time_file: Path = Path(DEFAULT_TIME_FILE)
    time_command: str = DEFAULT_TIME_COMMAND
    # Trailing characters ignored when matching input against room names.
    strip_chars: str = DEFAULT_STRIP_CHARS
    log_level: int = logging.WARNING


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from the environment (`ADVENTURE_*` variables).

    Callers that want `.env` support load it into the environment first
    (the CLI entry points do this with python-dotenv).
    """

    env = os.environ if environ is None else environ

    prefix = env.get("ADVENTURE_ROOMS_PREFIX", DEFAULT_ROOMS_PREFIX)
    if not prefix.strip():
        raise ValueError("ADVENTURE_ROOMS_PREFIX must not be empty")

    time_file = env.get("ADVENTURE_TIME_FILE", DEFAULT_TIME_FILE).strip()
    if not time_file:
        raise ValueError("ADVENTURE_TIME_FILE must not be empty")

    time_command = env.get("ADVENTURE_TIME_COMMAND", DEFAULT_TIME_COMMAND).strip()
    if not time_command:
        raise ValueError("ADVENTURE_TIME_COMMAND must not be empty")

    return Settings(
        rooms_prefix=prefix,
        time_file=Path(time_file),
        time_command=time_command,
        strip_chars=env.get("ADVENTURE_STRIP_CHARS", DEFAULT_STRIP_CHARS),
        log_level=_log_level(env.get("ADVENTURE_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
    )
