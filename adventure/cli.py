from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

from adventure.commands import CommandParser
from adventure.core.errors import AdventureError
from adventure.generator import generate
from adventure.navigation import NavigationSession, run_session
from adventure.settings import Settings, load_settings
from adventure.storage.discovery import find_latest
from adventure.storage.room_files import load_graph
from adventure.time_worker import TimeWorker

logger = logging.getLogger(__name__)


def _setup() -> Settings:
    # A local .env may override ADVENTURE_* settings; real environment variables win.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        settings = load_settings()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}") from e
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def buildrooms_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a random room graph in a new directory")
    parser.add_argument("--root", type=Path, default=Path("."), help="Where to create the room directory (default: .)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible graph")
    args = parser.parse_args(argv)

    settings = _setup()
    try:
        directory = generate(root=args.root, settings=settings, rng=random.Random(args.seed))
    except AdventureError as e:
        print(f"buildrooms: {e}", file=sys.stderr)
        return 1

    print(directory)
    return 0


def play_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play the most recently generated room graph")
    parser.add_argument("--root", type=Path, default=Path("."), help="Where to look for room directories (default: .)")
    args = parser.parse_args(argv)

    settings = _setup()
    try:
        directory = find_latest(args.root, settings.rooms_prefix)
        graph = load_graph(directory, validate=True)
    except AdventureError as e:
        print(f"play: {e}", file=sys.stderr)
        return 1

    command_parser = CommandParser(time_command=settings.time_command, strip_chars=settings.strip_chars)
    try:
        with TimeWorker(settings.time_file) as clock:
            session = NavigationSession(graph, clock=clock, parser=command_parser)
            reached_end = run_session(session, stdin=sys.stdin, stdout=sys.stdout)
    except AdventureError as e:
        print(f"play: {e}", file=sys.stderr)
        return 1

    if not reached_end:
        print("play: input ended before reaching the end room", file=sys.stderr)
        return 1
    return 0


def buildrooms() -> None:
    raise SystemExit(buildrooms_main())


def play() -> None:
    raise SystemExit(play_main())
