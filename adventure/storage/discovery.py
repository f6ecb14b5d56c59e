from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from adventure.core.errors import IoError, NotFoundError

logger = logging.getLogger(__name__)


def rooms_dir_name(*, prefix: str, pid: int | None = None) -> str:
    return f"{prefix}{os.getpid() if pid is None else pid}"


def _suffix_number(name: str, prefix: str) -> int | None:
    if not name.startswith(prefix) or len(name) == len(prefix):
        return None
    suffix = name[len(prefix) :]
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    n = int(suffix)
    return n if n > 0 else None


def iter_rooms_dirs(root: Path, prefix: str) -> Iterator[tuple[float, int, Path]]:
    """Yield (mtime, suffix, path) for every `<prefix><positive int>` directory directly under `root`."""

    with os.scandir(root) as it:
        for entry in it:
            if not entry.is_dir():
                continue
            n = _suffix_number(entry.name, prefix)
            if n is None:
                continue
            yield entry.stat().st_mtime, n, Path(entry.path)


def find_latest(root: Path, prefix: str) -> Path:
    """Return the most recently modified room directory under `root`.

    Ties on modification time go to the larger numeric suffix.
    """

    if not root.is_dir():
        raise NotFoundError(f"Search root is not a directory: {root}")

    candidates = sorted(iter_rooms_dirs(root, prefix))
    if not candidates:
        raise NotFoundError(f"No room directories matching '{prefix}<n>' under {root}")

    _, _, latest = candidates[-1]
    logger.info("using room directory %s (%d candidates)", latest, len(candidates))
    return latest


def make_rooms_dir(*, root: Path, prefix: str, pid: int | None = None) -> Path:
    """Create (if absent) and return the output directory for this process.

    An existing directory is reused only while it is empty, so a stale graph left
    behind by an earlier process with the same pid is never overwritten.
    """

    directory = root / rooms_dir_name(prefix=prefix, pid=pid)
    try:
        directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        if any(directory.iterdir()):
            raise IoError(f"Room directory already holds files: {directory}")
    except OSError as e:
        raise IoError(f"Failed to create room directory {directory}: {e}") from e
    return directory
