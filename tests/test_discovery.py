from __future__ import annotations

import os
from pathlib import Path

import pytest

from adventure.core.errors import IoError, NotFoundError
from adventure.storage.discovery import find_latest, make_rooms_dir, rooms_dir_name


def _touch_dir(path: Path, mtime: float) -> Path:
    path.mkdir()
    os.utime(path, (mtime, mtime))
    return path


def test_find_latest_picks_newest_matching_directory(tmp_path: Path) -> None:
    _touch_dir(tmp_path / "rooms.100", 1_000)
    newest = _touch_dir(tmp_path / "rooms.7", 3_000)
    _touch_dir(tmp_path / "rooms.55", 2_000)

    # Not eligible: wrong prefix, non-numeric / zero suffix, plain file.
    _touch_dir(tmp_path / "other.9999", 9_000)
    _touch_dir(tmp_path / "rooms.abc", 9_000)
    _touch_dir(tmp_path / "rooms.0", 9_000)
    _touch_dir(tmp_path / "rooms.", 9_000)
    (tmp_path / "rooms.12345").write_text("not a directory", encoding="utf-8")

    assert find_latest(tmp_path, "rooms.") == newest


def test_find_latest_breaks_ties_by_suffix(tmp_path: Path) -> None:
    _touch_dir(tmp_path / "rooms.20", 5_000)
    higher = _touch_dir(tmp_path / "rooms.300", 5_000)
    assert find_latest(tmp_path, "rooms.") == higher


def test_find_latest_respects_prefix(tmp_path: Path) -> None:
    mine = _touch_dir(tmp_path / "waltsara.rooms.12", 1_000)
    _touch_dir(tmp_path / "rooms.13", 2_000)
    assert find_latest(tmp_path, "waltsara.rooms.") == mine


def test_find_latest_without_candidates(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        find_latest(tmp_path, "rooms.")
    with pytest.raises(NotFoundError):
        find_latest(tmp_path / "missing", "rooms.")


def test_make_rooms_dir_uses_pid(tmp_path: Path) -> None:
    directory = make_rooms_dir(root=tmp_path, prefix="rooms.")
    assert directory.name == f"rooms.{os.getpid()}"
    assert directory.is_dir()

    assert rooms_dir_name(prefix="rooms.", pid=42) == "rooms.42"


def test_make_rooms_dir_reuses_only_empty_directories(tmp_path: Path) -> None:
    existing = tmp_path / "rooms.42"
    existing.mkdir()
    assert make_rooms_dir(root=tmp_path, prefix="rooms.", pid=42) == existing

    (existing / "Hall_room").write_text("ROOM NAME: Hall\n", encoding="utf-8")
    with pytest.raises(IoError):
        make_rooms_dir(root=tmp_path, prefix="rooms.", pid=42)


def test_make_rooms_dir_reports_creation_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(IoError) as e:
        make_rooms_dir(root=blocker, prefix="rooms.", pid=1)
    assert "Failed to create room directory" in str(e.value)
