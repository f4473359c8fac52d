"""Operations on hunts: each hunt is a directory holding a treasure file and a log."""

from __future__ import annotations

import os
import time
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .records import Treasure, iter_treasures

PathLike = Union[str, Path]
LOG_NAME = "logged"


class HuntError(Exception):
    """A hunt operation could not be carried out."""


@dataclass
class HuntListing:
    """Metadata and contents of a hunt's treasure file."""

    hunt_id: str
    size: int
    modified: float
    treasures: List[Treasure] = field(default_factory=list)


def hunt_dir(root: PathLike, hunt_id: str) -> Path:
    """Directory that holds the hunt."""
    return Path(root) / hunt_id


def treasure_file(root: PathLike, hunt_id: str) -> Path:
    """File that holds the hunt's treasure records."""
    return hunt_dir(root, hunt_id) / hunt_id


def _log_file(root: PathLike, hunt_id: str) -> Path:
    return hunt_dir(root, hunt_id) / LOG_NAME


def _log_link(root: PathLike, hunt_id: str) -> Path:
    return Path(root) / f"logged-{hunt_id}"


def log_action(root: PathLike, hunt_id: str, action: str) -> None:
    """Append a timestamped entry to the hunt log and link it from the root."""
    try:
        with open(_log_file(root, hunt_id), "a", encoding="utf-8") as fh:
            fh.write(f"[{time.ctime()}] {action}\n")
    except OSError:
        return
    with suppress(OSError):
        _log_link(root, hunt_id).symlink_to(Path(hunt_id) / LOG_NAME)


def add_treasure(root: PathLike, hunt_id: str, treasure: Treasure) -> None:
    """Append a treasure to the hunt, creating the hunt if needed."""
    try:
        hunt_dir(root, hunt_id).mkdir(mode=0o755, exist_ok=True)
    except OSError as exc:
        raise HuntError("error creating hunt directory") from exc
    record = treasure.pack()
    try:
        with open(treasure_file(root, hunt_id), "ab") as fh:
            fh.write(record)
    except OSError as exc:
        raise HuntError("error writing treasure file") from exc
    log_action(root, hunt_id, "Added treasure")


def list_hunt(root: PathLike, hunt_id: str) -> HuntListing:
    """Return the hunt file's size, modification time and treasures."""
    path = treasure_file(root, hunt_id)
    try:
        st = path.stat()
    except OSError as exc:
        raise HuntError("stat failed") from exc
    try:
        treasures = list(iter_treasures(path))
    except OSError as exc:
        raise HuntError("cannot open treasure file") from exc
    log_action(root, hunt_id, "Listed treasures")
    return HuntListing(hunt_id, st.st_size, st.st_mtime, treasures)


def view_treasure(root: PathLike, hunt_id: str, treasure_id: str) -> Optional[Treasure]:
    """Return the first treasure with the given id, or None."""
    try:
        found = next(
            (t for t in iter_treasures(treasure_file(root, hunt_id)) if t.id == treasure_id),
            None,
        )
    except OSError as exc:
        raise HuntError("cannot open treasure file") from exc
    log_action(root, hunt_id, "View treasure")
    return found


def remove_treasure(root: PathLike, hunt_id: str, treasure_id: str) -> bool:
    """Remove every treasure with the given id; return whether any was found."""
    path = treasure_file(root, hunt_id)
    try:
        records = list(iter_treasures(path))
    except OSError as exc:
        raise HuntError("Failed to open files") from exc
    kept = [t for t in records if t.id != treasure_id]
    if len(kept) == len(records):
        return False
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "wb") as fh:
            fh.writelines(t.pack() for t in kept)
        os.replace(tmp, path)
    except OSError as exc:
        raise HuntError("Failed to write treasure file") from exc
    log_action(root, hunt_id, "Removed a treasure")
    return True


def remove_hunt(root: PathLike, hunt_id: str) -> None:
    """Delete the hunt's files, its log link and its directory."""
    for path in (treasure_file(root, hunt_id), _log_file(root, hunt_id), _log_link(root, hunt_id)):
        with suppress(OSError):
            path.unlink()
    with suppress(OSError):
        hunt_dir(root, hunt_id).rmdir()