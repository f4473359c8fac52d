"""Command line for managing the treasures of a hunt."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from .manager import (
    HuntError,
    add_treasure,
    list_hunt,
    remove_hunt,
    remove_treasure,
    view_treasure,
)
from .records import Treasure

ACTIONS = ("add", "list", "view", "remove_treasure", "remove_tresure", "remove_hunt")


def prompt_treasure(read: Callable[[str], str] = input) -> Treasure:
    """Ask for each field of a treasure in turn."""
    tid = read("Enter treasure ID: ").strip()
    username = read("Enter username: ").strip()
    latitude = float(read("Enter latitude: "))
    longitude = float(read("Enter longitude: "))
    clue = read("Enter clue: ").strip()
    val = int(read("Enter value: "))
    return Treasure(tid, username, latitude, longitude, clue, val)


def _run(action: str, hunt_id: str, treasure_id: Optional[str], root: Path) -> int:
    if action == "add":
        try:
            treasure = prompt_treasure()
        except (ValueError, EOFError):
            print("invalid input")
            return 1
        add_treasure(root, hunt_id, treasure)
        return 0
    if action == "list":
        listing = list_hunt(root, hunt_id)
        print(f"Hunt: {listing.hunt_id}")
        print(f"Size: {listing.size} bytes")
        print(f"Last modified: {time.ctime(listing.modified)}")
        for t in listing.treasures:
            print(
                f"- ID: {t.id} | User: {t.username} | "
                f"({t.latitude:.2f}, {t.longitude:.2f}) | Value: {t.val}"
            )
        return 0
    if action == "remove_hunt":
        remove_hunt(root, hunt_id)
        return 0
    if treasure_id is None:
        print("Missing treasure id")
        return 1
    if action == "view":
        t = view_treasure(root, hunt_id, treasure_id)
        if t is None:
            print("treasure not found")
        else:
            print(
                f"ID: {t.id}\nUser: {t.username}\nLat: {t.latitude:.2f}\n"
                f"Lon: {t.longitude:.2f}\nClue: {t.clue}\nValue: {t.val}"
            )
        return 0
    if remove_treasure(root, hunt_id, treasure_id):
        print(f"Treasure '{treasure_id}' removed.")
    else:
        print(f"Treasure '{treasure_id}' not found.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run one action: <action> <hunt_id> [treasure_id]."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Not enough arguments")
        return 1
    action, hunt_id = args[0], args[1]
    treasure_id = args[2] if len(args) > 2 else None
    if action not in ACTIONS:
        print("Invalid operation")
        return 0
    try:
        return _run(action, hunt_id, treasure_id, Path("."))
    except (HuntError, ValueError) as exc:
        print(exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())