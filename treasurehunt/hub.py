"""Interactive hub that queries hunts through a background monitor process."""

from __future__ import annotations

import multiprocessing
import sys
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from .manager import HuntError, treasure_file, view_treasure
from .records import iter_treasures
from .score import compute_scores, format_scores

PathLike = Union[str, Path]

COMMANDS = (
    "start_monitor",
    "list_hunts",
    "list_treasure",
    "view_treasure",
    "stop_monitor",
    "calculate_score",
    "exit",
)

_IGNORED_DIRS = {".git"}


class MonitorError(Exception):
    """The monitor is in the wrong state or could not answer a request."""


def _hunt_dirs(root: PathLike) -> Iterator[Path]:
    for entry in sorted(Path(root).iterdir(), key=lambda p: p.name):
        if entry.name in _IGNORED_DIRS:
            continue
        if entry.is_dir():
            yield entry


def count_treasures(root: PathLike, hunt: str) -> int:
    """Number of treasures stored in a hunt; 0 if its file cannot be read."""
    try:
        return sum(1 for _ in iter_treasures(treasure_file(root, hunt)))
    except OSError:
        return 0


def hunt_summary(root: PathLike) -> str:
    """Describe every hunt directory under root with its treasure count."""
    return "".join(
        f"Hunt name: {d.name}\nNumber of treasures: {count_treasures(root, d.name)}\n"
        for d in _hunt_dirs(root)
    )


def calculate_scores(root: PathLike) -> str:
    """Score tables of every hunt under root that has a treasure file."""
    parts = []
    for d in _hunt_dirs(root):
        path = treasure_file(root, d.name)
        if not path.is_file():
            continue
        try:
            parts.append(format_scores(d.name, compute_scores(path)))
        except OSError:
            parts.append("error\n")
    return "".join(parts)


def _list_treasures(root: str, hunt: str) -> str:
    try:
        treasures = list(iter_treasures(treasure_file(root, hunt)))
    except OSError as exc:
        raise MonitorError("cannot open treasure file") from exc
    if not treasures:
        return "No treasures\n"
    return "".join(
        f"Treasure ID: {t.id}\nName: {t.username}\nValue: {t.val}\n" for t in treasures
    )


def _view_treasure(root: str, hunt: str, treasure_id: str) -> str:
    try:
        t = view_treasure(root, hunt, treasure_id)
    except HuntError as exc:
        raise MonitorError(str(exc)) from exc
    if t is None:
        return "treasure not found\n"
    return (
        f"ID: {t.id}\nUser: {t.username}\nLat: {t.latitude:.2f}\n"
        f"Lon: {t.longitude:.2f}\nClue: {t.clue}\nValue: {t.val}\n"
    )


def _serve(conn, root: str) -> None:
    handlers: Dict[str, Callable[..., str]] = {
        "list_hunts": lambda: hunt_summary(root),
        "list_treasures": lambda hunt: _list_treasures(root, hunt),
        "view_treasure": lambda hunt, tid: _view_treasure(root, hunt, tid),
    }
    with conn:
        while True:
            try:
                command, *args = conn.recv()
            except EOFError:
                break
            if command == "stop":
                break
            try:
                conn.send((True, handlers[command](*args)))
            except Exception as exc:  # reported back to the hub
                conn.send((False, str(exc) or type(exc).__name__))


class Monitor:
    """A background process that answers queries about the hunts under root."""

    def __init__(self, root: PathLike = ".") -> None:
        self.root = str(root)
        self._process: Optional[multiprocessing.Process] = None
        self._conn = None

    @property
    def running(self) -> bool:
        return self._process is not None

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    def start(self) -> None:
        """Launch the monitor process."""
        if self.running:
            raise MonitorError("Monitor is already running")
        parent, child = multiprocessing.Pipe()
        process = multiprocessing.Process(target=_serve, args=(child, self.root), daemon=True)
        process.start()
        child.close()
        self._process, self._conn = process, parent

    def _request(self, *request) -> str:
        if not self.running:
            raise MonitorError("Monitor is not running")
        self._conn.send(request)
        try:
            ok, text = self._conn.recv()
        except EOFError as exc:
            raise MonitorError("monitor stopped unexpectedly") from exc
        if not ok:
            raise MonitorError(text)
        return text

    def list_hunts(self) -> str:
        """Summary of every hunt and its treasure count."""
        return self._request("list_hunts")

    def list_treasures(self, hunt: str) -> str:
        """Id, owner and value of each treasure in a hunt."""
        return self._request("list_treasures", hunt)

    def view_treasure(self, hunt: str, treasure_id: str) -> str:
        """Full details of one treasure."""
        return self._request("view_treasure", hunt, treasure_id)

    def stop(self) -> int:
        """Stop the monitor and return its exit status."""
        if not self.running:
            raise MonitorError("Monitor is not running")
        process, conn = self._process, self._conn
        try:
            conn.send(("stop",))
        except OSError:
            process.terminate()
        process.join()
        conn.close()
        self._process = self._conn = None
        return process.exitcode if process.exitcode is not None else 0

    def __enter__(self) -> "Monitor":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        if self.running:
            self.stop()


def _menu() -> None:
    print("\nChoose one of the following commands:")
    for command in COMMANDS:
        print(command)


def main(argv: Optional[List[str]] = None) -> int:
    """Read hub commands from standard input until exit."""
    monitor = Monitor(".")
    while True:
        _menu()
        try:
            command = input().strip()
        except EOFError:
            break
        try:
            if command == "start_monitor":
                monitor.start()
            elif command == "list_hunts":
                print(monitor.list_hunts(), end="")
            elif command == "list_treasure":
                if not monitor.running:
                    raise MonitorError("Monitor is not running")
                hunt = input("Enter hunt name: \n").strip()
                print(monitor.list_treasures(hunt), end="")
            elif command == "view_treasure":
                if not monitor.running:
                    raise MonitorError("Monitor is not running")
                hunt = input("Enter hunt name: \n").strip()
                tid = input("Enter treasure id: \n").strip()
                print(monitor.view_treasure(hunt, tid), end="")
            elif command == "stop_monitor":
                pid = monitor.pid
                status = monitor.stop()
                print(f"Monitor {pid} stopped with status {status}")
            elif command == "calculate_score":
                print(calculate_scores("."), end="")
            elif command == "exit":
                if monitor.running:
                    print("Monitor still running. Use stop_monitor first.")
                else:
                    return 0
            else:
                print("Unknown command. ")
        except (MonitorError, EOFError) as exc:
            print(exc)
    if monitor.running:
        monitor.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())