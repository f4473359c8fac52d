"""Fixed-size binary treasure records as stored in a hunt file."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

ID_SIZE = 16
USERNAME_SIZE = 32
CLUE_SIZE = 64

_LAYOUT = struct.Struct(f"<{ID_SIZE}s{USERNAME_SIZE}sdd{CLUE_SIZE}si4x")
RECORD_SIZE = _LAYOUT.size


def _encode(value: str, size: int, field: str) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) >= size:
        raise ValueError(f"{field} must be shorter than {size} bytes: {value!r}")
    return raw


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", "replace")


@dataclass(frozen=True)
class Treasure:
    """One treasure placed in a hunt."""

    id: str
    username: str
    latitude: float
    longitude: float
    clue: str
    val: int

    def pack(self) -> bytes:
        """Serialise the treasure to its fixed-size record."""
        try:
            return _LAYOUT.pack(
                _encode(self.id, ID_SIZE, "id"),
                _encode(self.username, USERNAME_SIZE, "username"),
                float(self.latitude),
                float(self.longitude),
                _encode(self.clue, CLUE_SIZE, "clue"),
                int(self.val),
            )
        except struct.error as exc:
            raise ValueError(f"value out of range: {self.val!r}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Treasure":
        """Build a treasure from one fixed-size record."""
        if len(data) != RECORD_SIZE:
            raise ValueError(f"record must be {RECORD_SIZE} bytes, got {len(data)}")
        tid, user, lat, lon, clue, val = _LAYOUT.unpack(data)
        return cls(_decode(tid), _decode(user), lat, lon, _decode(clue), val)


def iter_treasures(path: Union[str, Path]) -> Iterator[Treasure]:
    """Yield the treasures stored in a hunt file, in file order.

    A trailing partial record is ignored.
    """
    with open(path, "rb") as fh:
        while len(chunk := fh.read(RECORD_SIZE)) == RECORD_SIZE:
            yield Treasure.unpack(chunk)