# treasurehunt

Create and manage treasure hunts from the command line. Each hunt is a
directory under the current working directory. The directory is named after
the hunt and holds two files:

- `<hunt>/<hunt>`: the treasures, stored as fixed-size binary records
  (136 bytes each, little-endian)
- `<hunt>/logged`: a log of the actions taken on the hunt, one timestamped
  line per action

The first time an action is logged, a symbolic link named `logged-<hunt>` is
created in the current directory. It points at the hunt's log.

## Installation

    pip install .

## Managing hunts

    treasure-manager add <hunt>                      # prompts for each field of a treasure
    treasure-manager list <hunt>                     # file size, modification time, all treasures
    treasure-manager view <hunt> <treasure_id>       # one treasure in full
    treasure-manager remove_treasure <hunt> <treasure_id>
    treasure-manager remove_hunt <hunt>

- `add` creates the hunt directory if it does not exist. It then asks for the
  treasure ID, username, latitude, longitude, clue and value, and appends the
  record. Encoded as UTF-8, the ID must be shorter than 16 bytes, the username
  shorter than 32 bytes and the clue shorter than 64 bytes.
- `remove_treasure` removes every treasure that has the given ID. The spelling
  `remove_tresure` is accepted too.
- `remove_hunt` deletes the treasure file, the log, the `logged-<hunt>` link
  and the hunt directory. Any of them that is missing is skipped.
- If fewer than two arguments are given, the command prints
  `Not enough arguments` and exits with status 1. An unknown action prints
  `Invalid operation`.

## Scores

    treasure-score <hunt>

The command adds up the values of the treasures for each user and prints one
line per user, in the order in which the users first appear in the hunt. At
most 100 distinct users are counted. Treasures that belong to further users
are skipped, and a warning is logged for each one.

## Interactive hub

    treasure-hub

The hub prints a menu and reads one command per line from standard input:

- `start_monitor`: starts a background monitor process
- `list_hunts`: every hunt directory in the current directory, with the number
  of treasures it holds (`.git` is ignored)
- `list_treasure`: asks for a hunt name, then shows the ID, user and value of
  each treasure in that hunt
- `view_treasure`: asks for a hunt name and a treasure ID, then shows that
  treasure in full
- `stop_monitor`: stops the monitor and prints its process ID and exit status
- `calculate_score`: the score table of every hunt that has a treasure file;
  this command does not need the monitor
- `exit`: quits, but refuses while the monitor is still running

`list_hunts`, `list_treasure` and `view_treasure` need a running monitor. If
standard input ends, the hub stops the monitor and quits.

## Using it as a library

```python
from treasurehunt.records import Treasure, iter_treasures
from treasurehunt.manager import add_treasure, view_treasure, remove_treasure
from treasurehunt.score import compute_scores, format_scores
from treasurehunt.hub import Monitor

t = Treasure(id="t1", username="alice", latitude=45.75, longitude=21.23,
             clue="under-the-bridge", val=10)
add_treasure(".", "hunt1", t)
print(view_treasure(".", "hunt1", "t1"))          # Treasure or None
print(format_scores("hunt1", compute_scores("hunt1/hunt1")))

with Monitor(".") as monitor:
    print(monitor.list_hunts())
    print(monitor.list_treasures("hunt1"))
```

- `Treasure.pack()` and `Treasure.unpack(data)` convert a treasure to and from
  its binary record. `iter_treasures(path)` yields the records in a file and
  ignores a trailing partial record.
- The functions in `treasurehunt.manager` raise `HuntError` when a hunt's files
  cannot be read or written. `list_hunt` returns a `HuntListing` that holds the
  file size, the modification time and the treasures.
- A `Monitor` raises `MonitorError` when it is not running, when it is already
  running, or when a request fails.