"""Per-user score totals for a hunt."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .records import iter_treasures

MAX_USERS = 100

_log = logging.getLogger(__name__)


def compute_scores(path: Union[str, Path]) -> Dict[str, int]:
    """Sum treasure values per user, in order of first appearance.

    At most MAX_USERS distinct users are tracked; treasures of further users
    are skipped.
    """
    scores: Dict[str, int] = {}
    for t in iter_treasures(path):
        if t.username in scores:
            scores[t.username] += t.val
        elif len(scores) < MAX_USERS:
            scores[t.username] = t.val
        else:
            _log.warning("Max users")
    return scores


def format_scores(hunt: str, scores: Mapping[str, int]) -> str:
    """Render the score table for a hunt."""
    lines = [f"Scores for hunt {hunt}:"]
    lines.extend(f"{name}: {score}" for name, score in scores.items())
    return "\n".join(lines) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    """Print the scores of the hunt named as the single argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("arguments")
        return 1
    hunt = args[0]
    try:
        scores = compute_scores(Path(hunt) / hunt)
    except OSError:
        print("error")
        return 1
    print(format_scores(hunt, scores), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())