"""Desktop entrypoint.

Usage: ``python main.py [seed]``. A seed makes enemy and rock placement
repeatable between runs.
"""

from __future__ import annotations

import sys


def _parse_seed(argv: list[str]):
    if len(argv) < 2:
        return None
    try:
        return int(argv[1])
    except ValueError:
        raise SystemExit(f"seed must be an integer, got {argv[1]!r}")


def _run_desktop(seed) -> None:
    from game import main as game_main

    game_main(seed)


if __name__ == "__main__":
    _run_desktop(_parse_seed(sys.argv))
