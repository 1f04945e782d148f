"""``python -m enconv``; with no arguments it shows the version."""

from __future__ import annotations

import sys

from enconv.cli import main


def _run() -> None:
    if len(sys.argv) == 1:
        sys.argv.append("version")
    main()


if __name__ == "__main__":
    _run()
