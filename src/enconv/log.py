from __future__ import annotations

import logging
import os
import time

from rich.console import Console
from rich.logging import RichHandler


LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def resolve_level(level: str | None = None) -> str:
    """Level from the argument, else ``ENCONV_LOG_LEVEL``, else INFO.

    Unknown names fall back to INFO.
    """
    if level is None:
        level = os.environ.get("ENCONV_LOG_LEVEL", "INFO")
    level = str(level).upper().strip()
    return level if level in LEVELS else "INFO"


def setup_logging(level: str | None = None) -> None:
    """Send log records to stderr through RichHandler.

    stdout stays reserved for command output (conversion tables), so
    ``enconv uc 298K > table.txt`` captures no log noise. Safe to call more
    than once: previous root handlers are dropped.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        omit_repeated_times=False,
    )
    logging.basicConfig(level=resolve_level(level), format="%(message)s", datefmt="[%X]", handlers=[handler])


class timer:
    """Log start, finish and elapsed time of a block.

    Example:
        with timer("sum 3 charge densities"):
            ...
    """

    def __init__(self, name: str, logger: logging.Logger | None = None):
        self.name = name
        self.logger = logger or logging.getLogger("enconv")
        self.t0 = 0.0

    def __enter__(self):
        self.t0 = time.perf_counter()
        self.logger.info("▶ %s…", self.name)
        return self

    def __exit__(self, exc_type, exc, tb):
        dt = time.perf_counter() - self.t0
        if exc is None:
            self.logger.info("✓ %s (%.2f s)", self.name, dt)
        else:
            self.logger.error("✗ %s failed after %.2f s: %s", self.name, dt, exc)
        return False
