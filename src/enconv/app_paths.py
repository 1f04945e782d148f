from __future__ import annotations

import os
from pathlib import Path


SETTINGS_FILENAME = ".enconv.yaml"


def home_dir() -> Path:
    """Return the user's home directory.

    ``ENCONV_HOME`` overrides it (used by tests and sandboxed runs).
    """
    override = (os.environ.get("ENCONV_HOME") or "").strip()
    if override:
        return Path(override)
    return Path.home()


def default_settings_path() -> Path:
    return home_dir() / SETTINGS_FILENAME


def expand_home(p: str | Path) -> Path:
    """Expand a leading ``~`` against :func:`home_dir`."""
    pp = Path(p)
    if not pp.parts or pp.parts[0] != "~":
        return pp
    return home_dir().joinpath(*pp.parts[1:])
