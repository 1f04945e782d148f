"""Version helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import platform
import subprocess
import sys


__version__ = "0.5.5"


@dataclass(frozen=True)
class VersionInfo:
    package_version: str
    git_commit: str | None
    python: str
    platform: str


def _try_git_commit() -> str | None:
    """Return short git commit hash if available."""
    root = Path(__file__).resolve().parents[2]
    if not (root / ".git").exists():
        return None
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=str(root),
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2,
        ).strip()
    except (OSError, subprocess.SubprocessError):
        return None
    return out or None


def get_version_info() -> VersionInfo:
    return VersionInfo(
        package_version=__version__,
        git_commit=_try_git_commit(),
        python=sys.version.split()[0],
        platform=f"{platform.system()} {platform.release()} ({platform.machine()})",
    )
