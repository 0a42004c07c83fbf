"""Centralized path constants and platform directory resolution."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

# Project/package roots
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
PROJECT_ROOT = PACKAGE_ROOT.parent

# Configuration
_CONFIG_ENV = os.environ.get("LOGARCHIVE_CONFIG")
CONFIG_PATH = Path(_CONFIG_ENV).expanduser() if _CONFIG_ENV else (PROJECT_ROOT / "config.txt")


def user_log_root(
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return the per-user base directory applications write their logs to.

    Windows uses the ``LocalLow`` sibling of ``%LOCALAPPDATA%``, macOS uses
    ``~/Library/Logs`` and everything else follows ``$XDG_DATA_HOME``.
    """
    platform = platform or sys.platform
    env = os.environ if env is None else env
    home = home or Path.home()

    if platform == "win32":
        local = env.get("LOCALAPPDATA")
        if local:
            return Path(local + "Low")
        return home / "AppData" / "LocalLow"
    if platform == "darwin":
        return home / "Library" / "Logs"
    xdg = env.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg)
    return home / ".local" / "share"


def default_source_dir(company: str, product: str, **kwargs) -> Path:
    """Resolve the directory a host application writes its log files to."""
    return user_log_root(**kwargs) / company / product


__all__ = [
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "CONFIG_PATH",
    "user_log_root",
    "default_source_dir",
]
