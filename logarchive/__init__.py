"""Archive, redact and cap application log files."""

from __future__ import annotations

from importlib import metadata

from .archive import (
    InvalidNameError,
    LogFileNamer,
    PathRedactor,
    SyncConfig,
    SyncEngine,
    SyncReport,
    run_sync,
    run_sync_async,
)

try:
    __version__ = metadata.version("logarchive")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "InvalidNameError",
    "LogFileNamer",
    "PathRedactor",
    "SyncConfig",
    "SyncEngine",
    "SyncReport",
    "run_sync",
    "run_sync_async",
]
