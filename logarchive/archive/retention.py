"""Retention helpers for the log archive."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from logarchive.core.logging_utils import LoggerLike, ensure_structured_logger

from .config import LOG_EXTENSION, METAFILE_EXTENSION
from .naming import InvalidNameError, LogFileNamer
from .scanner import list_log_files


@dataclass(slots=True)
class EvictionSummary:
    kept: int = 0
    evicted_paths: List[str] = field(default_factory=list)
    sidecars_removed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def evicted(self) -> int:
        return len(self.evicted_paths)


def _rank(path: Path, namer: LogFileNamer) -> str:
    try:
        return namer.prefix + namer.file_name_to_key(path.name) + namer.extension
    except InvalidNameError:
        return path.name


def evict_oldest(
    folder: Path,
    max_files: int,
    *,
    extension: str = LOG_EXTENSION,
    meta_extension: str = METAFILE_EXTENSION,
    namer: Optional[LogFileNamer] = None,
    dry_run: bool = False,
    logger: LoggerLike = None,
) -> EvictionSummary:
    """Delete the oldest archive files beyond ``max_files``.

    Files are ranked newest first by their canonical timestamp key, so
    legacy names with unpadded seconds still evict in time order. Names
    without a key rank by the plain file name. Each deleted file also loses
    its ``<name><meta_extension>`` sidecar when one exists.
    """

    log = ensure_structured_logger(logger, fallback_name="RetentionEvictor")
    start = time.perf_counter()
    summary = EvictionSummary()

    entries = list_log_files(folder, extension, logger=log)
    namer = namer or LogFileNamer(extension=extension)
    entries.sort(key=lambda path: _rank(path, namer))
    entries.reverse()
    to_evict = entries[max_files:] if max_files >= 0 else []
    summary.kept = len(entries) - len(to_evict)

    for path in to_evict:
        if dry_run:
            summary.evicted_paths.append(str(path))
            continue
        try:
            path.unlink()
        except FileNotFoundError:
            log.debug("Already gone: %s", path)
            continue
        except OSError as exc:
            summary.errors.append(f"{path}: {exc}")
            log.warning("Failed to evict %s: %s", path, exc)
            continue
        summary.evicted_paths.append(str(path))

        sidecar = path.with_name(path.name + meta_extension)
        try:
            if sidecar.exists():
                sidecar.unlink()
                summary.sidecars_removed.append(str(sidecar))
        except OSError as exc:
            log.warning("Failed to remove sidecar %s: %s", sidecar, exc)

    summary.duration_ms = (time.perf_counter() - start) * 1000
    if summary.evicted_paths:
        log.info(
            "%s %d archived log(s), kept %d",
            "Would evict" if dry_run else "Evicted",
            summary.evicted,
            summary.kept,
        )
    return summary


__all__ = ["EvictionSummary", "evict_oldest"]
