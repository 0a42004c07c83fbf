"""Listing of log files and extraction of their timestamp keys."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Set, Union

from logarchive.core.logging_utils import LoggerLike, ensure_structured_logger

from .config import LOG_EXTENSION
from .naming import InvalidNameError, LogFileNamer


def list_log_files(
    folder: Union[str, Path],
    extension: str = LOG_EXTENSION,
    *,
    logger: LoggerLike = None,
) -> List[Path]:
    """Return files directly inside ``folder`` whose suffix is ``extension``.

    A missing or unreadable folder yields an empty list. The order of the
    result carries no meaning.
    """
    base = Path(folder)
    if not base.is_dir():
        return []

    try:
        return [entry for entry in base.iterdir() if entry.suffix == extension and entry.is_file()]
    except OSError as exc:
        log = ensure_structured_logger(logger, fallback_name="ArchiveScanner")
        log.warning("Failed to list %s: %s", base, exc)
        return []


def extract_timestamp_keys(
    paths: Iterable[Union[str, Path]],
    namer: LogFileNamer,
    *,
    logger: LoggerLike = None,
) -> Set[str]:
    """Map archive paths to their timestamp keys, skipping unrecognized names."""
    log = ensure_structured_logger(logger, fallback_name="ArchiveScanner")
    keys: Set[str] = set()
    for path in paths:
        try:
            keys.add(namer.file_name_to_key(path))
        except InvalidNameError as exc:
            log.warning("Ignoring archive entry %s: %s", path, exc.reason)
    return keys


__all__ = ["list_log_files", "extract_timestamp_keys"]
