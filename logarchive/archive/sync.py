"""Copy host log files into the archive folder.

A pass runs strictly in order: ensure the archive folder exists, collect the
timestamp keys already archived, list the source logs, transfer every log
whose key is new, then evict the oldest archive entries when over the cap.

Each transfer is its own unit of work. A file that cannot be read or
written is logged and recorded in the report, and the pass moves on.
Nothing raised inside a pass reaches the caller, because sync usually runs
while the host is shutting down.

The archive folder is assumed to belong to one process at a time. Hosts
that run several instances must serialize calls themselves.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from logarchive.core.file_sync_utils import fsync_file
from logarchive.core.logging_utils import LoggerLike, ensure_structured_logger

from .config import SyncConfig
from .naming import LogFileNamer
from .redaction import PathRedactor
from .retention import EvictionSummary, evict_oldest
from .scanner import extract_timestamp_keys, list_log_files

PARTIAL_SUFFIX = ".partial"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split on CR, LF and CRLF only. A final line break ends the last line."""
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass(slots=True)
class SyncReport:
    """Outcome of one sync pass."""

    target_dir: str
    target_created: bool = False
    existing: int = 0
    discovered: int = 0
    archived_paths: List[str] = field(default_factory=list)
    duplicates_skipped: int = 0
    stored: int = 0
    eviction: Optional[EvictionSummary] = None
    errors: List[str] = field(default_factory=list)
    timed_out: bool = False
    duration_ms: float = 0.0

    @property
    def archived(self) -> int:
        return len(self.archived_paths)

    @property
    def evicted(self) -> int:
        return self.eviction.evicted if self.eviction else 0

    @property
    def ok(self) -> bool:
        return not self.errors and not self.timed_out

    def summary(self) -> str:
        return (
            f"archived={self.archived} duplicates={self.duplicates_skipped} "
            f"evicted={self.evicted} stored={self.stored} errors={len(self.errors)}"
        )


class SyncEngine:
    """Runs sync passes for one :class:`SyncConfig`."""

    def __init__(
        self,
        config: SyncConfig,
        *,
        on_complete: Optional[Callable[[SyncReport], None]] = None,
        logger: LoggerLike = None,
    ) -> None:
        self.config = config
        self.on_complete = on_complete
        self.logger = ensure_structured_logger(logger, fallback_name="SyncEngine")
        self.namer = LogFileNamer.from_config(config)
        self.redactor: Optional[PathRedactor] = None
        if config.redact_paths:
            self.redactor = PathRedactor(config.redaction_root, config.purge_marker)

    def run(self) -> SyncReport:
        start = time.perf_counter()
        report = SyncReport(target_dir=str(self.config.target_dir))

        try:
            self._run_pass(report)
        except Exception as exc:
            report.errors.append(f"sync aborted: {exc}")
            self.logger.exception("Log sync aborted: %s", exc)

        report.duration_ms = (time.perf_counter() - start) * 1000
        if report.ok:
            self.logger.info("Log sync finished in %.1fms: %s", report.duration_ms, report.summary())
        else:
            self.logger.warning("Log sync finished with errors in %.1fms: %s", report.duration_ms, report.summary())

        self._notify(report)
        return report

    # ------------------------------------------------------------------
    # Phases

    def _run_pass(self, report: SyncReport) -> None:
        config = self.config
        target = config.target_dir

        report.target_created = self._ensure_target(target)

        archived = list_log_files(target, config.log_extension, logger=self.logger)
        report.existing = len(archived)
        stored = len(archived)
        known_keys = extract_timestamp_keys(archived, self.namer, logger=self.logger)

        candidates = list_log_files(config.source_dir, config.log_extension, logger=self.logger)
        report.discovered = len(candidates)
        if not candidates:
            self.logger.debug("No log files found in %s", config.source_dir)

        for source in sorted(candidates):
            try:
                timestamp = datetime.fromtimestamp(source.stat().st_mtime)
            except OSError as exc:
                self._record_failure(report, source, exc)
                continue

            key = self.namer.timestamp_to_canonical_key(timestamp)
            if key in known_keys:
                report.duplicates_skipped += 1
                self.logger.debug("Already archived: %s (%s)", source.name, key)
                continue

            destination = target / self.namer.timestamp_to_file_name(timestamp)
            try:
                self._transfer(source, destination)
            except (OSError, ValueError) as exc:
                self._record_failure(report, source, exc)
                continue

            known_keys.add(key)
            stored += 1
            report.archived_paths.append(str(destination))
            self.logger.debug("Archived %s -> %s", source, destination.name)

        report.stored = stored
        if stored > config.max_files:
            report.eviction = evict_oldest(
                target,
                config.max_files,
                extension=config.log_extension,
                meta_extension=config.meta_extension,
                namer=self.namer,
                logger=self.logger,
            )
            report.errors.extend(report.eviction.errors)
            report.stored = report.eviction.kept + len(report.eviction.errors)

    def _ensure_target(self, target: Path) -> bool:
        if target.is_dir():
            return False
        target.mkdir(parents=True, exist_ok=True)
        self.logger.info("Created archive folder %s", target)
        return True

    def _transfer(self, source: Path, destination: Path) -> None:
        """Write the (redacted) content of ``source`` to ``destination``.

        Content goes to a partial sibling first and is moved into place only
        once complete, so a failed transfer never leaves an archive entry.
        """
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            if self.redactor is None:
                with open(source, "rb") as src, open(partial, "wb") as fh:
                    shutil.copyfileobj(src, fh)
                    fsync_file(fh)
            else:
                text = source.read_text(encoding=self.config.encoding, errors="replace")
                lines = self.redactor.redact_lines(split_lines(text))
                with open(partial, "w", encoding=self.config.encoding, newline="") as fh:
                    for line in lines:
                        fh.write(line)
                        fh.write("\n")
                    fsync_file(fh)
            os.replace(partial, destination)
        except Exception:
            with contextlib.suppress(OSError):
                partial.unlink()
            raise

    # ------------------------------------------------------------------
    # Helpers

    def _record_failure(self, report: SyncReport, source: Path, exc: Exception) -> None:
        report.errors.append(f"{source}: {exc}")
        self.logger.warning("Failed to archive %s: %s", source, exc)

    def _notify(self, report: SyncReport) -> None:
        if self.on_complete is None:
            return
        try:
            self.on_complete(report)
        except Exception as exc:
            self.logger.warning("Sync completion callback failed: %s", exc, exc_info=True)


def run_sync(
    config: SyncConfig,
    *,
    on_complete: Optional[Callable[[SyncReport], None]] = None,
    logger: LoggerLike = None,
) -> SyncReport:
    """Run one sync pass. Never raises; failures are in the report."""
    return SyncEngine(config, on_complete=on_complete, logger=logger).run()


async def run_sync_async(
    config: SyncConfig,
    *,
    timeout: Optional[float] = None,
    on_complete: Optional[Callable[[SyncReport], None]] = None,
    logger: LoggerLike = None,
) -> SyncReport:
    """Run a sync pass in a worker thread, optionally bounded by ``timeout``.

    On timeout a report with ``timed_out`` set is returned. The worker
    thread cannot be interrupted and finishes its pass in the background.
    """
    engine = SyncEngine(config, on_complete=on_complete, logger=logger)
    if timeout is None:
        return await asyncio.to_thread(engine.run)

    try:
        return await asyncio.wait_for(asyncio.to_thread(engine.run), timeout)
    except asyncio.TimeoutError:
        engine.logger.warning("Log sync did not finish within %.1fs", timeout)
        report = SyncReport(target_dir=str(config.target_dir), timed_out=True)
        report.errors.append(f"sync timed out after {timeout}s")
        return report


__all__ = ["SyncEngine", "SyncReport", "run_sync", "run_sync_async", "split_lines"]
