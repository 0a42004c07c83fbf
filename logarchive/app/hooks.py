"""Bindings that run the log sync when a host application closes."""

from __future__ import annotations

import atexit
from typing import Awaitable, Callable, Optional

from logarchive.archive.config import SyncConfig
from logarchive.archive.sync import SyncReport, run_sync, run_sync_async
from logarchive.core.logging_utils import get_module_logger
from logarchive.core.shutdown_coordinator import ShutdownCoordinator, get_shutdown_coordinator

logger = get_module_logger("ShutdownHooks")


def register_sync_on_shutdown(
    config: SyncConfig,
    coordinator: Optional[ShutdownCoordinator] = None,
    *,
    timeout: Optional[float] = None,
    on_complete: Optional[Callable[[SyncReport], None]] = None,
) -> Callable[[], Awaitable[None]]:
    """Register a log sync as a cleanup step of ``coordinator``.

    Uses the global coordinator when none is given. Returns the registered
    callback.
    """
    coordinator = coordinator or get_shutdown_coordinator()

    async def archive_logs() -> None:
        await run_sync_async(config, timeout=timeout, on_complete=on_complete)

    coordinator.register_cleanup(archive_logs)
    logger.debug("Log sync registered for shutdown (archive: %s)", config.target_dir)
    return archive_logs


def install_atexit_hook(
    config: SyncConfig,
    *,
    on_complete: Optional[Callable[[SyncReport], None]] = None,
) -> Callable[[], SyncReport]:
    """Run the log sync when the interpreter exits. Returns the hook."""

    def archive_logs_at_exit() -> SyncReport:
        return run_sync(config, on_complete=on_complete)

    atexit.register(archive_logs_at_exit)
    return archive_logs_at_exit


__all__ = ["register_sync_on_shutdown", "install_atexit_hook"]
