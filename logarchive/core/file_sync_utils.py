"""
Cross-platform file sync utilities.

On POSIX systems (Linux, macOS) this uses os.fsync().
On Windows it uses msvcrt._commit() which wraps FlushFileBuffers.
"""

from __future__ import annotations

import os
import sys

from logarchive.core.logging_utils import get_module_logger

logger = get_module_logger("FileSyncUtils")

_msvcrt = None
if sys.platform == "win32":
    try:
        import msvcrt as _msvcrt
    except ImportError:
        logger.debug("msvcrt not available - fsync will be no-op on Windows")


def safe_fsync(fd: int) -> bool:
    """Sync file descriptor to disk (cross-platform).

    Returns:
        True if sync succeeded, False if it failed.

    Note:
        Best effort. Failures are logged at debug level and never raised,
        fsync is advisory on some filesystems.
    """
    try:
        if sys.platform == "win32":
            if _msvcrt is None:
                return False
            _msvcrt._commit(fd)
        else:
            os.fsync(fd)
        return True
    except OSError as e:
        logger.debug("fsync failed for fd %d: %s", fd, e)
        return False


def fsync_file(file_obj) -> bool:
    """Flush an open file object and sync it to disk."""
    try:
        file_obj.flush()
        return safe_fsync(file_obj.fileno())
    except (OSError, AttributeError, ValueError) as e:
        logger.debug("fsync_file failed: %s", e)
        return False


__all__ = ["safe_fsync", "fsync_file"]
