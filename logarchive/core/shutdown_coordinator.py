"""
Shutdown Coordinator - single point of control for host shutdown work.

Hosts register cleanup callbacks (such as the log archive sync) and call
``initiate_shutdown`` once when they are about to close.
"""

import asyncio
import time
from enum import Enum
from typing import Awaitable, Callable, Optional

from logarchive.core.logging_utils import get_module_logger


class ShutdownState(Enum):
    """States of the shutdown process."""
    RUNNING = "running"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class ShutdownCoordinator:
    """
    Runs registered cleanup callbacks exactly once, in registration order.

    A failing callback is logged and does not stop the callbacks after it.
    """

    def __init__(self):
        self.logger = get_module_logger("ShutdownCoordinator")
        self._state = ShutdownState.RUNNING
        self._shutdown_event = asyncio.Event()
        self._cleanup_callbacks: list[Callable[[], Awaitable[None]]] = []
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def is_shutting_down(self) -> bool:
        return self._state == ShutdownState.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self._state == ShutdownState.COMPLETE

    def register_cleanup(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Register an async callback to run during shutdown."""
        self._cleanup_callbacks.append(callback)
        self.logger.debug("Registered cleanup callback: %s", _callback_name(callback))

    async def initiate_shutdown(self, source: str = "unknown") -> None:
        """
        Run all cleanup callbacks.

        If shutdown was already initiated this call is a no-op.

        Args:
            source: Description of what triggered shutdown (for logging)
        """
        shutdown_start = time.monotonic()

        async with self._lock:
            if self._state != ShutdownState.RUNNING:
                self.logger.debug(
                    "Shutdown already initiated (state=%s), ignoring request from %s",
                    self._state.value,
                    source,
                )
                return
            self.logger.info("Shutdown initiated by: %s", source)
            self._state = ShutdownState.IN_PROGRESS

        await self._execute_cleanup()

        async with self._lock:
            self._state = ShutdownState.COMPLETE
            self._shutdown_event.set()

        self.logger.info("Shutdown complete in %.3fs", time.monotonic() - shutdown_start)

    async def _execute_cleanup(self) -> None:
        total = len(self._cleanup_callbacks)
        for i, callback in enumerate(self._cleanup_callbacks, 1):
            name = _callback_name(callback)
            try:
                callback_start = time.monotonic()
                self.logger.debug("Starting cleanup %d/%d: %s", i, total, name)
                await callback()
                self.logger.debug("Completed %s in %.3fs", name, time.monotonic() - callback_start)
            except Exception as e:
                self.logger.error("Error in cleanup callback %s: %s", name, e, exc_info=True)

    async def wait_for_shutdown(self) -> None:
        """Block until shutdown is complete."""
        await self._shutdown_event.wait()


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__name__", repr(callback))


# Global singleton instance
_coordinator: Optional[ShutdownCoordinator] = None


def get_shutdown_coordinator() -> ShutdownCoordinator:
    """Get the global shutdown coordinator instance."""
    global _coordinator
    if _coordinator is None:
        _coordinator = ShutdownCoordinator()
    return _coordinator


def reset_shutdown_coordinator() -> None:
    """Reset the global coordinator (mainly for testing)."""
    global _coordinator
    _coordinator = None
