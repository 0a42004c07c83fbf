from .config_manager import ConfigManager, get_config_manager
from .logging_config import configure_logging
from .logging_utils import StructuredLogger, ensure_structured_logger, get_module_logger
from .shutdown_coordinator import (
    ShutdownCoordinator,
    ShutdownState,
    get_shutdown_coordinator,
    reset_shutdown_coordinator,
)

__all__ = [
    'ConfigManager',
    'get_config_manager',
    'configure_logging',
    'StructuredLogger',
    'ensure_structured_logger',
    'get_module_logger',
    'ShutdownCoordinator',
    'ShutdownState',
    'get_shutdown_coordinator',
    'reset_shutdown_coordinator',
]
