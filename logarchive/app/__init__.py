from .hooks import install_atexit_hook, register_sync_on_shutdown
from .main import main, parse_args

__all__ = ['install_atexit_hook', 'register_sync_on_shutdown', 'main', 'parse_args']
