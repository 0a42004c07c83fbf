"""Log archive: copy, redact, deduplicate and cap host log files."""

from .config import PURGE_MARKER, SyncConfig
from .naming import InvalidNameError, LogFileNamer
from .redaction import PathRedactor, redact_line, split_root_segments
from .retention import EvictionSummary, evict_oldest
from .scanner import extract_timestamp_keys, list_log_files
from .sync import SyncEngine, SyncReport, run_sync, run_sync_async

__all__ = [
    'SyncConfig',
    'InvalidNameError',
    'LogFileNamer',
    'PURGE_MARKER',
    'PathRedactor',
    'redact_line',
    'split_root_segments',
    'EvictionSummary',
    'evict_oldest',
    'extract_timestamp_keys',
    'list_log_files',
    'SyncEngine',
    'SyncReport',
    'run_sync',
    'run_sync_async',
]
