import argparse
from pathlib import Path
from typing import Dict, Optional, Sequence

from logarchive.archive.config import MAX_LOG_FILES_STORED, SyncConfig
from logarchive.archive.sync import run_sync
from logarchive.core.config_manager import get_config_manager
from logarchive.core.logging_config import DEFAULT_BACKUP_COUNT, DEFAULT_MAX_BYTES, configure_logging
from logarchive.core.logging_utils import get_module_logger
from logarchive.core.paths import CONFIG_PATH


logger = get_module_logger(__name__)

LOG_LEVELS = ['debug', 'info', 'warning', 'error', 'critical']


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments. Unset options fall back to the config file."""
    parser = argparse.ArgumentParser(
        prog="logarchive",
        description="Copy application log files into an archive folder, redacting local paths"
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help=f"Configuration file with key = value settings (default: {CONFIG_PATH})"
    )

    parser.add_argument(
        "--source-dir",
        type=Path,
        default=None,
        help="Folder the application writes its log files to"
    )

    parser.add_argument(
        "--company",
        default=None,
        help="Company name; with --product locates the per-user log folder when --source-dir is unset"
    )

    parser.add_argument(
        "--product",
        default=None,
        help="Product name; see --company"
    )

    parser.add_argument(
        "--app-data-dir",
        type=Path,
        default=None,
        help="Application root; logs are archived to <app-data-dir>/Logs"
    )

    parser.add_argument(
        "--max-files",
        type=int,
        default=None,
        help=f"Maximum number of archived logs to keep (default: {MAX_LOG_FILES_STORED})"
    )

    parser.add_argument(
        "--no-redact",
        dest="redact_paths",
        action="store_false",
        default=None,
        help="Copy logs verbatim instead of purging local paths"
    )

    parser.add_argument(
        "--legacy-seconds",
        dest="legacy_seconds",
        action="store_true",
        default=None,
        help="Name archives with unpadded seconds, as older archives do"
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: info)"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path for a rotating log file"
    )

    parser.add_argument(
        "--log-max-bytes",
        type=int,
        default=None,
        help=f"Rotate the log file after this many bytes (default: {DEFAULT_MAX_BYTES})"
    )

    parser.add_argument(
        "--log-backups",
        type=int,
        default=None,
        help=f"Rotated log files to keep (default: {DEFAULT_BACKUP_COUNT})"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, settings: Dict[str, str]) -> SyncConfig:
    config_manager = get_config_manager()

    return SyncConfig.from_mapping(
        settings,
        manager=config_manager,
        source_dir=args.source_dir,
        company=args.company,
        product=args.product,
        app_data_dir=args.app_data_dir,
        max_files=args.max_files,
        redact_paths=args.redact_paths,
        legacy_seconds=args.legacy_seconds,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    config_manager = get_config_manager()
    settings = config_manager.read_config(args.config)
    log_level = (args.log_level or settings.get('log_level', 'info')).lower()
    if log_level not in LOG_LEVELS:
        log_level = 'info'
    max_bytes = args.log_max_bytes
    if max_bytes is None:
        max_bytes = config_manager.get_int(settings, 'log_max_bytes', DEFAULT_MAX_BYTES)
    backup_count = args.log_backups
    if backup_count is None:
        backup_count = config_manager.get_int(settings, 'log_backup_count', DEFAULT_BACKUP_COUNT)
    log_file = args.log_file or config_manager.get_path(settings, 'log_file')
    configure_logging(level=log_level, log_file=log_file, max_bytes=max_bytes, backup_count=backup_count)

    try:
        config = build_config(args, settings)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    report = run_sync(config)
    print(f"{report.target_dir}: {report.summary()}")
    return 0 if report.ok else 1
