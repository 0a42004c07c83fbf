"""Configuration for a log archive sync pass."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Mapping, Optional

from logarchive.core.config_manager import ConfigManager, get_config_manager
from logarchive.core.paths import default_source_dir

TARGET_FOLDER_NAME = "Logs"
LOG_EXTENSION = ".log"
METAFILE_EXTENSION = ".meta"
FILENAME_PREFIX = "Log_"
MAX_LOG_FILES_STORED = 50
PURGE_MARKER = "<Filepath purged>/"


@dataclass(frozen=True)
class SyncConfig:
    """Everything a sync pass needs to know about its folders and limits.

    Attributes:
        source_dir: Folder the host writes its log files to. Read only.
        app_data_dir: Host application root. The archive lives in
            ``app_data_dir / target_folder_name``.
        sensitive_root: Path redacted from archived log text. Defaults to
            ``app_data_dir``.
        legacy_seconds: Render seconds without zero padding, matching
            archives written by older tooling.
    """

    source_dir: Path
    app_data_dir: Path
    target_folder_name: str = TARGET_FOLDER_NAME
    log_extension: str = LOG_EXTENSION
    meta_extension: str = METAFILE_EXTENSION
    file_prefix: str = FILENAME_PREFIX
    max_files: int = MAX_LOG_FILES_STORED
    redact_paths: bool = True
    sensitive_root: Optional[Path] = None
    purge_marker: str = PURGE_MARKER
    legacy_seconds: bool = False
    encoding: str = "utf-8"
    extra: Mapping[str, str] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_dir", Path(self.source_dir))
        object.__setattr__(self, "app_data_dir", Path(self.app_data_dir))
        if self.sensitive_root is not None:
            object.__setattr__(self, "sensitive_root", Path(self.sensitive_root))
        if self.max_files < 0:
            raise ValueError(f"max_files must be >= 0, got {self.max_files}")
        if not self.log_extension.startswith("."):
            raise ValueError(f"log_extension must start with '.', got {self.log_extension!r}")

    @property
    def target_dir(self) -> Path:
        return self.app_data_dir / self.target_folder_name

    @property
    def redaction_root(self) -> str:
        return str(self.sensitive_root if self.sensitive_root is not None else self.app_data_dir)

    @classmethod
    def from_mapping(
        cls,
        config: Mapping[str, str],
        *,
        manager: Optional[ConfigManager] = None,
        **overrides,
    ) -> "SyncConfig":
        """Build a config from parsed ``key = value`` settings.

        Keyword overrides win over the mapping. Without ``source_dir``, the
        ``company`` and ``product`` settings locate the host's per-user log
        folder. Keys that are not fields are kept in ``extra``.
        """
        manager = manager or get_config_manager()
        values = dict(config)

        kwargs = {
            "source_dir": manager.get_path(values, "source_dir"),
            "app_data_dir": manager.get_path(values, "app_data_dir"),
            "target_folder_name": manager.get_str(values, "target_folder_name", TARGET_FOLDER_NAME),
            "log_extension": manager.get_str(values, "log_extension", LOG_EXTENSION),
            "meta_extension": manager.get_str(values, "meta_extension", METAFILE_EXTENSION),
            "file_prefix": manager.get_str(values, "file_prefix", FILENAME_PREFIX),
            "max_files": manager.get_int(values, "max_files", MAX_LOG_FILES_STORED),
            "redact_paths": manager.get_bool(values, "redact_paths", True),
            "sensitive_root": manager.get_path(values, "sensitive_root"),
            "purge_marker": manager.get_str(values, "purge_marker", PURGE_MARKER),
            "legacy_seconds": manager.get_bool(values, "legacy_seconds", False),
            "encoding": manager.get_str(values, "encoding", "utf-8"),
        }
        company = overrides.pop("company", None) or manager.get_str(values, "company", "")
        product = overrides.pop("product", None) or manager.get_str(values, "product", "")
        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        if kwargs.get("source_dir") is None and company and product:
            kwargs["source_dir"] = default_source_dir(company, product)

        missing = [key for key in ("source_dir", "app_data_dir") if kwargs.get(key) is None]
        if missing:
            raise ValueError(f"Missing required setting(s): {', '.join(missing)}")

        known = {f.name for f in fields(cls)}
        kwargs["extra"] = {key: value for key, value in values.items() if key not in known}
        return cls(**kwargs)


__all__ = [
    "SyncConfig",
    "TARGET_FOLDER_NAME",
    "LOG_EXTENSION",
    "METAFILE_EXTENSION",
    "FILENAME_PREFIX",
    "MAX_LOG_FILES_STORED",
    "PURGE_MARKER",
]
