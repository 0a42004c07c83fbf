"""Mapping between log file timestamps and archive file names.

Archive names look like ``Log_2024-03-09_14-05-07.log``. The encoded key is
fixed width and most-significant-field first, so sorting names as plain
strings orders them chronologically.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Union

from .config import FILENAME_PREFIX, LOG_EXTENSION

KEY_FORMAT = "%Y-%m-%d_%H-%M-%S"
# "yyyy-MM-dd_HH-mm-s": the shortest key the legacy seconds rendering produces.
MIN_KEY_LENGTH = 18


def canonical_key(key: str) -> str:
    """Zero-pad a one-digit trailing seconds field, leaving other keys alone."""
    head, sep, seconds = key.rpartition("-")
    if sep and len(seconds) == 1 and seconds.isdigit():
        return f"{head}-0{seconds}"
    return key


class InvalidNameError(ValueError):
    """Raised when an archive file name does not carry a timestamp key."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid archive file name {name!r}: {reason}")
        self.name = name
        self.reason = reason


class LogFileNamer:
    """Encodes timestamps into archive file names and back."""

    def __init__(
        self,
        prefix: str = FILENAME_PREFIX,
        extension: str = LOG_EXTENSION,
        *,
        legacy_seconds: bool = False,
    ) -> None:
        self.prefix = prefix
        self.extension = extension
        self.legacy_seconds = legacy_seconds

    @classmethod
    def from_config(cls, config) -> "LogFileNamer":
        return cls(config.file_prefix, config.log_extension, legacy_seconds=config.legacy_seconds)

    def timestamp_to_key(self, timestamp: datetime) -> str:
        """Return the sortable key for ``timestamp`` (second granularity)."""
        if self.legacy_seconds:
            # Seconds are not zero padded, so these keys do not sort chronologically.
            return f"{timestamp:%Y-%m-%d_%H-%M}-{timestamp.second}"
        return timestamp.strftime(KEY_FORMAT)

    def timestamp_to_canonical_key(self, timestamp: datetime) -> str:
        """Return the zero-padded key for ``timestamp`` whatever the naming mode."""
        return timestamp.strftime(KEY_FORMAT)

    def timestamp_to_file_name(self, timestamp: datetime) -> str:
        return f"{self.prefix}{self.timestamp_to_key(timestamp)}{self.extension}"

    def file_name_to_key(self, file_name: Union[str, Path]) -> str:
        """Extract the timestamp key from an archive file name or path.

        Legacy names with a one-digit seconds field are padded, so the key
        matches :meth:`timestamp_to_canonical_key` for either naming mode.

        Raises:
            InvalidNameError: the name lacks the prefix or is too short to
                hold a key.
        """
        name = Path(file_name).name
        if self.extension and name.endswith(self.extension):
            name = name[: -len(self.extension)]

        if not name.startswith(self.prefix):
            raise InvalidNameError(name, f"missing prefix {self.prefix!r}")

        key = name[len(self.prefix):]
        if len(key) < MIN_KEY_LENGTH:
            raise InvalidNameError(name, f"key {key!r} shorter than {MIN_KEY_LENGTH} characters")
        return canonical_key(key)


__all__ = ["InvalidNameError", "LogFileNamer", "canonical_key", "KEY_FORMAT", "MIN_KEY_LENGTH"]
