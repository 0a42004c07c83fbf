"""Shared pytest configuration and fixtures for the logarchive test suite."""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from logarchive.archive.config import SyncConfig  # noqa: E402
from logarchive.archive.naming import LogFileNamer  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Folder standing in for the host's per-user log directory."""
    path = tmp_path / "localappdata" / "Company" / "Product"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def app_data_dir(tmp_path: Path) -> Path:
    """Host application root; the archive is created beneath it."""
    path = tmp_path / "project" / "Assets"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def sync_config(source_dir: Path, app_data_dir: Path) -> SyncConfig:
    return SyncConfig(source_dir=source_dir, app_data_dir=app_data_dir)


@pytest.fixture
def namer() -> LogFileNamer:
    return LogFileNamer()


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """Factory writing a log file with a fixed last-modified time."""

    def _write(folder: Path, name: str, content: str, modified: datetime) -> Path:
        path = folder / name
        path.write_text(content, encoding="utf-8")
        stamp = modified.timestamp()
        os.utime(path, (stamp, stamp))
        return path

    return _write


@pytest.fixture
def populate_archive(namer: LogFileNamer) -> Callable[..., list]:
    """Factory creating ``count`` archive files one minute apart."""

    def _populate(folder: Path, count: int, start: datetime = datetime(2024, 1, 1, 8, 0, 0), with_meta: bool = False) -> list:
        folder.mkdir(parents=True, exist_ok=True)
        created = []
        for i in range(count):
            stamp = datetime.fromtimestamp(start.timestamp() + 60 * i)
            path = folder / namer.timestamp_to_file_name(stamp)
            path.write_text(f"entry {i}\n", encoding="utf-8")
            if with_meta:
                (folder / (path.name + ".meta")).write_text("guid: x\n", encoding="utf-8")
            created.append(path)
        return created

    return _populate
