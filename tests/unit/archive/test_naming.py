"""Unit tests for archive file naming."""

from datetime import datetime
from pathlib import Path

import pytest

from logarchive.archive.config import SyncConfig
from logarchive.archive.naming import InvalidNameError, LogFileNamer, canonical_key


STAMP = datetime(2024, 3, 9, 14, 5, 7)


class TestEncoding:

    def test_file_name(self, namer):
        assert namer.timestamp_to_file_name(STAMP) == "Log_2024-03-09_14-05-07.log"

    def test_key(self, namer):
        assert namer.timestamp_to_key(STAMP) == "2024-03-09_14-05-07"

    def test_key_drops_sub_second_precision(self, namer):
        assert namer.timestamp_to_key(STAMP.replace(microsecond=999_999)) == namer.timestamp_to_key(STAMP)

    def test_legacy_seconds_are_not_padded(self):
        namer = LogFileNamer(legacy_seconds=True)
        assert namer.timestamp_to_file_name(STAMP) == "Log_2024-03-09_14-05-7.log"
        assert namer.timestamp_to_key(STAMP.replace(second=42)) == "2024-03-09_14-05-42"

    def test_keys_sort_chronologically(self, namer):
        stamps = [
            datetime(2023, 12, 31, 23, 59, 59),
            datetime(2024, 1, 1, 0, 0, 0),
            datetime(2024, 1, 1, 0, 0, 9),
            datetime(2024, 1, 1, 0, 0, 10),
            datetime(2024, 10, 2, 9, 0, 0),
        ]
        names = [namer.timestamp_to_file_name(stamp) for stamp in reversed(stamps)]
        assert sorted(names) == [namer.timestamp_to_file_name(stamp) for stamp in stamps]

    def test_from_config(self, tmp_path):
        config = SyncConfig(
            source_dir=tmp_path,
            app_data_dir=tmp_path,
            file_prefix="Run_",
            log_extension=".txt",
            legacy_seconds=True,
        )
        namer = LogFileNamer.from_config(config)
        assert namer.timestamp_to_file_name(STAMP) == "Run_2024-03-09_14-05-7.txt"


class TestDecoding:

    @pytest.mark.parametrize("legacy", [False, True])
    def test_round_trip(self, legacy):
        namer = LogFileNamer(legacy_seconds=legacy)
        name = namer.timestamp_to_file_name(STAMP)
        assert namer.file_name_to_key(name) == namer.timestamp_to_canonical_key(STAMP)

    def test_legacy_and_padded_names_share_a_key(self, namer):
        assert namer.file_name_to_key("Log_2024-03-09_14-05-7.log") == "2024-03-09_14-05-07"
        assert namer.file_name_to_key("Log_2024-03-09_14-05-07.log") == "2024-03-09_14-05-07"

    def test_canonical_key_is_padded_in_legacy_mode(self):
        legacy = LogFileNamer(legacy_seconds=True)
        assert legacy.timestamp_to_canonical_key(STAMP) == LogFileNamer().timestamp_to_key(STAMP)

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("2024-03-09_14-05-7", "2024-03-09_14-05-07"),
            ("2024-03-09_14-05-07", "2024-03-09_14-05-07"),
            ("2024-03-09_14-05-42", "2024-03-09_14-05-42"),
            ("not-a-key-x", "not-a-key-x"),
            ("nodash", "nodash"),
        ],
    )
    def test_canonical_key(self, key, expected):
        assert canonical_key(key) == expected

    def test_accepts_paths(self, namer, tmp_path):
        path = tmp_path / "Log_2024-03-09_14-05-07.log"
        assert namer.file_name_to_key(path) == "2024-03-09_14-05-07"
        assert namer.file_name_to_key(str(path)) == "2024-03-09_14-05-07"

    def test_too_short_name_is_invalid(self, namer):
        with pytest.raises(InvalidNameError) as excinfo:
            namer.file_name_to_key("Log_2024.log")
        assert excinfo.value.name == "Log_2024"

    def test_missing_prefix_is_invalid(self, namer):
        with pytest.raises(InvalidNameError):
            namer.file_name_to_key(Path("Player-2024-03-09_14-05-07.log"))

    def test_invalid_name_is_a_value_error(self, namer):
        with pytest.raises(ValueError):
            namer.file_name_to_key("x.log")
