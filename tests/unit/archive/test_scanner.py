"""Unit tests for archive folder scanning."""

import logging

from logarchive.archive.scanner import extract_timestamp_keys, list_log_files


class TestListLogFiles:

    def test_missing_folder_yields_empty_list(self, tmp_path):
        assert list_log_files(tmp_path / "does-not-exist") == []

    def test_only_direct_files_with_log_extension(self, tmp_path):
        (tmp_path / "a.log").write_text("a")
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "a.log.meta").write_text("meta")
        (tmp_path / "upper.LOG").write_text("case sensitive")
        (tmp_path / "folder.log").mkdir()
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "c.log").write_text("c")

        assert list_log_files(tmp_path) == [tmp_path / "a.log"]

    def test_custom_extension(self, tmp_path):
        (tmp_path / "a.log").write_text("a")
        (tmp_path / "b.txt").write_text("b")

        assert list_log_files(tmp_path, ".txt") == [tmp_path / "b.txt"]

    def test_file_instead_of_folder(self, tmp_path):
        path = tmp_path / "plain.log"
        path.write_text("x")
        assert list_log_files(path) == []


class TestExtractTimestampKeys:

    def test_collects_keys(self, tmp_path, namer):
        paths = [
            tmp_path / "Log_2024-01-01_08-00-00.log",
            tmp_path / "Log_2024-01-01_08-01-00.log",
        ]
        assert extract_timestamp_keys(paths, namer) == {
            "2024-01-01_08-00-00",
            "2024-01-01_08-01-00",
        }

    def test_invalid_names_are_skipped_and_logged(self, tmp_path, namer, caplog):
        paths = [
            tmp_path / "Log_2024-01-01_08-00-00.log",
            tmp_path / "notes.log",
            tmp_path / "Log_x.log",
        ]
        with caplog.at_level(logging.WARNING):
            keys = extract_timestamp_keys(paths, namer)

        assert keys == {"2024-01-01_08-00-00"}
        warnings = [record.getMessage() for record in caplog.records]
        assert sum("Ignoring archive entry" in message for message in warnings) == 2

    def test_empty_input(self, namer):
        assert extract_timestamp_keys([], namer) == set()
