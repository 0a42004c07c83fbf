"""Unit tests for structured logging helpers."""

import logging
from logging.handlers import RotatingFileHandler

from logarchive.core.logging_config import LOG_FORMAT, coerce_level, configure_logging
from logarchive.core.logging_utils import (
    StructuredLogger,
    ensure_structured_logger,
    get_module_logger,
)

import pytest


class TestStructuredLogger:

    def test_namespace_and_component(self):
        log = get_module_logger("SyncEngine")
        assert log.name == "logarchive.SyncEngine"
        assert log.component == "SyncEngine"

    def test_messages_are_prefixed(self, caplog):
        log = get_module_logger("Prefix")
        with caplog.at_level(logging.INFO):
            log.info("archived %d file(s)", 3)
        assert caplog.records[-1].getMessage() == "[Prefix] archived 3 file(s)"

    def test_bad_format_args_do_not_raise(self, caplog):
        log = get_module_logger("Prefix")
        with caplog.at_level(logging.INFO):
            log.info("no placeholders", "extra")
        assert "args=extra" in caplog.records[-1].getMessage()

    def test_disabled_level_emits_nothing(self, caplog):
        log = get_module_logger("Quiet")
        with caplog.at_level(logging.WARNING, logger="logarchive.Quiet"):
            log.debug("%s", object())
        assert caplog.records == []

    def test_namespaced_names_are_not_prefixed_twice(self):
        log = get_module_logger("logarchive.archive.sync")
        assert log.name == "logarchive.archive.sync"
        assert log.component == "archive.sync"

    def test_delegates_to_wrapped_logger(self):
        log = get_module_logger("Delegate")
        assert log.isEnabledFor(logging.CRITICAL)


class TestEnsureStructuredLogger:

    def test_passthrough(self):
        log = get_module_logger("X")
        assert ensure_structured_logger(log) is log

    def test_wraps_plain_logger(self):
        wrapped = ensure_structured_logger(logging.getLogger("host.app"))
        assert isinstance(wrapped, StructuredLogger)
        assert wrapped.name == "host.app"

    def test_unwraps_adapter(self):
        adapter = logging.LoggerAdapter(logging.getLogger("host.adapter"), {})
        wrapped = ensure_structured_logger(adapter, component="Host")
        assert wrapped.logger is adapter.logger
        assert wrapped.component == "Host"

    def test_fallback(self):
        assert ensure_structured_logger(None, fallback_name="Scanner").name == "logarchive.Scanner"


def test_coerce_level():
    assert coerce_level("debug") == logging.DEBUG
    assert coerce_level(30) == logging.WARNING
    with pytest.raises(ValueError):
        coerce_level("loud")


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:

    def test_console_only(self, restore_root_logging):
        configure_logging("warning")

        root = restore_root_logging
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT

    def test_rotating_file_settings(self, tmp_path, restore_root_logging):
        log_file = tmp_path / "logs" / "archiver.log"

        configure_logging("info", console=False, log_file=log_file, max_bytes=1024, backup_count=5)
        get_module_logger("Rotate").info("written")

        [handler] = restore_root_logging.handlers
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 5
        handler.flush()
        assert "[Rotate] written" in log_file.read_text(encoding="utf-8")

    def test_reconfiguring_replaces_handlers(self, tmp_path, restore_root_logging):
        configure_logging("info")
        configure_logging("debug", log_file=tmp_path / "a.log")

        assert len(restore_root_logging.handlers) == 2
        assert restore_root_logging.level == logging.DEBUG

    def test_no_outputs_still_has_a_handler(self, restore_root_logging):
        configure_logging("info", console=False)
        assert isinstance(restore_root_logging.handlers[0], logging.NullHandler)
