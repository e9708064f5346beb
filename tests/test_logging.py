"""Tests for syncfile.utils.logging module."""

import json
import logging

import pytest

from syncfile.utils.logging import JsonFormatter, configure_root_logger


def make_record(msg="hello", **extra):
    record = logging.LogRecord("syncfile.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:

    def test_basic_fields(self):
        data = json.loads(JsonFormatter().format(make_record("copied")))
        assert data["level"] == "INFO"
        assert data["logger"] == "syncfile.test"
        assert data["message"] == "copied"
        assert "timestamp" in data

    def test_extra_fields(self):
        data = json.loads(JsonFormatter().format(make_record(bytes_copied=42)))
        assert data["bytes_copied"] == 42

    def test_unserializable_extra_is_stringified(self):
        data = json.loads(JsonFormatter().format(make_record(path=object())))
        assert isinstance(data["path"], str)


class TestConfigureRootLogger:

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)

    def test_json_to_file(self, tmp_path):
        log_file = tmp_path / "root.log"
        configure_root_logger("INFO", json_output=True, log_file=log_file, console=False)
        logging.getLogger("syncfile.anything").info("structured")
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "structured"

    def test_text_to_nested_file(self, tmp_path):
        log_file = tmp_path / "nested" / "app.log"
        configure_root_logger("debug", log_file=log_file, console=False)
        logging.getLogger("syncfile.anything").debug("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "to file" in log_file.read_text()
        assert logging.getLogger().level == logging.DEBUG

    def test_replaces_handlers(self):
        configure_root_logger(logging.WARNING)
        configure_root_logger(logging.WARNING)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
