"""Tests for logging setup."""

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from eficlone.core.logging import setup_logging
from eficlone.core.structlog_logger import get_struct_logger


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


def flush_handlers() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_log_file_records_debug_and_is_truncated(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "EFIClone.log"
        log_file.parent.mkdir()
        log_file.write_text("previous run\n")

        setup_logging("WARNING", log_file=log_file)
        get_struct_logger("eficlone.test").debug("engine_state", state="mount")
        flush_handlers()

        content = log_file.read_text()
        assert "previous run" not in content
        assert "engine_state" in content
        assert "state=mount" in content
        assert logging.getLogger().handlers[0].level == logging.WARNING

    def test_json_log_file(self, tmp_path: Path):
        log_file = tmp_path / "EFIClone.log"

        setup_logging("ERROR", log_file=log_file, json_logs=True, colors=False)
        get_struct_logger("eficlone.test").info("run_started", live=True)
        flush_handlers()

        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert entries[-1]["event"] == "run_started"
        assert entries[-1]["live"] is True
        assert entries[-1]["level"] == "info"
