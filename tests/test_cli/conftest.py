"""Test fixtures for CLI tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Environment for running the command as an unprivileged test user.

    Returns the run log path.
    """
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("EFICLONE_REQUIRE_ROOT", "false")
    monkeypatch.setenv("EFICLONE_NOTIFICATIONS", "false")
    monkeypatch.setenv("EFICLONE_LOCK_FILE", str(tmp_path / "eficlone.lock"))
    log_file = tmp_path / "EFIClone.log"
    monkeypatch.setenv("EFICLONE_LOG_FILE", str(log_file))
    return log_file


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Drop the handlers a CLI run attaches to the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
