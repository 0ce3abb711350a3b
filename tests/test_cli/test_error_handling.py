"""Tests for the handle_errors decorator."""

import pytest
import typer

from eficlone.cli.decorators.error_handling import handle_errors
from eficlone.core.errors import CommandError, ConfigError, LockError, MountError


def raising(error: BaseException):
    @handle_errors
    def command() -> None:
        raise error

    return command


class TestHandleErrors:
    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("bad config"),
            LockError("Unable to acquire run lock", {"lock_path": "/tmp/x.lock"}),
            CommandError("Command not found: diskutil", command=["diskutil"]),
            MountError("Could not mount disk2s1"),
            RuntimeError("unexpected"),
        ],
    )
    def test_errors_exit_one(self, error):
        with pytest.raises(typer.Exit) as exc_info:
            raising(error)()

        assert exc_info.value.exit_code == 1

    def test_exit_passes_through(self):
        with pytest.raises(typer.Exit) as exc_info:
            raising(typer.Exit(2))()

        assert exc_info.value.exit_code == 2

    def test_return_value_passes_through(self):
        @handle_errors
        def command() -> str:
            return "done"

        assert command() == "done"
