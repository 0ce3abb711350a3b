"""Thin wrapper around subprocess for the external tools eficlone drives."""

import logging
import subprocess

from eficlone.core.errors import CommandError
from eficlone.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def run_command(
    command: list[str],
    timeout: float | None = DEFAULT_TIMEOUT,
    text: bool = True,
) -> subprocess.CompletedProcess:  # type: ignore[type-arg]
    """Run a command and return the completed process.

    Non-zero exit codes are returned to the caller; only a missing executable
    or a timeout raise.

    Args:
        command: Command and arguments
        timeout: Seconds before the command is abandoned, None for no limit
        text: Decode stdout/stderr as text. Use False for plist output.

    Returns:
        The completed process

    Raises:
        CommandError: If the executable is missing or the command times out
    """
    logger.debug("running_command", command=command, timeout=timeout)
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=text,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.error("command_timed_out", command=command, timeout=timeout)
        raise CommandError(
            f"Command timed out after {timeout} seconds: {' '.join(command)}",
            command=command,
        ) from e
    except FileNotFoundError as e:
        exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
        logger.error("command_not_found", command=command, exc_info=exc_info)
        raise CommandError(
            f"Command not found: {command[0]}", command=command
        ) from e

    if result.returncode != 0:
        stderr = result.stderr if text else result.stderr.decode(errors="replace")
        logger.debug(
            "command_failed",
            command=command,
            returncode=result.returncode,
            stderr=stderr.strip(),
        )
    return result
