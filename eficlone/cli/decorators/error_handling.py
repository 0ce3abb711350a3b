"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from eficlone.core.errors import CommandError, ConfigError, EfiCloneError, LockError
from eficlone.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning eficlone errors into exit status 1.

    ``typer.Exit`` raised by the command passes through unchanged so the
    command keeps control of its own exit status.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except LockError as e:
            logger.error("run_lock_unavailable", error=str(e), **e.context)
            raise typer.Exit(1) from e
        except CommandError as e:
            logger.error("command_error", error=str(e), command=e.command)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except EfiCloneError as e:
            logger.error("eficlone_error", error=str(e), error_type=type(e).__name__)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
