"""Command line entry point for the EFI partition clone hook."""

import os
import sys
from typing import Annotated

import typer

from eficlone import __version__
from eficlone.cli.decorators.error_handling import handle_errors
from eficlone.cli.helpers.output import print_invocation, print_run_result
from eficlone.cli.helpers.theme import get_themed_console
from eficlone.config.settings import EfiCloneSettings
from eficlone.config.user_config import create_user_config
from eficlone.core.logging import setup_logging
from eficlone.core.run_lock import RunLock
from eficlone.core.structlog_logger import get_struct_logger
from eficlone.invocation.adapter import classify
from eficlone.models.sync import ExitStatus
from eficlone.sync.engine import create_sync_verify_engine


__all__ = ["app", "main", "__version__"]

logger = get_struct_logger(__name__)


app = typer.Typer(
    name="eficlone",
    help=f"""EFI Clone v{__version__}

Synchronizes the EFI System Partition of a cloned disk with the one of its
source and verifies the copy by content hash. Meant to run as the
post-flight hook of Carbon Copy Cloner or SuperDuper!, or by hand:

  eficlone /Volumes/Source /Volumes/Backup            (simulation)
  sudo eficlone --live /Volumes/Source /Volumes/Backup""",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    if value:
        print(f"EFI Clone v{__version__}")
        raise typer.Exit()


def resolve_log_level(verbose: int, debug: bool, settings: EfiCloneSettings) -> str:
    """Console log level from the CLI flags, falling back to the config."""
    if debug or verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return settings.log_level


def is_root() -> bool:
    return os.geteuid() == 0


@app.command()
@handle_errors
def run(
    params: Annotated[
        list[str] | None,
        typer.Argument(
            help="Parameters from the calling tool: 2 (shell), 4 (Carbon Copy Cloner) or 6 (SuperDuper!)",
            show_default=False,
        ),
    ] = None,
    live: Annotated[
        bool | None,
        typer.Option(
            "--live/--simulate",
            help="Copy for real, or only log what would change (default from config: simulate)",
            show_default=False,
        ),
    ] = None,
    log_file: Annotated[
        str | None,
        typer.Option("--log-file", help="Run log file, overwritten on every run"),
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    no_notify: Annotated[
        bool, typer.Option("--no-notify", help="Do not send desktop notifications")
    ] = False,
    no_emoji: Annotated[
        bool, typer.Option("--no-emoji", help="Disable emoji icons in output")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Clone the EFI partition of the source volume's disk to the destination's."""
    user_config = create_user_config(cli_config_path=config_file)
    settings = user_config.apply_overrides(
        live=live,
        log_file=log_file,
        notifications=False if no_notify else None,
    )
    console = get_themed_console(icon_mode="text" if no_emoji else "emoji")

    log_level = resolve_log_level(verbose, debug, settings)
    try:
        setup_logging(
            log_level, log_file=settings.log_file, json_logs=settings.log_json
        )
    except OSError as e:
        setup_logging(log_level)
        console.print_warning(f"Cannot write log file {settings.log_file}: {e}")

    logger.info(
        "eficlone_started",
        version=__version__,
        cwd=os.getcwd(),
        config_file=str(user_config.config_path) if user_config.config_path else None,
        live=settings.live,
    )

    invocation = classify(params or [])
    output_verbose = invocation.verbose or verbose > 0 or debug
    print_invocation(invocation, console)

    if not invocation.runnable:
        # Skipped runs touch no disk: no privileges or lock needed
        result = create_sync_verify_engine(settings).run(invocation)
        print_run_result(result, console, verbose=output_verbose)
        raise typer.Exit(int(result.exit_status))

    if settings.require_root and not is_root():
        console.print_error("EFI Clone must be run as root (try sudo).")
        raise typer.Exit(int(ExitStatus.FAILURE))

    if not settings.live:
        console.print_info("Simulation mode: no files will be changed")

    with RunLock(settings.lock_file):
        engine = create_sync_verify_engine(settings)
        result = engine.run(invocation)

    print_run_result(result, console, verbose=output_verbose)
    raise typer.Exit(int(result.exit_status))


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
        exit_code = 0
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("unexpected_error", error=str(e))
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
