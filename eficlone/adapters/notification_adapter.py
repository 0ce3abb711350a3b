"""Notification adapters reporting run outcomes to the user."""

from eficlone.core.commands import run_command
from eficlone.core.errors import CommandError
from eficlone.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_TITLE = "EFI Clone"


def _applescript_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class OsascriptNotifier:
    """Desktop notifications through ``osascript display notification``."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def notify(self, message: str, title: str = DEFAULT_TITLE) -> None:
        script = (
            f"display notification {_applescript_string(message)} "
            f"with title {_applescript_string(title)}"
        )
        logger.info("notification", title=title, message=message)
        try:
            result = run_command(["osascript", "-e", script], timeout=self.timeout)
        except CommandError as e:
            logger.warning("notification_failed", error=e.message)
            return
        if result.returncode != 0:
            logger.warning(
                "notification_failed",
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )


class LogNotifier:
    """Notifier that only writes to the run log."""

    def notify(self, message: str, title: str = DEFAULT_TITLE) -> None:
        logger.info("notification", title=title, message=message)


def create_notifier(enabled: bool = True) -> OsascriptNotifier | LogNotifier:
    """Factory function for the notifier matching the notifications setting."""
    return OsascriptNotifier() if enabled else LogNotifier()
