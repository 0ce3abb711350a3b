"""Run-scoped exclusive lock so two clone hooks never touch the same disks."""

import fcntl
import os
from pathlib import Path
from types import TracebackType

from eficlone.core.errors import LockError
from eficlone.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_LOCK_FILE = Path("/tmp/eficlone.lock")


class RunLock:
    """Non-blocking exclusive ``flock`` held for the duration of a run.

    The lock file is opened without following symlinks and without
    truncation, and it is left in place on release so every run locks the
    same inode.

    Usage:
        with RunLock(path):
            engine.run(invocation)
    """

    def __init__(self, lock_path: Path = DEFAULT_LOCK_FILE) -> None:
        self.lock_path = Path(lock_path)
        self._fd: int | None = None

    @property
    def is_held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """Acquire the lock or raise LockError if another run holds it."""
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(
                self.lock_path, os.O_RDWR | os.O_CREAT | os.O_NOFOLLOW, 0o600
            )
        except OSError as e:
            raise LockError(
                f"Unable to open run lock file: {self.lock_path} ({e.strerror})",
                {"lock_path": str(self.lock_path)},
            ) from e

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            os.close(fd)
            raise LockError(
                f"Unable to acquire run lock: {self.lock_path}",
                {"lock_path": str(self.lock_path)},
            ) from e
        self._fd = fd
        logger.debug("run_lock_acquired", lock_path=str(self.lock_path))

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
        logger.debug("run_lock_released", lock_path=str(self.lock_path))

    def __enter__(self) -> "RunLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
