"""Protocol definitions for content synchronization, hashing and notifications."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from eficlone.models.sync import MirrorReport, TreeHash


@runtime_checkable
class MirrorProtocol(Protocol):
    """One-way mirror of a directory tree."""

    def mirror(
        self,
        src_dir: Path,
        dst_dir: Path,
        exclude_patterns: list[str],
        dry_run: bool,
    ) -> MirrorReport:
        """Make dst_dir match src_dir, deleting what the source lacks.

        Args:
            src_dir: Directory to copy from
            dst_dir: Directory to make identical to src_dir
            exclude_patterns: Name patterns neither copied nor deleted
            dry_run: Only compute the operations

        Returns:
            Report of performed (or planned) operations
        """
        ...


@runtime_checkable
class TreeHasherProtocol(Protocol):
    """Directory content hashing."""

    def hash_tree(self, root: Path, exclude_patterns: list[str]) -> TreeHash:
        """Hash every non-excluded regular file below root."""
        ...


@runtime_checkable
class NotifierProtocol(Protocol):
    """Sink for human readable status notifications."""

    def notify(self, message: str, title: str = "EFI Clone") -> None:
        """Deliver a notification. Must never raise."""
        ...
