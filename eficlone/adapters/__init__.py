"""Adapters for the macOS tools eficlone drives."""

from eficlone.adapters.diskutil_adapter import (
    DiskutilAdapter,
    create_diskutil_adapter,
    whole_disk_from_identifier,
)
from eficlone.adapters.notification_adapter import (
    LogNotifier,
    OsascriptNotifier,
    create_notifier,
)


__all__ = [
    "DiskutilAdapter",
    "LogNotifier",
    "OsascriptNotifier",
    "create_diskutil_adapter",
    "create_notifier",
    "whole_disk_from_identifier",
]
