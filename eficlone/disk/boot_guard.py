"""Detection of the firmware partition the running system booted from.

Clover records its own device path in the boot log (``bdmesg``), OpenCore
publishes it in the ``boot-path`` NVRAM variable. Both contain a
``HD(<n>,GPT,<partition uuid>,...)`` node whose UUID ``diskutil`` maps back to a
partition identifier.
"""

import plistlib
import re

from eficlone.core.commands import run_command
from eficlone.core.errors import CommandError
from eficlone.core.structlog_logger import StructlogMixin


OPENCORE_BOOT_PATH_VARIABLE = "4D1FDA02-38C7-4A6A-9CC6-4BCCA8B30102:boot-path"
GPT_NODE_PATTERN = re.compile(
    r"HD\([^,]*,GPT,([0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12})"
)


def partition_uuid_from_device_path(device_path: str) -> str | None:
    """Extract the GPT partition UUID from a firmware device path."""
    match = GPT_NODE_PATTERN.search(device_path)
    return match.group(1).upper() if match else None


class BootPartitionProbe(StructlogMixin):
    """Finds the booted firmware partition through the boot loader's records."""

    def __init__(self, command_timeout: float = 30.0) -> None:
        super().__init__()
        self.command_timeout = command_timeout

    def current_boot_partition(self) -> str | None:
        uuid = self._clover_partition_uuid() or self._opencore_partition_uuid()
        if not uuid:
            self.logger.info("boot_partition_unknown")
            return None

        partition = self._device_identifier_of(uuid)
        self.logger.info("boot_partition_detected", uuid=uuid, partition=partition)
        return partition

    def _output_of(self, command: list[str]) -> str | None:
        try:
            result = run_command(command, timeout=self.command_timeout)
        except CommandError as e:
            self.logger.debug("boot_probe_unavailable", command=command, error=e.message)
            return None
        if result.returncode != 0:
            return None
        return str(result.stdout)

    def _clover_partition_uuid(self) -> str | None:
        output = self._output_of(["bdmesg"])
        if not output:
            return None
        for line in output.splitlines():
            if "SelfDevicePath" in line:
                return partition_uuid_from_device_path(line)
        return None

    def _opencore_partition_uuid(self) -> str | None:
        output = self._output_of(["nvram", OPENCORE_BOOT_PATH_VARIABLE])
        return partition_uuid_from_device_path(output) if output else None

    def _device_identifier_of(self, uuid: str) -> str | None:
        try:
            result = run_command(
                ["diskutil", "info", "-plist", uuid],
                timeout=self.command_timeout,
                text=False,
            )
        except CommandError as e:
            self.logger.debug("boot_partition_lookup_failed", uuid=uuid, error=e.message)
            return None
        if result.returncode != 0:
            return None
        try:
            info = plistlib.loads(result.stdout)
        except (plistlib.InvalidFileException, ValueError):
            return None
        if not isinstance(info, dict):
            return None
        return info.get("DeviceIdentifier") or None


def create_boot_partition_probe(command_timeout: float = 30.0) -> BootPartitionProbe:
    """Factory function to create a BootPartitionProbe."""
    return BootPartitionProbe(command_timeout=command_timeout)
