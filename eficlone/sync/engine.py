"""Sync and verify engine driving one firmware partition clone.

States are visited in this order::

    START -> RESOLVE_SOURCE -> RESOLVE_DEST -> SANITY_CHECK -> MOUNT
          -> SYNC -> HASH_BOTH -> COMPARE -> UNMOUNT -> END

A failing state skips straight to UNMOUNT, which releases every partition
mounted so far (destination first) before END. Each state raises the matching
``EfiCloneError`` subclass and ``run`` turns it into the run outcome, so the
caller always gets a ``RunResult`` back.
"""

from pathlib import Path

from eficlone.config.settings import EfiCloneSettings
from eficlone.core.errors import (
    CommandError,
    EfiCloneError,
    InvocationError,
    MountError,
    PreflightSkipError,
    ResolutionError,
    UnmountError,
    UnsupportedInvocationError,
    VerificationError,
)
from eficlone.core.structlog_logger import StructlogMixin
from eficlone.disk.locator import FirmwarePartitionLocator
from eficlone.disk.resolver import VolumeIdentityResolver
from eficlone.models.invocation import Invocation
from eficlone.models.sync import EngineState, RunOutcome, RunResult
from eficlone.protocols.disk_protocols import (
    BootPartitionProbeProtocol,
    ContainerVolumeProtocol,
    DiskInventoryProtocol,
    LogicalVolumeProtocol,
    MountProtocol,
)
from eficlone.protocols.sync_protocols import (
    MirrorProtocol,
    NotifierProtocol,
    TreeHasherProtocol,
)


SUCCESS_MESSAGE = "EFI Clone completed successfully."
SIMULATION_MESSAGE = "EFI Clone simulation completed. No files were changed."
VERIFICATION_FAILED_MESSAGE = (
    "EFI Clone failed - destination data did not match source after copy."
)


class SyncVerifyEngine(StructlogMixin):
    """Resolves both firmware partitions, mirrors them and verifies the copy."""

    def __init__(
        self,
        config: EfiCloneSettings,
        inventory: DiskInventoryProtocol,
        logical_volumes: LogicalVolumeProtocol,
        containers: ContainerVolumeProtocol,
        mounter: MountProtocol,
        mirror: MirrorProtocol,
        hasher: TreeHasherProtocol,
        notifier: NotifierProtocol,
        boot_probe: BootPartitionProbeProtocol | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.inventory = inventory
        self.mounter = mounter
        self.mirror = mirror
        self.hasher = hasher
        self.notifier = notifier
        self.boot_probe = boot_probe
        self.resolver = VolumeIdentityResolver(inventory)
        self.locator = FirmwarePartitionLocator(
            inventory,
            logical_volumes,
            containers,
            content_types=config.firmware_content_types,
        )

    def run(self, invocation: Invocation) -> RunResult:
        """Run one synchronization for the given invocation.

        Returns:
            The run result. Its outcome decides the process exit status.

        Raises:
            KeyboardInterrupt: Re-raised after mounted partitions are released
        """
        result = RunResult(live=self.config.live)
        self._enter(result, EngineState.START)
        self.logger.info(
            "run_started",
            caller=invocation.caller.value,
            live=self.config.live,
            source=invocation.source_volume,
            destination=invocation.destination_volume,
        )

        try:
            self._check_invocation(invocation)
        except InvocationError as e:
            result.outcome = RunOutcome.SKIPPED
            result.add_message(e.message)
            self._enter(result, EngineState.END)
            self._notify(result, e.message)
            return result

        mounted: list[str] = []
        try:
            source_partition, destination_partition = self._resolve(
                invocation, result
            )
            self._mount(source_partition, destination_partition, mounted, result)
            self._sync_and_verify(result)
        except ResolutionError as e:
            self._fail(result, RunOutcome.RESOLUTION_FAILED, e)
        except MountError as e:
            self._fail(result, RunOutcome.MOUNT_FAILED, e)
        except VerificationError as e:
            self._fail(result, RunOutcome.VERIFICATION_FAILED, e)
        finally:
            self._unmount(mounted, result)

        self._enter(result, EngineState.END)
        self.logger.info(
            "run_finished",
            outcome=result.outcome.value,
            exit_status=int(result.exit_status),
            warnings=len(result.warnings),
        )
        self._notify(result, self._outcome_message(result))
        return result

    def _enter(self, result: RunResult, state: EngineState) -> None:
        result.states.append(state)
        self.logger.debug("engine_state", state=state.value)

    def _fail(
        self, result: RunResult, outcome: RunOutcome, error: EfiCloneError
    ) -> None:
        self.log_error_with_context(
            "run_failed", error, outcome=outcome.value, context=error.context
        )
        result.outcome = outcome
        result.add_error(error.message)

    def _notify(self, result: RunResult, message: str) -> None:
        if not result.outcome.ran:
            message = f"{message} EFI Clone did not run."
        self.notifier.notify(message)

    def _outcome_message(self, result: RunResult) -> str:
        if result.outcome == RunOutcome.SUCCESS:
            return SUCCESS_MESSAGE
        if result.outcome == RunOutcome.SIMULATED:
            return SIMULATION_MESSAGE
        if result.outcome == RunOutcome.VERIFICATION_FAILED:
            return VERIFICATION_FAILED_MESSAGE
        return f"{result.errors[-1] if result.errors else 'Unknown error.'} EFI Clone did not run."

    def _check_invocation(self, invocation: Invocation) -> None:
        if not invocation.supported:
            raise UnsupportedInvocationError(
                invocation.skip_reason or "Unsupported set of parameters passed in."
            )
        if not invocation.preflight_ok:
            raise PreflightSkipError(
                invocation.skip_reason or "Caller preflight check failed."
            )
        if not invocation.source_volume or not invocation.destination_volume:
            raise UnsupportedInvocationError("Source or destination volume is empty.")

    # Resolution

    def _resolve(self, invocation: Invocation, result: RunResult) -> tuple[str, str]:
        try:
            self._enter(result, EngineState.RESOLVE_SOURCE)
            source_partition = self._resolve_side(
                "source", str(invocation.source_volume), result
            )
            self._enter(result, EngineState.RESOLVE_DEST)
            destination_partition = self._resolve_side(
                "destination", str(invocation.destination_volume), result
            )
            self._enter(result, EngineState.SANITY_CHECK)
            self._sanity_check(source_partition, destination_partition)
        except CommandError as e:
            raise ResolutionError(
                f"Disk query failed: {e.message}", context=e.context
            ) from e
        return source_partition, destination_partition

    def _resolve_side(self, side: str, volume_path: str, result: RunResult) -> str:
        resolution = self.resolver.resolve_disk(volume_path)
        setattr(result, f"{side}_resolution", resolution)
        if not resolution.found or not resolution.disk_id:
            raise ResolutionError(
                f"No {side} disk found for {volume_path}.",
                context={"volume_path": volume_path},
            )

        lookup = self.locator.locate_firmware_partition(resolution.disk_id)
        setattr(result, f"{side}_lookup", lookup)
        if lookup.ambiguous:
            raise ResolutionError(
                f"More than one {side} EFI partition found: {', '.join(lookup.candidates)}.",
                context={"disk_id": resolution.disk_id, "candidates": lookup.candidates},
            )
        if not lookup.found or not lookup.partition_id:
            raise ResolutionError(
                f"No {side} EFI partition found on {resolution.disk_id}.",
                context={"disk_id": resolution.disk_id},
            )
        return lookup.partition_id

    def _sanity_check(self, source_partition: str, destination_partition: str) -> None:
        if source_partition == destination_partition:
            raise ResolutionError(
                f"Source and destination EFI partitions are the same ({source_partition}).",
                context={"partition": source_partition},
            )

        if self.config.check_boot_partition and self.boot_probe is not None:
            boot_partition = self.boot_probe.current_boot_partition()
            if boot_partition and boot_partition == destination_partition:
                raise ResolutionError(
                    f"Destination EFI partition {destination_partition} is the partition the system booted from.",
                    context={"partition": destination_partition},
                )
        self.logger.info(
            "sanity_check_passed",
            source_partition=source_partition,
            destination_partition=destination_partition,
        )

    # Mounting

    def _mount(
        self,
        source_partition: str,
        destination_partition: str,
        mounted: list[str],
        result: RunResult,
    ) -> None:
        self._enter(result, EngineState.MOUNT)
        self.mounter.mount(source_partition, read_only=self.config.source_read_only)
        mounted.append(source_partition)
        self.mounter.mount(destination_partition, read_only=False)
        mounted.append(destination_partition)

        try:
            result.source_mount_point = self.inventory.mount_point_of(source_partition)
            result.destination_mount_point = self.inventory.mount_point_of(
                destination_partition
            )
        except CommandError as e:
            raise MountError(f"Mount point lookup failed: {e.message}") from e

        for partition, mount_point in (
            (source_partition, result.source_mount_point),
            (destination_partition, result.destination_mount_point),
        ):
            if not mount_point:
                raise MountError(
                    f"EFI partition {partition} has no mount point after mounting.",
                    context={"partition": partition},
                )
            if not Path(mount_point).is_dir():
                raise MountError(
                    f"Mount point of EFI partition {partition} is not a directory: "
                    f"{mount_point}",
                    context={"partition": partition, "mount_point": mount_point},
                )
        self.logger.info(
            "partitions_mounted",
            source_mount_point=result.source_mount_point,
            destination_mount_point=result.destination_mount_point,
        )

    def _unmount(self, mounted: list[str], result: RunResult) -> None:
        self._enter(result, EngineState.UNMOUNT)
        for partition in reversed(mounted):
            try:
                self.mounter.unmount(partition)
            except UnmountError as e:
                result.add_warning(e.message)

    # Synchronization and verification

    def _sync_and_verify(self, result: RunResult) -> None:
        source = Path(str(result.source_mount_point))
        destination = Path(str(result.destination_mount_point))
        patterns = self.config.exclude_patterns

        self._enter(result, EngineState.SYNC)
        try:
            result.mirror_report = self.mirror.mirror(
                source, destination, patterns, dry_run=not self.config.live
            )
        except OSError as e:
            raise VerificationError(
                f"Copy to {destination} failed: {e}", context={"error": str(e)}
            ) from e
        self.logger.debug("mirror_report", **result.mirror_report.to_dict())

        if not self.config.live:
            result.outcome = RunOutcome.SIMULATED
            result.add_message(
                f"Simulation: {len(result.mirror_report.operations)} operations would be performed."
            )
            return

        self._enter(result, EngineState.HASH_BOTH)
        try:
            result.source_hash = self.hasher.hash_tree(source, patterns)
            result.destination_hash = self.hasher.hash_tree(destination, patterns)
        except OSError as e:
            raise VerificationError(
                f"Hashing failed: {e}", context={"error": str(e)}
            ) from e

        self._enter(result, EngineState.COMPARE)
        if not result.hashes_match:
            raise VerificationError(
                VERIFICATION_FAILED_MESSAGE,
                context={
                    "source_hash": result.source_hash.digest,
                    "destination_hash": result.destination_hash.digest,
                },
            )
        result.outcome = RunOutcome.SUCCESS
        result.add_message(SUCCESS_MESSAGE)


def create_sync_verify_engine(config: EfiCloneSettings) -> SyncVerifyEngine:
    """Factory function wiring the engine to the macOS implementations."""
    from eficlone.adapters.diskutil_adapter import create_diskutil_adapter
    from eficlone.adapters.notification_adapter import create_notifier
    from eficlone.disk.boot_guard import create_boot_partition_probe
    from eficlone.sync.hashing import create_tree_hasher
    from eficlone.sync.mirror import create_mirror_service

    diskutil = create_diskutil_adapter(
        command_timeout=config.command_timeout, mount_timeout=config.mount_timeout
    )
    return SyncVerifyEngine(
        config=config,
        inventory=diskutil,
        logical_volumes=diskutil,
        containers=diskutil,
        mounter=diskutil,
        mirror=create_mirror_service(modify_window=config.modify_window),
        hasher=create_tree_hasher(),
        notifier=create_notifier(enabled=config.notifications),
        boot_probe=create_boot_partition_probe(command_timeout=config.command_timeout)
        if config.check_boot_partition
        else None,
    )
