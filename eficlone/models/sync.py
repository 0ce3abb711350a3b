"""Models for mirror reports, tree hashes and run results."""

from enum import Enum, IntEnum

from pydantic import Field

from eficlone.models.base import EfiCloneBaseModel
from eficlone.models.disk import DiskResolution, PartitionLookup
from eficlone.models.results import BaseResult


class MirrorAction(str, Enum):
    """Kinds of operation a one-way mirror performs on the destination."""

    CREATE_DIR = "create_dir"
    COPY = "copy"
    UPDATE = "update"
    DELETE = "delete"


class MirrorOperation(EfiCloneBaseModel):
    """A single destination change, relative to the mirrored roots."""

    action: MirrorAction
    path: str

    def __str__(self) -> str:
        return f"{self.action.value} {self.path}"


class MirrorReport(EfiCloneBaseModel):
    """Operations performed, or in simulation mode planned, by one mirror pass."""

    source: str
    destination: str
    dry_run: bool
    operations: list[MirrorOperation] = Field(default_factory=list)
    bytes_copied: int = 0
    skipped: list[str] = Field(
        default_factory=list, description="Entries that are neither file nor directory"
    )

    @property
    def changed(self) -> bool:
        return bool(self.operations)

    def count(self, action: MirrorAction) -> int:
        return sum(1 for operation in self.operations if operation.action == action)


class TreeHash(EfiCloneBaseModel):
    """Directory content hash plus the per-file digests it was built from."""

    root: str
    digest: str
    files: dict[str, str] = Field(
        default_factory=dict, description="Relative path to SHA-1 of the file"
    )


class EngineState(str, Enum):
    """States of the sync and verify state machine, in order."""

    START = "start"
    RESOLVE_SOURCE = "resolve_source"
    RESOLVE_DEST = "resolve_dest"
    SANITY_CHECK = "sanity_check"
    MOUNT = "mount"
    SYNC = "sync"
    HASH_BOTH = "hash_both"
    COMPARE = "compare"
    UNMOUNT = "unmount"
    END = "end"


class ExitStatus(IntEnum):
    """Process exit status reported to the invoking clone tool."""

    OK = 0
    FAILURE = 1
    VERIFICATION_FAILURE = 2


class RunOutcome(str, Enum):
    """How a run ended."""

    SKIPPED = "skipped"
    SIMULATED = "simulated"
    SUCCESS = "success"
    RESOLUTION_FAILED = "resolution_failed"
    MOUNT_FAILED = "mount_failed"
    VERIFICATION_FAILED = "verification_failed"

    @property
    def exit_status(self) -> ExitStatus:
        if self in (RunOutcome.RESOLUTION_FAILED, RunOutcome.MOUNT_FAILED):
            return ExitStatus.FAILURE
        if self == RunOutcome.VERIFICATION_FAILED:
            return ExitStatus.VERIFICATION_FAILURE
        return ExitStatus.OK

    @property
    def ran(self) -> bool:
        """False when the run deliberately took no action."""
        return self != RunOutcome.SKIPPED


class RunResult(BaseResult):
    """Everything one invocation of the engine determined and did."""

    success: bool = True
    outcome: RunOutcome = RunOutcome.SKIPPED
    live: bool = False
    states: list[EngineState] = Field(default_factory=list)
    source_resolution: DiskResolution | None = None
    destination_resolution: DiskResolution | None = None
    source_lookup: PartitionLookup | None = None
    destination_lookup: PartitionLookup | None = None
    source_mount_point: str | None = None
    destination_mount_point: str | None = None
    mirror_report: MirrorReport | None = None
    source_hash: TreeHash | None = None
    destination_hash: TreeHash | None = None

    @property
    def exit_status(self) -> ExitStatus:
        return self.outcome.exit_status

    @property
    def hashes_match(self) -> bool | None:
        if self.source_hash is None or self.destination_hash is None:
            return None
        return self.source_hash.digest == self.destination_hash.digest


__all__ = [
    "EngineState",
    "ExitStatus",
    "MirrorAction",
    "MirrorOperation",
    "MirrorReport",
    "RunOutcome",
    "RunResult",
    "TreeHash",
]
