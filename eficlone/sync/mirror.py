"""One-way directory mirroring with delete semantics."""

import filecmp
import shutil
from pathlib import Path

from eficlone.core.structlog_logger import StructlogMixin
from eficlone.models.sync import MirrorAction, MirrorOperation, MirrorReport
from eficlone.sync.filters import is_excluded


def _kind(path: Path) -> str | None:
    if path.is_symlink():
        return "other"
    if path.is_dir():
        return "dir"
    if path.is_file():
        return "file"
    return "other" if path.exists() else None


class MirrorService(StructlogMixin):
    """Makes a destination tree identical to a source tree.

    Behaves like ``rsync -a --delete --exclude=<pattern>``: destination
    entries missing from the source are deleted, new and changed files are
    copied with their timestamps, and excluded names are left alone on both
    sides. A file counts as changed when its size or its content differs.
    Unchanged files whose modification times differ by more than
    ``modify_window`` seconds only get their timestamps refreshed.
    """

    def __init__(self, modify_window: float = 2.0) -> None:
        super().__init__()
        self.modify_window = modify_window

    def mirror(
        self,
        src_dir: Path,
        dst_dir: Path,
        exclude_patterns: list[str],
        dry_run: bool,
    ) -> MirrorReport:
        src_dir, dst_dir = Path(src_dir), Path(dst_dir)
        if not src_dir.is_dir():
            raise NotADirectoryError(f"Mirror source is not a directory: {src_dir}")
        if not dst_dir.is_dir():
            raise NotADirectoryError(
                f"Mirror destination is not a directory: {dst_dir}"
            )

        log = self.log_operation(
            "mirror", source=str(src_dir), destination=str(dst_dir), dry_run=dry_run
        )
        log.info("mirror_started", exclude_patterns=exclude_patterns)

        report = MirrorReport(
            source=str(src_dir), destination=str(dst_dir), dry_run=dry_run
        )
        self._sync_dir(src_dir, dst_dir, "", exclude_patterns, dry_run, report)

        log.info(
            "mirror_finished",
            operations=len(report.operations),
            copied=report.count(MirrorAction.COPY),
            updated=report.count(MirrorAction.UPDATE),
            deleted=report.count(MirrorAction.DELETE),
            bytes_copied=report.bytes_copied,
        )
        return report

    def _record(
        self, report: MirrorReport, action: MirrorAction, relative: str
    ) -> None:
        report.operations.append(MirrorOperation(action=action, path=relative))
        self.logger.debug(
            "mirror_operation",
            action=action.value,
            path=relative,
            dry_run=report.dry_run,
        )

    def _sync_dir(
        self,
        src: Path,
        dst: Path,
        prefix: str,
        patterns: list[str],
        dry_run: bool,
        report: MirrorReport,
    ) -> None:
        src_entries: dict[str, str] = {}
        for entry in sorted(src.iterdir(), key=lambda p: p.name):
            if is_excluded(entry.name, patterns):
                continue
            kind = _kind(entry)
            if kind in (None, "other"):
                report.skipped.append(prefix + entry.name)
                self.logger.warning("mirror_entry_skipped", path=prefix + entry.name)
                continue
            src_entries[entry.name] = str(kind)

        removed: set[str] = set()
        if dst.is_dir():
            for entry in sorted(dst.iterdir(), key=lambda p: p.name):
                if is_excluded(entry.name, patterns):
                    continue
                if src_entries.get(entry.name) == _kind(entry):
                    continue
                self._record(report, MirrorAction.DELETE, prefix + entry.name)
                removed.add(entry.name)
                if not dry_run:
                    if entry.is_dir() and not entry.is_symlink():
                        shutil.rmtree(entry)
                    else:
                        entry.unlink()

        for name, kind in src_entries.items():
            src_path, dst_path = src / name, dst / name
            relative = prefix + name
            exists = name not in removed and dst_path.exists()

            if kind == "dir":
                if not exists:
                    self._record(report, MirrorAction.CREATE_DIR, relative + "/")
                    if not dry_run:
                        dst_path.mkdir()
                        shutil.copystat(src_path, dst_path)
                self._sync_dir(
                    src_path, dst_path, relative + "/", patterns, dry_run, report
                )
                continue

            if exists and not self._needs_update(src_path, dst_path):
                if not dry_run and self._timestamps_differ(src_path, dst_path):
                    shutil.copystat(src_path, dst_path)
                continue
            action = MirrorAction.UPDATE if exists else MirrorAction.COPY
            self._record(report, action, relative)
            report.bytes_copied += src_path.stat().st_size
            if not dry_run:
                shutil.copy2(src_path, dst_path)

    def _needs_update(self, src_path: Path, dst_path: Path) -> bool:
        src_stat, dst_stat = src_path.stat(), dst_path.stat()
        if src_stat.st_size != dst_stat.st_size:
            return True
        return not filecmp.cmp(src_path, dst_path, shallow=False)

    def _timestamps_differ(self, src_path: Path, dst_path: Path) -> bool:
        delta = src_path.stat().st_mtime - dst_path.stat().st_mtime
        return abs(delta) > self.modify_window


def create_mirror_service(modify_window: float = 2.0) -> MirrorService:
    """Factory function to create a MirrorService."""
    return MirrorService(modify_window=modify_window)
