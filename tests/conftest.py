"""Core test fixtures for the eficlone project."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from eficlone.config.settings import EfiCloneSettings
from eficlone.sync.engine import SyncVerifyEngine
from eficlone.sync.hashing import TreeHasher
from eficlone.sync.mirror import MirrorService
from tests.fakes import DiskWorld, write_tree


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_eficlone_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EFICLONE_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("EFICLONE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> EfiCloneSettings:
    """Live settings without log file, notifications or root requirement."""
    return EfiCloneSettings(
        live=True,
        log_file=None,
        notifications=False,
        require_root=False,
        lock_file=tmp_path / "eficlone.lock",
    )


@pytest.fixture
def source_efi(tmp_path: Path) -> Path:
    root = tmp_path / "mnt" / "source_efi"
    write_tree(
        root,
        {
            "EFI/BOOT/BOOTX64.efi": b"\x4d\x5a boot loader",
            "EFI/OC/config.plist": "<plist>source</plist>",
            "EFI/OC/Drivers/OpenRuntime.efi": b"runtime",
            "EFI/OC/Kexts/Lilu.kext/Contents/Info.plist": "<plist>lilu</plist>",
        },
    )
    return root


@pytest.fixture
def destination_efi(tmp_path: Path) -> Path:
    root = tmp_path / "mnt" / "destination_efi"
    write_tree(
        root,
        {
            "EFI/BOOT/BOOTX64.efi": b"old loader",
            "EFI/CLOVER/config.plist": "<plist>stale</plist>",
        },
    )
    return root


@pytest.fixture
def disk_world(source_efi: Path, destination_efi: Path) -> DiskWorld:
    return DiskWorld(source_efi, destination_efi)


@pytest.fixture
def make_engine(
    settings: EfiCloneSettings, disk_world: DiskWorld
) -> Callable[..., SyncVerifyEngine]:
    """Build an engine over the disk world; keyword arguments replace settings."""

    def factory(
        mirror: Any = None, hasher: Any = None, **overrides: Any
    ) -> SyncVerifyEngine:
        config = settings.model_copy(update=overrides)
        return SyncVerifyEngine(
            config=config,
            inventory=disk_world.inventory,
            logical_volumes=disk_world.logical_volumes,
            containers=disk_world.containers,
            mounter=disk_world.mounter,
            mirror=mirror or MirrorService(modify_window=config.modify_window),
            hasher=hasher or TreeHasher(),
            notifier=disk_world.notifier,
            boot_probe=disk_world.boot_probe,
        )

    return factory


@pytest.fixture
def lock_path(tmp_path: Path) -> Generator[Path, None, None]:
    path = tmp_path / "locks" / "eficlone.lock"
    yield path
    path.unlink(missing_ok=True)
