"""Mirroring, content hashing and the sync and verify engine."""

from eficlone.sync.engine import SyncVerifyEngine, create_sync_verify_engine
from eficlone.sync.hashing import TreeHasher, create_tree_hasher, sha1_of_file
from eficlone.sync.mirror import MirrorService, create_mirror_service


__all__ = [
    "MirrorService",
    "SyncVerifyEngine",
    "TreeHasher",
    "create_mirror_service",
    "create_sync_verify_engine",
    "create_tree_hasher",
    "sha1_of_file",
]
