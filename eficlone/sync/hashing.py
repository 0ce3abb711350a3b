"""Content hashing of directory trees.

The digest is built the way ``find -s . -type f | xargs shasum | shasum``
builds it: each regular file contributes ``"<sha1>  ./<relative path>\\n"``,
entries are visited in name order at every directory level, and the digest
is the SHA-1 of the concatenated lines. Two trees with the same digest hold
the same files with the same content.
"""

import hashlib
from collections.abc import Iterator
from pathlib import Path

from eficlone.core.structlog_logger import StructlogMixin
from eficlone.models.sync import TreeHash
from eficlone.sync.filters import is_excluded


CHUNK_SIZE = 1024 * 1024


def sha1_of_file(path: Path) -> str:
    digest = hashlib.sha1()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def iter_files(root: Path, exclude_patterns: list[str]) -> Iterator[Path]:
    """Yield regular files below root in name order, skipping excluded names.

    Symbolic links are neither followed nor hashed.
    """
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if is_excluded(entry.name, exclude_patterns) or entry.is_symlink():
            continue
        if entry.is_dir():
            yield from iter_files(entry, exclude_patterns)
        elif entry.is_file():
            yield entry


class TreeHasher(StructlogMixin):
    """Computes directory content hashes and logs the per-file digests."""

    def __init__(self, log_details: bool = True) -> None:
        super().__init__()
        self.log_details = log_details

    def hash_tree(self, root: Path, exclude_patterns: list[str]) -> TreeHash:
        root = Path(root)
        log = self.log_operation("hash_tree", root=str(root))

        files: dict[str, str] = {}
        listing = hashlib.sha1()
        for path in iter_files(root, exclude_patterns):
            relative = path.relative_to(root).as_posix()
            file_digest = sha1_of_file(path)
            files[relative] = file_digest
            listing.update(f"{file_digest}  ./{relative}\n".encode())
            if self.log_details:
                log.debug("file_hash", path=f"./{relative}", sha1=file_digest)

        digest = listing.hexdigest()
        log.info("tree_hashed", digest=digest, file_count=len(files))
        return TreeHash(root=str(root), digest=digest, files=files)


def create_tree_hasher(log_details: bool = True) -> TreeHasher:
    """Factory function to create a TreeHasher."""
    return TreeHasher(log_details=log_details)
