"""Content hashing and change detection for SVCS.

Commit ids are random tokens, not content hashes: two commits with the
same files get unrelated ids. The 32-bit aggregate is only ever compared
for equality.
"""

from __future__ import annotations

import hashlib
import secrets
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable

from ..utils.log import log_debug

Resolver = Callable[[str], bytes]

_MASK32 = 0xFFFFFFFF


class ContentHasher:
    """SHA-256 based digests, aggregates and commit ids."""

    ID_ENTROPY_BYTES = 32

    @staticmethod
    def digest(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()

    @staticmethod
    def reduce(digest: bytes) -> int:
        """Truncate a digest to its first 4 bytes as a little-endian uint32."""
        return int.from_bytes(digest[:4], "little")

    def aggregate(self, paths: Iterable[str], resolver: Resolver) -> int:
        """Sum of the reduced digests of each path's bytes, modulo 2**32.
        
        Args:
            paths: Paths to hash (order does not matter)
            resolver: Returns the byte content for a path
            
        Returns:
            Order-insensitive 32-bit aggregate
        """
        total = 0
        for path in paths:
            total = (total + self.reduce(self.digest(resolver(path)))) & _MASK32
        return total

    def new_commit_id(self) -> str:
        """Hex SHA-256 of fresh random bytes."""
        return hashlib.sha256(secrets.token_bytes(self.ID_ENTROPY_BYTES)).hexdigest()


def list_snapshot_files(snapshot_dir: Path) -> list[str]:
    """Relative POSIX paths of every file under a snapshot directory, sorted."""
    if not snapshot_dir.is_dir():
        return []
    return sorted(
        p.relative_to(snapshot_dir).as_posix()
        for p in snapshot_dir.rglob("*")
        if p.is_file()
    )


class ChangeDetector(ABC):
    """Decides whether the working tree differs from a stored snapshot."""

    name = ""

    def __init__(self, hasher: ContentHasher | None = None):
        self.hasher = hasher or ContentHasher()

    @abstractmethod
    def changed(self, tracks: list[str], work_root: Path, snapshot_dir: Path) -> bool:
        """Return True if the tracked files differ from the snapshot.
        
        Args:
            tracks: Tracked paths relative to work_root
            work_root: Root of the working tree
            snapshot_dir: Directory of the latest commit
        """


class SumChangeDetector(ChangeDetector):
    """Compares 32-bit aggregates of working and snapshot bytes.

    The snapshot side uses the snapshot's own file listing rather than
    the index, so files tracked after that commit count as a change.
    """

    name = "sum"

    def changed(self, tracks: list[str], work_root: Path, snapshot_dir: Path) -> bool:
        # A path tracked twice is stored once in the snapshot
        new_hash = self.hasher.aggregate(dict.fromkeys(tracks), lambda p: (work_root / p).read_bytes())
        old_hash = self.hasher.aggregate(
            list_snapshot_files(snapshot_dir),
            lambda p: (snapshot_dir / p).read_bytes(),
        )
        log_debug(f"aggregate working={new_hash:08x} snapshot={old_hash:08x}")
        return new_hash != old_hash


class DigestChangeDetector(ChangeDetector):
    """Compares per-file SHA-256 digests keyed by relative path."""

    name = "digest"

    def changed(self, tracks: list[str], work_root: Path, snapshot_dir: Path) -> bool:
        current = {
            Path(p).as_posix(): self.hasher.digest((work_root / p).read_bytes())
            for p in tracks
        }
        stored = {
            p: self.hasher.digest((snapshot_dir / p).read_bytes())
            for p in list_snapshot_files(snapshot_dir)
        }
        return current != stored


_DETECTORS: dict[str, type[ChangeDetector]] = {
    SumChangeDetector.name: SumChangeDetector,
    DigestChangeDetector.name: DigestChangeDetector,
}


def get_change_detector(name: str, hasher: ContentHasher | None = None) -> ChangeDetector:
    """Build the change detector registered under ``name``.
    
    Raises:
        ValueError: If no detector has that name
    """
    try:
        detector_cls = _DETECTORS[name]
    except KeyError:
        raise ValueError(f"Unknown change detection strategy: {name}") from None
    return detector_cls(hasher)
