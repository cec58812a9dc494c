"""Snapshot storage for SVCS.

One directory per commit id, holding a verbatim copy of every tracked
file at its original relative path. Snapshots are never modified after
creation.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from ..utils.log import log_debug
from .errors import NotFoundError, StorageError
from .hasher import list_snapshot_files


class CommitStore:
    """Manages commit snapshot directories."""
    
    def __init__(self, commits_dir: Path, work_root: Path):
        """Initialize commit store.
        
        Args:
            commits_dir: Directory holding one subdirectory per commit
            work_root: Root that tracked paths are relative to
        """
        self.commits_dir = Path(commits_dir)
        self.work_root = Path(work_root)

    def snapshot_dir(self, commit_id: str) -> Path:
        return self.commits_dir / commit_id

    def exists(self, commit_id: str) -> bool:
        """Check whether a snapshot directory exists for ``commit_id``."""
        if not commit_id or commit_id in (".", "..") or "/" in commit_id or "\\" in commit_id:
            return False
        return self.snapshot_dir(commit_id).is_dir()

    def list_ids(self) -> set[str]:
        if not self.commits_dir.is_dir():
            return set()
        return {entry.name for entry in self.commits_dir.iterdir() if entry.is_dir()}

    def snapshot_files(self, commit_id: str) -> list[str]:
        """Relative paths stored in a snapshot, sorted."""
        return list_snapshot_files(self.snapshot_dir(commit_id))

    def snapshot(
        self,
        commit_id: str,
        paths: list[str],
        resolver: Callable[[str], bytes] | None = None,
    ) -> int:
        """Create a snapshot directory holding a copy of each path.
        
        Args:
            commit_id: New commit id, must not exist yet
            paths: Tracked paths relative to the work root
            resolver: Returns a path's bytes (defaults to reading the working file)
            
        Returns:
            Number of files written
            
        Raises:
            StorageError: If the directory exists or any copy fails
        """
        read = resolver or (lambda p: (self.work_root / p).read_bytes())
        target = self.snapshot_dir(commit_id)
        
        try:
            target.mkdir(parents=True, exist_ok=False)
        except FileExistsError:
            raise StorageError(f"Commit directory already exists: {commit_id}") from None
        except OSError as e:
            raise StorageError(f"Could not create commit {commit_id}: {e}") from e

        written = 0
        try:
            for path in dict.fromkeys(paths):
                dst = target / path
                dst.parent.mkdir(parents=True, exist_ok=True)
                dst.write_bytes(read(path))
                written += 1
        except OSError as e:
            # Clean up on failure
            shutil.rmtree(target, ignore_errors=True)
            raise StorageError(f"Could not snapshot '{path}': {e}") from e

        log_debug(f"snapshot {commit_id[:10]}: {written} files")
        return written

    def restore(self, commit_id: str, paths: list[str]) -> int:
        """Copy each path from a snapshot back over the working tree.

        Every path is checked against the snapshot before any working file
        is touched.
        
        Args:
            commit_id: Snapshot to restore from
            paths: Tracked paths relative to the work root
            
        Returns:
            Number of files restored
            
        Raises:
            NotFoundError: If the snapshot or one of its files is missing
            StorageError: If a copy fails
        """
        if not self.exists(commit_id):
            raise NotFoundError("Commit does not exist.")

        source = self.snapshot_dir(commit_id)
        missing = [p for p in paths if not (source / p).is_file()]
        if missing:
            raise NotFoundError(
                f"Commit {commit_id} has no copy of '{missing[0]}' (tracked after that commit?)."
            )

        restored = 0
        for path in dict.fromkeys(paths):
            src = source / path
            dst = self.work_root / path
            try:
                if dst.exists() or dst.is_symlink():
                    dst.unlink()
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(src, dst)
            except OSError as e:
                raise StorageError(f"Could not restore '{path}': {e}") from e
            restored += 1

        log_debug(f"restore {commit_id[:10]}: {restored} files")
        return restored
