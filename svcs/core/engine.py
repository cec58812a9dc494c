"""SVCS engine - main orchestrator.

Coordinates the index, commit log, snapshot store and user config for
the add, commit, checkout, config and log operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..config import ConfigLoader, SvcsSettings
from ..utils.env import get_work_root
from ..utils.log import log_debug
from .commit_log import CommitLog, CommitRecord
from .commit_store import CommitStore
from .errors import MissingArgumentError, NotFoundError, StorageError, SvcsError
from .hasher import ChangeDetector, ContentHasher, get_change_detector
from .index import Index
from .layout import RepoLayout
from .user_config import UserConfig

MAX_ID_ATTEMPTS = 8


def _failure(error: SvcsError) -> dict[str, Any]:
    return {"success": False, "error": str(error), "errorKind": error.kind}


class Engine:
    """Runs SVCS operations against explicitly supplied stores."""
    
    def __init__(
        self,
        work_root: Path | str,
        *,
        index: Index,
        log: CommitLog,
        store: CommitStore,
        user: UserConfig,
        detector: ChangeDetector | None = None,
        hasher: ContentHasher | None = None,
    ):
        """Initialize engine.
        
        Args:
            work_root: Root of the working tree
            index: Tracked-path index
            log: Commit log
            store: Snapshot store
            user: Stored username
            detector: Change detection strategy (defaults to the 32-bit sum)
            hasher: Source of commit ids
        """
        self.work_root = Path(work_root)
        self.index = index
        self.log = log
        self.store = store
        self.user = user
        self.hasher = hasher or ContentHasher()
        self.detector = detector or get_change_detector("sum", self.hasher)

    @classmethod
    def open(
        cls,
        work_root: Path | str | None = None,
        settings: SvcsSettings | None = None,
    ) -> Engine:
        """Build an engine for a working root, creating missing state files.
        
        Args:
            work_root: Root of the working tree (defaults to SVCS_ROOT or cwd)
            settings: Tool settings (defaults to ConfigLoader for the root)
        """
        root = Path(work_root) if work_root else get_work_root()
        settings = settings or ConfigLoader(work_root=root).settings
        layout = RepoLayout.for_root(root, settings.storage_dir)
        layout.ensure()

        hasher = ContentHasher()
        return cls(
            root,
            index=Index(layout.index_file, root, layout.storage_dir),
            log=CommitLog(layout.log_file),
            store=CommitStore(layout.commits_dir, root),
            user=UserConfig(layout.config_file),
            detector=get_change_detector(settings.change_detection, hasher),
            hasher=hasher,
        )

    def add(self, path: str | None = None) -> dict[str, Any]:
        """List tracked files, or track a new one.
        
        Args:
            path: File to track; omitted to list the index
            
        Returns:
            Result dictionary with output lines
        """
        try:
            if path:
                tracked = self.index.track(path)
                return {
                    "success": True,
                    "path": tracked,
                    "lines": [f"The file '{tracked}' is tracked."],
                }

            tracks = self.index.list()
        except SvcsError as e:
            return _failure(e)

        if not tracks:
            return {"success": True, "tracked": [], "lines": ["Add a file to the index."]}
        return {"success": True, "tracked": tracks, "lines": ["Tracked files:", *tracks]}

    def commit(self, message: str | None = None) -> dict[str, Any]:
        """Create a commit if the tracked content changed since the last one.
        
        Args:
            message: Commit message (required)
            
        Returns:
            Result dictionary; ``committed`` is False when nothing changed
        """
        if not message:
            return _failure(MissingArgumentError("Message was not passed."))

        try:
            tracks = self.index.list()
            if not self._has_changes(tracks):
                log_debug("no change since last commit")
                return {"success": True, "committed": False, "lines": ["Nothing to commit."]}

            commit_id = self._new_commit_id()
            file_count = self.store.snapshot(commit_id, tracks)
            self.log.append(CommitRecord(id=commit_id, author=self.user.get(), message=message))
        except SvcsError as e:
            return _failure(e)

        log_debug(f"committed {commit_id} ({file_count} files)")
        return {
            "success": True,
            "committed": True,
            "id": commit_id,
            "fileCount": file_count,
            "lines": ["Changes are committed."],
        }

    def checkout(self, commit_id: str | None = None) -> dict[str, Any]:
        """Restore every tracked file from a commit snapshot.
        
        Args:
            commit_id: Commit to restore (required)
            
        Returns:
            Result dictionary
        """
        if not commit_id:
            return _failure(MissingArgumentError("Commit id was not passed."))

        try:
            if not self.store.exists(commit_id):
                raise NotFoundError("Commit does not exist.")
            file_count = self.store.restore(commit_id, self.index.list())
        except SvcsError as e:
            return _failure(e)

        return {
            "success": True,
            "id": commit_id,
            "fileCount": file_count,
            "lines": [f"Switched to commit {commit_id}."],
        }

    def config(self, name: str | None = None) -> dict[str, Any]:
        """Get or set the username stamped on new commits."""
        try:
            if name:
                self.user.set(name)
                return {"success": True, "username": name, "lines": [f"The username is {name}."]}
            current = self.user.get()
        except SvcsError as e:
            return _failure(e)

        if not current:
            return {"success": True, "username": "", "lines": ["Please, tell me who you are."]}
        return {"success": True, "username": current, "lines": [f"The username is {current}."]}

    def show_log(self) -> dict[str, Any]:
        """List commits, most recent first."""
        try:
            lines = self.log.show()
            records = self.log.all()
        except SvcsError as e:
            return _failure(e)
        return {
            "success": True,
            "commits": [r.to_dict() for r in reversed(records)],
            "lines": lines,
        }

    def status(self) -> dict[str, Any]:
        """Summarize the repository state."""
        try:
            latest = self.log.latest()
            return {
                "success": True,
                "workRoot": str(self.work_root),
                "trackedCount": len(self.index.list()),
                "commitCount": len(self.log.all()),
                "latestCommit": latest.id if latest else None,
                "changeDetection": self.detector.name,
            }
        except SvcsError as e:
            return _failure(e)

    def _has_changes(self, tracks: list[str]) -> bool:
        latest = self.log.latest()
        if latest is None:
            return True
        if not self.store.exists(latest.id):
            log_debug(f"snapshot for {latest.id} is missing; treating as changed")
            return True
        try:
            return self.detector.changed(tracks, self.work_root, self.store.snapshot_dir(latest.id))
        except OSError as e:
            raise StorageError(f"Could not read tracked files: {e}") from e

    def _new_commit_id(self) -> str:
        existing = self.store.list_ids()
        for _ in range(MAX_ID_ATTEMPTS):
            commit_id = self.hasher.new_commit_id()
            if commit_id not in existing:
                return commit_id
            log_debug(f"commit id collision on {commit_id}; drawing again")
        raise StorageError("Could not allocate a unique commit id.")
