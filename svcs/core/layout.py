from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config.types import DEFAULT_STORAGE_DIR
from ..utils.fs import ensure_dir, ensure_file


@dataclass(frozen=True)
class RepoLayout:
    """Locations of the persisted SVCS state under a working root."""
    work_root: Path
    storage_dir: Path

    @classmethod
    def for_root(cls, work_root: Path | str, storage_dir_name: str = DEFAULT_STORAGE_DIR) -> RepoLayout:
        root = Path(work_root)
        return cls(work_root=root, storage_dir=root / storage_dir_name)

    @property
    def config_file(self) -> Path:
        return self.storage_dir / "config.txt"

    @property
    def index_file(self) -> Path:
        return self.storage_dir / "index.txt"

    @property
    def log_file(self) -> Path:
        return self.storage_dir / "log.txt"

    @property
    def commits_dir(self) -> Path:
        return self.storage_dir / "commits"

    def ensure(self) -> None:
        """Create any missing directory or state file."""
        ensure_dir(self.storage_dir)
        ensure_file(self.config_file)
        ensure_file(self.index_file)
        ensure_file(self.log_file)
        ensure_dir(self.commits_dir)
