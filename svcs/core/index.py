"""Tracked-file index for SVCS.

``index.txt`` is a whitespace-separated token stream, each path followed
by a single space. Entries are append-only and duplicates are kept.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..utils.fs import append_durable
from ..utils.log import log_debug
from .errors import InvalidPathError, NotFoundError, StorageError


class Index:
    """Persistent ordered list of tracked paths."""

    def __init__(self, index_file: Path, work_root: Path, storage_dir: Path):
        """Initialize index.
        
        Args:
            index_file: Path to index.txt
            work_root: Root that tracked paths are relative to
            storage_dir: SVCS storage directory, never trackable
        """
        self.index_file = Path(index_file)
        self.work_root = Path(work_root)
        self.storage_dir = Path(storage_dir)

    def track(self, path: str) -> str:
        """Append a path to the index.
        
        Args:
            path: Path to an existing file, relative to the work root or absolute inside it
            
        Returns:
            The normalized relative path that was recorded
            
        Raises:
            NotFoundError: If the path is not an existing file
            InvalidPathError: If the path cannot be represented in the index
        """
        candidate = Path(path)
        full = candidate if candidate.is_absolute() else self.work_root / candidate
        if not full.is_file():
            raise NotFoundError(f"Can't find '{path}'.")

        rel = self._normalize(full)
        try:
            append_durable(self.index_file, f"{rel} ")
        except OSError as e:
            raise StorageError(f"Could not update index: {e}") from e
        log_debug(f"tracked {rel}")
        return rel

    def list(self) -> list[str]:
        """Return every tracked path in insertion order (duplicates included)."""
        try:
            text = self.index_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Could not read index: {e}") from e
        return text.split()

    def _normalize(self, full: Path) -> str:
        # abspath rather than resolve so symlinked files keep their own name
        root = Path(os.path.abspath(self.work_root))
        absolute = Path(os.path.abspath(full))
        try:
            rel = absolute.relative_to(root)
        except ValueError:
            raise InvalidPathError(f"'{full}' is outside {root}.") from None

        storage = Path(os.path.abspath(self.storage_dir))
        if absolute == storage or storage in absolute.parents:
            raise InvalidPathError(f"'{rel.as_posix()}' is inside the SVCS storage directory.")

        text = rel.as_posix()
        if any(ch.isspace() for ch in text):
            raise InvalidPathError(f"'{text}' contains whitespace and cannot be tracked.")
        return text
