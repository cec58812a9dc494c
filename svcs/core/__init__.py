"""Core modules for SVCS."""

from .commit_log import CommitLog, CommitRecord
from .commit_store import CommitStore
from .engine import Engine
from .errors import (
    InvalidPathError,
    MissingArgumentError,
    NotFoundError,
    StorageError,
    SvcsError,
)
from .hasher import ChangeDetector, ContentHasher, get_change_detector
from .index import Index
from .layout import RepoLayout
from .user_config import UserConfig

__all__ = [
    "ChangeDetector",
    "CommitLog",
    "CommitRecord",
    "CommitStore",
    "ContentHasher",
    "Engine",
    "Index",
    "InvalidPathError",
    "MissingArgumentError",
    "NotFoundError",
    "RepoLayout",
    "StorageError",
    "SvcsError",
    "UserConfig",
    "get_change_detector",
]
