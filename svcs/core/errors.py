"""Errors raised by the SVCS stores and surfaced by the engine."""

from __future__ import annotations


class SvcsError(Exception):
    """Base class for user-facing SVCS failures."""

    kind = "error"


class MissingArgumentError(SvcsError):
    """A required message, commit id or path was omitted."""

    kind = "missing_argument"


class NotFoundError(SvcsError):
    """A referenced file or commit does not exist."""

    kind = "not_found"


class InvalidPathError(SvcsError):
    """A path cannot be recorded in the index."""

    kind = "invalid_path"


class StorageError(SvcsError):
    """A read, write or copy failed at the file system boundary."""

    kind = "io"
