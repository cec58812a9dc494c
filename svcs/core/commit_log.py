"""Append-only commit log for SVCS.

Records are stored one JSON object per line, so messages may contain any
text. Logs written in the older ``id//author//message|||`` format are
still readable and are converted on the next append.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from ..utils.fs import append_durable, atomic_write
from ..utils.log import log_debug
from .errors import StorageError

LEGACY_RECORD_SEP = "|||"
LEGACY_FIELD_SEP = "//"


@dataclass(frozen=True)
class CommitRecord:
    """Metadata for one commit."""
    id: str
    author: str
    message: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "author": self.author, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict) -> CommitRecord:
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            author=str(data.get("author", "")),
            message=str(data.get("message", "")),
        )


class CommitLog:
    """Persistent append-only sequence of commit records."""

    EMPTY_MESSAGE = "No commits yet."

    def __init__(self, log_file: Path):
        self.log_file = Path(log_file)

    def append(self, record: CommitRecord) -> None:
        """Append a record; durable on disk before returning.
        
        Raises:
            StorageError: If the log cannot be written
        """
        line = json.dumps(record.to_dict(), ensure_ascii=False) + "\n"
        try:
            text = self._read_text()
            if self._is_legacy(text):
                converted = "".join(
                    json.dumps(r.to_dict(), ensure_ascii=False) + "\n"
                    for r in self._parse_legacy(text)
                )
                atomic_write(self.log_file, converted)
                log_debug("converted legacy log to JSON lines")
            append_durable(self.log_file, line)
        except OSError as e:
            raise StorageError(f"Could not write commit log: {e}") from e

    def all(self) -> list[CommitRecord]:
        """Return every record in insertion order."""
        text = self._read_text()
        if self._is_legacy(text):
            return self._parse_legacy(text)

        records = []
        for lineno, line in enumerate(text.splitlines(), 1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise StorageError(f"Corrupt commit log at line {lineno}: {e.msg}") from e
            if isinstance(data, dict):
                records.append(CommitRecord.from_dict(data))
        return records

    def latest(self) -> CommitRecord | None:
        records = self.all()
        return records[-1] if records else None

    def show(self) -> list[str]:
        """Human-readable lines for every commit, most recent first."""
        records = self.all()
        if not records:
            return [self.EMPTY_MESSAGE]

        lines = []
        for record in reversed(records):
            lines.append(f"commit {record.id}")
            lines.append(f"Author: {record.author}")
            lines.append(record.message)
        return lines

    def _read_text(self) -> str:
        try:
            return self.log_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as e:
            raise StorageError(f"Could not read commit log: {e}") from e

    @staticmethod
    def _is_legacy(text: str) -> bool:
        stripped = text.lstrip()
        return bool(stripped) and not stripped.startswith("{")

    @staticmethod
    def _parse_legacy(text: str) -> list[CommitRecord]:
        records = []
        for chunk in text.split(LEGACY_RECORD_SEP):
            if not chunk:
                continue
            fields = chunk.split(LEGACY_FIELD_SEP, 2)
            fields += [""] * (3 - len(fields))
            records.append(CommitRecord(id=fields[0], author=fields[1], message=fields[2]))
        return records
