from __future__ import annotations

from pathlib import Path

from ..utils.fs import atomic_write
from .errors import StorageError


class UserConfig:
    """The stored username, overwritten wholesale on every set."""

    def __init__(self, config_file: Path):
        self.config_file = Path(config_file)

    def get(self) -> str:
        try:
            return self.config_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as e:
            raise StorageError(f"Could not read config: {e}") from e

    def set(self, username: str) -> None:
        try:
            atomic_write(self.config_file, username)
        except OSError as e:
            raise StorageError(f"Could not write config: {e}") from e
