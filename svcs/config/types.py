"""Configuration schemas for SVCS."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ChangeDetection = Literal["sum", "digest"]

DEFAULT_STORAGE_DIR = "vcs"


@dataclass
class SvcsSettings:
    """Tool settings (not the commit author, which lives in config.txt)."""
    storage_dir: str = DEFAULT_STORAGE_DIR
    change_detection: ChangeDetection = "sum"

    @classmethod
    def from_dict(cls, data: dict) -> SvcsSettings:
        """Create SvcsSettings from dictionary.

        Unknown or malformed values fall back to defaults.
        """
        storage_val = data.get("storageDir", DEFAULT_STORAGE_DIR)
        storage_dir = DEFAULT_STORAGE_DIR
        if isinstance(storage_val, str):
            candidate = storage_val.strip().strip("/")
            if candidate and candidate not in (".", "..") and "/" not in candidate:
                storage_dir = candidate

        detection_val = data.get("changeDetection", "sum")
        detection: ChangeDetection = "sum"
        if isinstance(detection_val, str) and detection_val in {"sum", "digest"}:
            detection = detection_val

        return cls(storage_dir=storage_dir, change_detection=detection)
