"""Configuration management for SVCS."""

from .types import ChangeDetection, SvcsSettings, DEFAULT_STORAGE_DIR
from .loader import ConfigLoader

__all__ = [
    "ChangeDetection",
    "SvcsSettings",
    "DEFAULT_STORAGE_DIR",
    "ConfigLoader",
]
