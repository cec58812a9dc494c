"""Environment utilities for SVCS."""

from __future__ import annotations

import os
from pathlib import Path


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.
    
    Returns:
        True if SVCS_DEBUG is set to a truthy value
    """
    val = os.environ.get("SVCS_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def get_home_dir() -> Path:
    """Get user home directory."""
    return Path.home()


def get_global_svcs_dir() -> Path:
    """Get global SVCS directory (~/.svcs).
    
    Returns:
        Path to global settings directory
    """
    return get_home_dir() / ".svcs"


def get_work_root() -> Path:
    """Get the working root whose files are tracked.

    SVCS_ROOT wins over the current directory.
    """
    val = os.environ.get("SVCS_ROOT")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()
