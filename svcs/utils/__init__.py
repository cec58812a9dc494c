"""Utility modules for SVCS."""

from .fs import append_durable, atomic_write, ensure_dir, ensure_file, safe_json_load
from .env import get_global_svcs_dir, get_home_dir, get_work_root, is_debug_mode
from .log import log_debug

__all__ = [
    "append_durable",
    "atomic_write",
    "ensure_dir",
    "ensure_file",
    "safe_json_load",
    "get_global_svcs_dir",
    "get_home_dir",
    "get_work_root",
    "is_debug_mode",
    "log_debug",
]
