"""SVCS - a minimal local version-control system.

Tracks user-chosen files, snapshots them into per-commit directories
and restores a prior snapshot on demand.
"""

__version__ = "1.0.0"
