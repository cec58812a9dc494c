"""Configuration loader for SVCS.

Handles loading and merging settings from multiple sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_global_svcs_dir
from ..utils.fs import safe_json_load
from .types import SvcsSettings

PROJECT_CONFIG_NAME = ".svcs.json"


class ConfigLoader:
    """Loads and manages SVCS settings."""
    
    def __init__(self, work_root: Path | None = None):
        """Initialize config loader.
        
        Args:
            work_root: Working root directory (for project-local settings)
        """
        self.work_root = work_root
        self._settings: SvcsSettings | None = None
    
    @property
    def settings(self) -> SvcsSettings:
        """Get loaded settings, loading if necessary."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings
    
    def load(self) -> SvcsSettings:
        """Load settings from all sources.
        
        Priority (highest to lowest):
        1. Project-local settings (<work_root>/.svcs.json)
        2. Global settings (~/.svcs/config.json)
        3. Default values
        
        Returns:
            Merged SvcsSettings
        """
        merged: dict[str, Any] = {}
        
        global_path = get_global_svcs_dir() / "config.json"
        if global_path.exists():
            global_data = safe_json_load(global_path, {})
            if isinstance(global_data, dict):
                merged = self._deep_merge(merged, global_data)
        
        if self.work_root:
            project_path = self.work_root / PROJECT_CONFIG_NAME
            if project_path.exists():
                project_data = safe_json_load(project_path, {})
                if isinstance(project_data, dict):
                    merged = self._deep_merge(merged, project_data)
        
        return SvcsSettings.from_dict(merged)
    
    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.
        
        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)
            
        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
