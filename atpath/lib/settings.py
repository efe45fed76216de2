"""Settings management for atpath.

Simple, scope-aware YAML settings. Every key has a built-in default, so an
empty or missing settings file is a valid configuration.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from ..paths import REPOS_MARKER

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]

DEFAULT_SUGGESTION_LIMIT = 50
DEFAULT_DOCUMENT_SUFFIXES = [".md"]


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for standard atpath layout."""
        return cls(
            global_settings=Path.home() / ".atpath" / "settings.yaml",
            project_settings=Path.cwd() / ".atpath" / "settings.yaml",
            local_settings=Path.cwd() / ".atpath" / "settings.local.yaml",
        )


class AppSettings:
    """Settings manager with scope-aware merging.

    Scope priority (most specific wins):
    1. local (.atpath/settings.local.yaml) - gitignored, machine-specific
    2. project (.atpath/settings.yaml) - committed, shared with the vault
    3. global (~/.atpath/settings.yaml) - user defaults

    Environment variables ATPATH_MARKER and ATPATH_SUGGESTION_LIMIT win over
    every file scope.

    Usage:
        settings = AppSettings()
        marker = settings.get_marker()  # "_repos" unless configured
        settings.set_value("suggestion_limit", 20, scope="project")
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for path in [self.paths.global_settings, self.paths.project_settings, self.paths.local_settings]:
            if path.exists():
                try:
                    with open(path, encoding="utf-8") as f:
                        content = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Skipping unreadable settings file {path}: {e}")
                    continue
                if not isinstance(content, dict):
                    logger.warning(f"Skipping settings file {path}: expected a mapping")
                    continue
                result = self._deep_merge(result, content)
        return result

    # ----- Reference settings -----

    def get_marker(self) -> str:
        """Get the marker segment that introduces repository names."""
        env_marker = os.environ.get("ATPATH_MARKER")
        if env_marker:
            return env_marker.strip("/")
        marker = self.get_merged_settings().get("marker")
        if isinstance(marker, str) and marker.strip("/"):
            return marker.strip("/")
        return REPOS_MARKER

    def get_suggestion_limit(self) -> int:
        """Get the maximum number of autocomplete suggestions."""
        raw = os.environ.get("ATPATH_SUGGESTION_LIMIT")
        if raw is None:
            raw = self.get_merged_settings().get("suggestion_limit")
        try:
            limit = int(raw) if raw is not None else DEFAULT_SUGGESTION_LIMIT
        except (TypeError, ValueError):
            logger.warning(f"Invalid suggestion_limit {raw!r}, using {DEFAULT_SUGGESTION_LIMIT}")
            return DEFAULT_SUGGESTION_LIMIT
        return limit if limit > 0 else DEFAULT_SUGGESTION_LIMIT

    def get_document_suffixes(self) -> list[str]:
        """Get file suffixes of documents scanned during rename propagation."""
        suffixes = self.get_merged_settings().get("document_suffixes")
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        if not isinstance(suffixes, list) or not suffixes:
            return list(DEFAULT_DOCUMENT_SUFFIXES)
        return [s if s.startswith(".") else f".{s}" for s in suffixes if isinstance(s, str) and s]

    def get_ignore_hidden(self) -> bool:
        """Whether dot-files and dot-directories stay out of the corpus."""
        value = self.get_merged_settings().get("ignore_hidden", True)
        return bool(value)

    def set_value(self, key: str, value: Any, scope: Scope = "global") -> None:
        """Set a single setting at specified scope."""
        self._update_setting(key, value, scope)

    def remove_value(self, key: str, scope: Scope = "global") -> None:
        """Remove a setting from specified scope."""
        self._remove_setting(key, scope)

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        """Get settings file path for scope."""
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read settings from a specific scope."""
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}
        return content if isinstance(content, dict) else {}

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        """Write settings to a specific scope."""
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _update_setting(self, key: str, value: Any, scope: Scope) -> None:
        """Update a single setting at specified scope."""
        settings = self._read_scope(scope)
        settings[key] = value
        self._write_scope(scope, settings)

    def _remove_setting(self, key: str, scope: Scope) -> None:
        """Remove a setting from specified scope."""
        settings = self._read_scope(scope)
        if key in settings:
            del settings[key]
            self._write_scope(scope, settings)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


# Convenience function for quick access
def get_settings() -> AppSettings:
    """Get a settings instance with default paths."""
    return AppSettings()
