"""Sync configuration — which roots to read and which targets to write.

A project keeps its settings in ``skillsync.yaml``:

    source_root: ./src
    modules: [bmm, cis]
    targets: [github-copilot, claude-code]

Every value can also be given (or overridden) on the command line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from skillsync.skills import MANIFEST_FILENAME, SKILLS_FOLDER
from skillsync.sync.targets import DEFAULT_TARGETS

DEFAULT_CONFIG_FILE = "skillsync.yaml"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass
class SyncConfig:
    """Settings for discovery and sync."""

    source_root: Path | None = None
    modules: list[str] = field(default_factory=list)
    targets: list[str] = field(default_factory=lambda: list(DEFAULT_TARGETS))
    skills_folder: str = SKILLS_FOLDER
    manifest_filename: str = MANIFEST_FILENAME

    def require_source_root(self) -> Path:
        if self.source_root is None:
            raise ConfigError("No source root configured (set source_root or use --source-root)")
        return self.source_root


def load_config(path: str | Path) -> SyncConfig:
    """Load sync settings from a YAML file.

    Relative ``source_root`` values are resolved against the file's directory.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    config = SyncConfig(
        modules=_string_list(data, "modules", [], path),
        targets=_string_list(data, "targets", list(DEFAULT_TARGETS), path),
        skills_folder=_string(data, "skills_folder", SKILLS_FOLDER, path),
        manifest_filename=_string(data, "manifest_filename", MANIFEST_FILENAME, path),
    )

    source_root = data.get("source_root")
    if source_root is not None:
        if not isinstance(source_root, str) or not source_root:
            raise ConfigError(f"{path}: 'source_root' must be a non-empty string")
        root = Path(source_root).expanduser()
        config.source_root = root if root.is_absolute() else path.parent / root

    return config


def _string(data: dict, key: str, default: str, path: Path) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{path}: '{key}' must be a non-empty string")
    return value


def _string_list(data: dict, key: str, default: list[str], path: Path) -> list[str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"{path}: '{key}' must be a list of non-empty strings")
    return list(value)
