"""Update run configuration.

Options can come from a YAML/JSON file (optionally nested under a
``use-releases`` section) and from CLI flags; CLI values win.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateConfig:
    """Options controlling snapshot replacement."""
    allow_range_matching: bool = False
    pad_version_for_range_matching: bool = False
    dependencies_property_file: Optional[str] = None
    fail_if_not_replaced: bool = False
    process_parent: bool = False
    process_dependency_management: bool = True
    process_dependencies: bool = True
    exclude_reactor: bool = True
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    repositories: List[str] = field(default_factory=lambda: [Constants.MAVEN_CENTRAL_URL])
    generate_backup_poms: bool = True


# Option names as they appear in config files.
OPTION_NAMES: Dict[str, str] = {
    "allowRangeMatching": "allow_range_matching",
    "padVersionForRangeMatching": "pad_version_for_range_matching",
    "dependenciesPropertyFile": "dependencies_property_file",
    "failIfNotReplaced": "fail_if_not_replaced",
    "processParent": "process_parent",
    "processDependencyManagement": "process_dependency_management",
    "processDependencies": "process_dependencies",
    "excludeReactor": "exclude_reactor",
    "includes": "includes",
    "excludes": "excludes",
    "repositories": "repositories",
    "generateBackupPoms": "generate_backup_poms",
}

_FIELD_TYPES = {f.name: f.type for f in fields(UpdateConfig)}


def _coerce(name: str, value: Any) -> Any:
    kind = _FIELD_TYPES[name]
    if kind == "bool":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ConfigError(f"Option {name} expects a boolean, got {value!r}")
    if kind == "List[str]":
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return list(value)
        raise ConfigError(f"Option {name} expects a list of strings, got {value!r}")
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"Option {name} expects a string, got {value!r}")


def config_from_mapping(data: Mapping[str, Any], base: Optional[UpdateConfig] = None) -> UpdateConfig:
    """Build a config from file-style option names.

    Both camelCase option names and snake_case field names are accepted.
    Unknown keys are logged and ignored.
    """
    updates: Dict[str, Any] = {}
    for key, value in data.items():
        name = OPTION_NAMES.get(key, key if key in _FIELD_TYPES else None)
        if name is None:
            logger.warning("Ignoring unknown configuration option: %s", key)
            continue
        updates[name] = _coerce(name, value)
    return replace(base or UpdateConfig(), **updates)


def load_config_file(path: str) -> Dict[str, Any]:
    """Load options from a YAML, YML or JSON file.

    Raises:
        ConfigError: the file is missing, unparseable or not a mapping.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"Section {Constants.CONFIG_SECTION} in {path} must be a mapping")
    return section


def build_config(config_path: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> UpdateConfig:
    """Merge file options with CLI overrides; None overrides are ignored."""
    config = UpdateConfig()
    if config_path:
        config = config_from_mapping(load_config_file(config_path), config)
    if overrides:
        present = {k: v for k, v in overrides.items() if v is not None}
        config = config_from_mapping(present, config)
    return config
