#!/usr/bin/env python3
"""
Configuration Loader

Loads optional defaults from a YAML file (``--config``, ``$VASGOTOOLS_CONFIG``
or ``.vasgotools.yaml`` in the working directory) with safe fallbacks when
the file or fields are missing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV = "VASGOTOOLS_CONFIG"
CONFIG_FILENAME = ".vasgotools.yaml"

PREFIX_ALIASES: Dict[str, str] = {
    "vas": "github.com/muellerbbm-vas/",
    "slb": "github.com/mbbm-slb/",
}


@dataclass
class ToolsConfig:
    module_prefix: str = "none"
    prefix_aliases: Dict[str, str] = field(default_factory=lambda: dict(PREFIX_ALIASES))

    go_path: str = "go"
    git_path: str = "git"
    editor_command: str = "code"

    no_git: bool = False
    no_code: bool = False

    submodules_keep_going: bool = False

    source: Optional[Path] = None

    def resolve_prefix(self, value: Optional[str] = None) -> str:
        """Map a --module-prefix value to the actual module path prefix."""
        value = self.module_prefix if value is None else value
        if not value or value == "none":
            return ""
        return self.prefix_aliases.get(value, value)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def find_config_file(explicit: Optional[Path] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)
    candidate = (Path.cwd() if cwd is None else cwd) / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(path: Optional[Path] = None, cwd: Optional[Path] = None) -> ToolsConfig:
    cfg = ToolsConfig()
    cfg_path = find_config_file(path, cwd)
    if cfg_path is None:
        return cfg
    if not cfg_path.exists():
        # An explicitly requested file must exist; the implicit one is optional
        raise ConfigurationError(f"Config file not found: {cfg_path}")

    data = _read_yaml(cfg_path)
    cfg.source = cfg_path

    cfg.module_prefix = str(data.get("module_prefix", cfg.module_prefix))
    aliases = data.get("prefix_aliases") or {}
    if not isinstance(aliases, dict):
        raise ConfigurationError("prefix_aliases must be a mapping")
    cfg.prefix_aliases.update({str(k): str(v) for k, v in aliases.items()})

    paths = data.get("paths") or {}
    cfg.go_path = str(paths.get("go", cfg.go_path))
    cfg.git_path = str(paths.get("git", cfg.git_path))
    cfg.editor_command = str(paths.get("editor", cfg.editor_command))

    defaults = data.get("defaults") or {}
    cfg.no_git = bool(defaults.get("no_git", cfg.no_git))
    cfg.no_code = bool(defaults.get("no_code", cfg.no_code))

    sub = data.get("submodules") or {}
    cfg.submodules_keep_going = bool(sub.get("keep_going", cfg.submodules_keep_going))

    logger.debug("Loaded configuration from %s", cfg_path)
    return cfg
