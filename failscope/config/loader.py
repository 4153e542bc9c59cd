# failscope/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.errors import ConfigError
from ..core.errors import codes


CONFIG_ENV_VAR = "FAILSCOPE_CONFIG"
USER_CONFIG_PATH = Path.home() / ".failscope" / "config.yml"


@dataclass(frozen=True)
class FailScopeConfig:
    """
    Unified failscope configuration.

    strict_clauses: require in_() and handle() markers in every frame
    log_transitions: log every frame transition at DEBUG
    log_unhandled: log kinds that reach a function boundary
    warn_undeclared: warn when a function returns a kind it did not declare
    capture_callsite: record file/function/line of each raise
    trace_path: append scope events as JSONL to this file
    """

    strict_clauses: bool = False
    log_transitions: bool = False
    log_unhandled: bool = True
    warn_undeclared: bool = True
    capture_callsite: bool = True
    trace_path: Optional[str] = None

    @classmethod
    def default(cls) -> "FailScopeConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FailScopeConfig":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(
                message=f"Unknown config keys: {', '.join(unknown)}",
                error_code=codes.CONFIG_INVALID,
                details={"unknown": unknown},
            )

        values: Dict[str, Any] = {}
        for name, value in data.items():
            if name == "trace_path":
                values[name] = None if value in (None, "") else str(value)
            elif isinstance(value, bool):
                values[name] = value
            else:
                raise ConfigError(
                    message=f"'{name}' must be true or false, got {value!r}",
                    error_code=codes.CONFIG_INVALID,
                    details={"key": name, "value": repr(value)},
                )
        return cls(**values)

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "FailScopeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML file. If None, tries:
                1. $FAILSCOPE_CONFIG
                2. ~/.failscope/config.yml
                3. code defaults

        Returns:
            FailScopeConfig instance

        Raises:
            ConfigError: file missing or unreadable, malformed YAML or bad values
        """
        if config_path is not None:
            path = Path(config_path)
        else:
            path = _discover_config_path()
            if path is None:
                return cls.default()

        # explicit path or $FAILSCOPE_CONFIG: both must exist
        if not path.exists():
            raise ConfigError(
                message=f"Config file not found: {path}",
                error_code=codes.CONFIG_NOT_FOUND,
                details={"path": str(path)},
            )

        try:
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(
                message=f"Malformed YAML in {path}: {e}",
                error_code=codes.CONFIG_INVALID,
                details={"path": str(path)},
                cause=e,
            ) from e
        except OSError as e:
            raise ConfigError(
                message=f"Cannot read config file {path}: {e}",
                error_code=codes.CONFIG_INVALID,
                details={"path": str(path)},
                cause=e,
            ) from e

        if not isinstance(raw, dict):
            raise ConfigError(
                message=f"Config root must be a mapping: {path}",
                error_code=codes.CONFIG_INVALID,
                details={"path": str(path)},
            )

        # Accept both flat keys and a top-level "failscope:" section
        section = raw.get("failscope", raw)
        if not isinstance(section, dict):
            raise ConfigError(
                message=f"'failscope' section must be a mapping: {path}",
                error_code=codes.CONFIG_INVALID,
                details={"path": str(path)},
            )
        return cls.from_dict(section)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _discover_config_path() -> Optional[Path]:
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    if USER_CONFIG_PATH.exists():
        return USER_CONFIG_PATH
    return None


_config: Optional[FailScopeConfig] = None
_config_lock = threading.Lock()


def load_config(config_path: Optional[Path] = None) -> FailScopeConfig:
    """
    Get the process-wide configuration (loaded once, then cached).

    Passing ``config_path`` forces a reload from that file.
    """
    global _config

    if _config is None or config_path is not None:
        with _config_lock:
            if _config is None or config_path is not None:
                _config = FailScopeConfig.from_yaml(config_path)
    return _config


def set_config(config: FailScopeConfig) -> None:
    global _config

    with _config_lock:
        _config = config
    _reset_recorder()


def reset_config() -> None:
    global _config

    with _config_lock:
        _config = None
    _reset_recorder()


def _reset_recorder() -> None:
    from ..core.trace.recorder import reset_default_recorder

    reset_default_recorder()
