# failscope/config/__init__.py
"""
failscope configuration

Design principles:
1. Code has defaults, YAML is optional input
2. One flat, frozen config object for the whole process
"""

from .loader import (
    FailScopeConfig,
    CONFIG_ENV_VAR,
    USER_CONFIG_PATH,
    load_config,
    set_config,
    reset_config,
)
from .validator import validate_config, ConfigIssue

__all__ = [
    "FailScopeConfig",
    "CONFIG_ENV_VAR",
    "USER_CONFIG_PATH",
    "load_config",
    "set_config",
    "reset_config",
    "validate_config",
    "ConfigIssue",
]
