# failscope/core/errors/__init__.py
"""
Error types for failscope itself.

This package defines the exceptions raised when the protocol is misused
or configuration is broken. Error kinds flowing through scopes live in
failscope.core.kinds and are not exceptions.

No side effects on import.
"""

from . import codes
from .exceptions import FailScopeError, ProtocolError, ConfigError

__all__ = [
    "codes",
    "FailScopeError",
    "ProtocolError",
    "ConfigError",
]
