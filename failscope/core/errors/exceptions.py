# failscope/core/errors/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import codes


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unstringifiable>"


def _normalize_error_code(code: Any) -> str:
    """
    Keep error_code stable and finite.
    Unknown codes should not leak into logs as free-form strings.
    """
    c = _safe_str(code or codes.UNKNOWN).strip() or codes.UNKNOWN
    if c in codes.KNOWN_CODES:
        return c
    return codes.UNKNOWN


@dataclass
class FailScopeError(Exception):
    """
    Base exception for failscope itself.

    Kinds raised through the scope machine are NOT exceptions; this type is
    reserved for misuse of the library and configuration failures.
    """
    message: str
    error_code: str = codes.UNKNOWN
    details: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        self.error_code = _normalize_error_code(self.error_code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class ProtocolError(FailScopeError):
    """
    A program violated the structural rules of the protocol
    (clause order, reused frame, raise outside a protected scope, ...).
    """

    # -------- factories --------

    @classmethod
    def invalid_kind(cls, value: Any) -> "ProtocolError":
        return cls(
            message=f"{value!r} is not an error kind",
            error_code=codes.INVALID_KIND,
            details={"value": _safe_str(value), "type": type(value).__name__},
        )

    @classmethod
    def clause_order(cls, clause: str, after: str) -> "ProtocolError":
        return cls(
            message=f"'{clause}' cannot follow '{after}'",
            error_code=codes.CLAUSE_ORDER,
            details={"clause": clause, "after": after},
        )

    @classmethod
    def clause_missing(cls, clause: str, before: str) -> "ProtocolError":
        return cls(
            message=f"'{clause}' is required before '{before}' in strict mode",
            error_code=codes.CLAUSE_MISSING,
            details={"clause": clause, "before": before},
        )

    @classmethod
    def outside_scope(cls, operation: str) -> "ProtocolError":
        return cls(
            message=f"{operation}() used outside of any protected scope or throws() function",
            error_code=codes.THROW_OUTSIDE_SCOPE,
            details={"operation": operation},
        )


@dataclass
class ConfigError(FailScopeError):
    """Configuration could not be loaded or is invalid."""

    error_code: str = codes.CONFIG_INVALID
