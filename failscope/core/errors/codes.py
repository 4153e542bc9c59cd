# failscope/core/errors/codes.py
from __future__ import annotations

from typing import Final


# ---- canonical error codes (stable public contract) ----
# generic
UNKNOWN: Final[str] = "UNKNOWN"
INTERNAL_ERROR: Final[str] = "INTERNAL_ERROR"
INVALID_ARGUMENT: Final[str] = "INVALID_ARGUMENT"

# protocol misuse
INVALID_KIND: Final[str] = "INVALID_KIND"
CLAUSE_ORDER: Final[str] = "CLAUSE_ORDER"
CLAUSE_MISSING: Final[str] = "CLAUSE_MISSING"
FRAME_REUSED: Final[str] = "FRAME_REUSED"
THROW_OUTSIDE_SCOPE: Final[str] = "THROW_OUTSIDE_SCOPE"
RETHROW_OUTSIDE_HANDLER: Final[str] = "RETHROW_OUTSIDE_HANDLER"
CONTEXT_CLOSED: Final[str] = "CONTEXT_CLOSED"

# config
CONFIG_INVALID: Final[str] = "CONFIG_INVALID"
CONFIG_NOT_FOUND: Final[str] = "CONFIG_NOT_FOUND"


# ---- semantic groups (internal helpers) ----

PROTOCOL_CODES: Final[set[str]] = {
    INVALID_KIND,
    CLAUSE_ORDER,
    CLAUSE_MISSING,
    FRAME_REUSED,
    THROW_OUTSIDE_SCOPE,
    RETHROW_OUTSIDE_HANDLER,
    CONTEXT_CLOSED,
}

CONFIG_CODES: Final[set[str]] = {
    CONFIG_INVALID,
    CONFIG_NOT_FOUND,
}

# Codes kept as-is by _normalize_error_code. Anything else downgrades to UNKNOWN.
KNOWN_CODES: Final[set[str]] = {
    UNKNOWN,
    INTERNAL_ERROR,
    INVALID_ARGUMENT,
} | PROTOCOL_CODES | CONFIG_CODES
