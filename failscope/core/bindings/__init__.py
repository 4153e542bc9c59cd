# failscope/core/bindings/__init__.py
"""
Binding forms: LET / MAYBE / ENSURE / TRYE / CHECK.

No side effects on import.
"""

from .forms import (
    Binding,
    Let,
    Maybe,
    Ensure,
    TryErrno,
    CheckErrno,
    let_,
    maybe,
    ensure,
    trye,
    check,
    classify,
)

__all__ = [
    "Binding",
    "Let",
    "Maybe",
    "Ensure",
    "TryErrno",
    "CheckErrno",
    "let_",
    "maybe",
    "ensure",
    "trye",
    "check",
    "classify",
]
