# failscope/core/scope/__init__.py
"""
Scope machine, propagation controller and function-boundary adapter.

No side effects on import.
"""

from .phases import FramePhase, Clause
from .frame import Frame, try_
from .propagation import KindRaised, throw, rethrow, return_, current_kind, is_raising
from .context import FunctionContext, throws

__all__ = [
    "FramePhase",
    "Clause",
    "Frame",
    "try_",
    "KindRaised",
    "throw",
    "rethrow",
    "return_",
    "current_kind",
    "is_raising",
    "FunctionContext",
    "throws",
]
