# failscope/core/scope/propagation.py
"""
Propagation controller: THROW / RETHROW / RETURN.

A raise is a structured non-local exit. ``KindRaised`` derives from
BaseException so an ``except Exception`` inside a body does not swallow it;
it is caught only by the enclosing frame or by the function boundary.
"""

from __future__ import annotations

from typing import Any, Optional

from ...config import load_config
from ...utils.callsite import CallSite, capture_callsite
from ..errors import ProtocolError
from ..errors import codes
from ..kinds import EarlyReturn, Kind, NoError, is_kind, kind_name
from .phases import FramePhase
from .state import CURRENT_FRAME, CURRENT_FUNCTION


class KindRaised(BaseException):
    """Carries a raised kind to the nearest frame or function boundary."""

    __slots__ = ("kind", "callsite", "rethrown")

    def __init__(self, kind: Kind, callsite: Optional[CallSite] = None, rethrown: bool = False):
        self.kind = kind
        self.callsite = callsite
        self.rethrown = rethrown
        super().__init__(kind_name(kind))

    def __repr__(self) -> str:
        return f"KindRaised({kind_name(self.kind)})"


def _callsite() -> Optional[CallSite]:
    if not load_config().capture_callsite:
        return None
    return capture_callsite(skip=3)


def _require_scope(operation: str) -> None:
    if CURRENT_FRAME.get() is None and CURRENT_FUNCTION.get() is None:
        raise ProtocolError.outside_scope(operation)


def throw(kind: Kind) -> None:
    """
    THROW: raise ``kind``.

    Inside a frame's protected body the same frame dispatches on it; inside
    a handler or finalizer it goes to the enclosing frame.
    """
    if kind is EarlyReturn:
        return_()
    if kind is NoError or not is_kind(kind):
        raise ProtocolError.invalid_kind(kind)
    _require_scope("throw")
    raise KindRaised(kind, _callsite())


def rethrow() -> None:
    """RETHROW: re-raise the kind being handled, unchanged, to the enclosing scope."""
    frame = CURRENT_FRAME.get()
    if frame is None or frame.phase is not FramePhase.HANDLING:
        raise ProtocolError(
            message="rethrow() is only valid while a handler runs",
            error_code=codes.RETHROW_OUTSIDE_HANDLER,
            details={"phase": frame.phase.value if frame is not None else None},
        )
    raise KindRaised(frame.kind, _callsite(), rethrown=True)


def return_() -> None:
    """RETURN: leave the function early. Finalizers run; callers see NoError."""
    _require_scope("return_")
    raise KindRaised(EarlyReturn, _callsite())


def current_kind() -> Any:
    """
    Kind of the innermost active frame, else of the current function context.

    Inside a finalizer this is the kind about to propagate.
    """
    frame = CURRENT_FRAME.get()
    if frame is not None:
        return frame.kind
    fn = CURRENT_FUNCTION.get()
    if fn is not None:
        return fn.kind
    return NoError


def is_raising() -> bool:
    return current_kind() is not NoError
