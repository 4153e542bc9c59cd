# failscope/core/scope/state.py
"""
Per-call-stack scope state.

ContextVars give every thread and asyncio task its own chain of frames and
its own function context; nothing here is shared between call stacks.
"""

from __future__ import annotations

import itertools
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..kinds import kind_name
from ..trace import EventType, ScopeEvent, CallSiteModel, NullTraceRecorder, get_recorder

if TYPE_CHECKING:
    from .frame import Frame
    from .context import FunctionContext
    from ...utils.callsite import CallSite


CURRENT_FRAME: ContextVar[Optional["Frame"]] = ContextVar(
    "FAILSCOPE_CURRENT_FRAME",
    default=None,
)

CURRENT_FUNCTION: ContextVar[Optional["FunctionContext"]] = ContextVar(
    "FAILSCOPE_CURRENT_FUNCTION",
    default=None,
)

_seq = itertools.count(1)


def emit(
    type: EventType,
    *,
    kind: Any,
    function: Optional["FunctionContext"] = None,
    frame: Optional["Frame"] = None,
    callsite: Optional["CallSite"] = None,
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """Build a ScopeEvent and hand it to the active recorder."""
    recorder = get_recorder()
    if isinstance(recorder, NullTraceRecorder):
        return

    event = ScopeEvent(
        seq=next(_seq),
        type=type,
        function=function.name if function is not None else None,
        frame_id=frame.frame_id if frame is not None else None,
        depth=frame.depth if frame is not None else None,
        kind=kind_name(kind),
        phase=frame.phase.value if frame is not None else None,
        callsite=(
            CallSiteModel(
                filename=callsite.filename,
                function=callsite.function,
                lineno=callsite.lineno,
            )
            if callsite is not None
            else None
        ),
        data=data or {},
    )
    recorder.record(event)
