# failscope/core/trace/events.py
"""
Scope trace event models.

One event per scope-machine transition. Events are JSON-serializable so a
run can be written as JSONL and inspected afterwards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


SCHEMA_VERSION = "failscope.trace.v1"


def utc_now_iso() -> str:
    """Get current UTC time in ISO8601 format"""
    return datetime.now(timezone.utc).isoformat()


class EventType(str, Enum):
    # function boundary
    FUNCTION_ENTER = "FUNCTION_ENTER"
    FUNCTION_EXIT = "FUNCTION_EXIT"

    # frame lifecycle
    FRAME_ENTER = "FRAME_ENTER"
    FRAME_RAISED = "FRAME_RAISED"
    HANDLER_MATCHED = "HANDLER_MATCHED"
    HANDLER_MISSED = "HANDLER_MISSED"
    FRAME_FINALIZED = "FRAME_FINALIZED"
    FRAME_PROPAGATED = "FRAME_PROPAGATED"


class CallSiteModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    function: str
    lineno: int


class ScopeEvent(BaseModel):
    """
    A single scope transition.

    Core fields:
    - type: what happened
    - function: qualified name of the enclosing throws() function, if any
    - frame_id / depth: which frame, and how deeply nested (0 = outermost)
    - kind: kind name at the time of the event (NO_ERROR when clean)
    """
    model_config = ConfigDict(frozen=True)

    schema_: str = Field(default=SCHEMA_VERSION, alias="schema")
    seq: int
    ts: str = Field(default_factory=utc_now_iso)
    type: EventType
    function: Optional[str] = None
    frame_id: Optional[int] = None
    depth: Optional[int] = None
    kind: str = "NO_ERROR"
    phase: Optional[str] = None
    callsite: Optional[CallSiteModel] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
