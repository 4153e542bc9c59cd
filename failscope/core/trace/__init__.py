# failscope/core/trace/__init__.py
from .events import EventType, ScopeEvent, CallSiteModel, SCHEMA_VERSION, utc_now_iso
from .recorder import (
    TraceRecorder,
    NullTraceRecorder,
    MemoryTraceRecorder,
    JsonlTraceRecorder,
    CURRENT_RECORDER,
    get_recorder,
    recording,
    reset_default_recorder,
)

__all__ = [
    "EventType",
    "ScopeEvent",
    "CallSiteModel",
    "SCHEMA_VERSION",
    "utc_now_iso",
    "TraceRecorder",
    "NullTraceRecorder",
    "MemoryTraceRecorder",
    "JsonlTraceRecorder",
    "CURRENT_RECORDER",
    "get_recorder",
    "recording",
    "reset_default_recorder",
]
