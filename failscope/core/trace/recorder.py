# failscope/core/trace/recorder.py
"""
Trace recorders.

The active recorder is held in a ContextVar so every call stack (thread or
task) can record into its own sink.
"""

from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, List, Optional

from .events import EventType, ScopeEvent


class TraceRecorder:
    """Base recorder. Subclasses implement record()."""

    def record(self, event: ScopeEvent) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullTraceRecorder(TraceRecorder):
    def record(self, event: ScopeEvent) -> None:
        pass


class MemoryTraceRecorder(TraceRecorder):
    """Keeps events in a list. Used by tests and the demo command."""

    def __init__(self) -> None:
        self.events: List[ScopeEvent] = []
        self._lock = threading.Lock()

    def record(self, event: ScopeEvent) -> None:
        with self._lock:
            self.events.append(event)

    def of_type(self, *types: EventType) -> List[ScopeEvent]:
        return [e for e in self.events if e.type in types]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


class JsonlTraceRecorder(TraceRecorder):
    """Appends one JSON object per event. Thread-safe."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._fh = self.path.open("a", encoding="utf-8")

    def record(self, event: ScopeEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        with self._lock:
            self._fh.write(line + "\n")
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            if not self._fh.closed:
                self._fh.close()


_NULL = NullTraceRecorder()

CURRENT_RECORDER: ContextVar[Optional[TraceRecorder]] = ContextVar(
    "FAILSCOPE_CURRENT_RECORDER",
    default=None,
)

_default_recorder: Optional[TraceRecorder] = None
_default_lock = threading.Lock()


def _resolve_default() -> TraceRecorder:
    """Default recorder from config: JSONL if trace_path is set, else null."""
    global _default_recorder

    if _default_recorder is None:
        with _default_lock:
            if _default_recorder is None:
                from ...config import load_config

                path = load_config().trace_path
                _default_recorder = JsonlTraceRecorder(path) if path else _NULL
    return _default_recorder


def reset_default_recorder() -> None:
    """Drop the cached default recorder (after a config change)."""
    global _default_recorder

    with _default_lock:
        if _default_recorder is not None:
            _default_recorder.close()
        _default_recorder = None


def get_recorder() -> TraceRecorder:
    return CURRENT_RECORDER.get() or _resolve_default()


@contextmanager
def recording(recorder: Optional[TraceRecorder] = None) -> Iterator[TraceRecorder]:
    """
    Install a recorder for the current context.

    Example:
        >>> with recording() as rec:
        ...     do_work()
        >>> [e.type for e in rec.events]
    """
    recorder = recorder if recorder is not None else MemoryTraceRecorder()
    token = CURRENT_RECORDER.set(recorder)
    try:
        yield recorder
    finally:
        CURRENT_RECORDER.reset(token)
