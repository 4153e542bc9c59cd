# failscope/__init__.py
"""
failscope - structured error-kind propagation with guaranteed cleanup

A function declares the kinds it may fail with, opens protected scopes on
bindings, and returns a single error kind to its caller. Every scope's
finalizer runs exactly once, innermost first, on every exit path.

User-facing API:
- throws(): function boundary (decorator or context manager)
- try_(): open a scope; .in_() .handle() .catch() .catch_any() .finally_()
- let_(), maybe(), ensure(), trye(), check(): binding forms
- throw(), rethrow(), return_(): propagation
- ErrorKind, NoError, EarlyReturn: the kind taxonomy

Basic usage:
    >>> from failscope import throws, try_, maybe, throw, ErrorKind
    >>> @throws(ErrorKind.NO_MEMORY)
    ... def fill(size):
    ...     (try_(maybe(lambda: bytearray(size), ErrorKind.NO_MEMORY))
    ...         .in_(lambda buf: buf.extend(b"x"))
    ...         .handle()
    ...         .catch_any(lambda kind: print("allocation failed", kind.name))
    ...         .finally_(lambda buf: buf and buf.clear()))
    >>> fill(16)
    <NO_ERROR>

Composition (a callee's kind feeds the caller's scope):
    >>> @throws()
    ... def outer():
    ...     try_(fill(16)).in_(lambda _: None).finally_()
"""

__version__ = "0.1.0"

from .core.kinds import (
    Sentinel,
    NoError,
    EarlyReturn,
    ErrorKind,
    KindCategory,
    is_kind,
    kind_code,
    kind_name,
    category_of,
    from_errno,
    errno_aliases,
    is_ambiguous_errno,
)
from .core.outcome import Bound, Failed, Outcome
from .core.bindings import let_, maybe, ensure, trye, check, classify
from .core.scope import (
    Frame,
    FramePhase,
    try_,
    throw,
    rethrow,
    return_,
    current_kind,
    FunctionContext,
    throws,
)
from .core.errors import FailScopeError, ProtocolError, ConfigError
from .core.trace import (
    ScopeEvent,
    EventType,
    MemoryTraceRecorder,
    JsonlTraceRecorder,
    NullTraceRecorder,
    recording,
)
from .config import FailScopeConfig, load_config, set_config, reset_config

__all__ = [
    # Version
    "__version__",

    # Kinds
    "Sentinel",
    "NoError",
    "EarlyReturn",
    "ErrorKind",
    "KindCategory",
    "is_kind",
    "kind_code",
    "kind_name",
    "category_of",
    "from_errno",
    "errno_aliases",
    "is_ambiguous_errno",

    # Outcome
    "Bound",
    "Failed",
    "Outcome",

    # Bindings
    "let_",
    "maybe",
    "ensure",
    "trye",
    "check",
    "classify",

    # Scope machine
    "Frame",
    "FramePhase",
    "try_",
    "throw",
    "rethrow",
    "return_",
    "current_kind",
    "FunctionContext",
    "throws",

    # Errors
    "FailScopeError",
    "ProtocolError",
    "ConfigError",

    # Trace
    "ScopeEvent",
    "EventType",
    "MemoryTraceRecorder",
    "JsonlTraceRecorder",
    "NullTraceRecorder",
    "recording",

    # Config
    "FailScopeConfig",
    "load_config",
    "set_config",
    "reset_config",
]
