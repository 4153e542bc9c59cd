# failscope/core/scope/phases.py
from __future__ import annotations

from enum import Enum


class FramePhase(str, Enum):
    """Lifecycle of one scope frame."""
    DECLARED = "declared"      # clauses being collected
    ENTERED = "entered"        # binding being classified
    PROTECTED = "protected"    # primary body running
    RAISED = "raised"          # a kind is pending, dispatch not yet done
    HANDLING = "handling"      # a handler body is running
    FINALIZING = "finalizing"  # finalizer running
    CLOSED = "closed"


class Clause(str, Enum):
    """Clause markers, in the only order they may appear."""
    TRY = "try"
    IN = "in"
    HANDLE = "handle"
    CATCH = "catch"
    CATCH_ANY = "catch_any"
    FINALLY = "finally"


# clause -> clauses allowed to come right before it
ALLOWED_AFTER = {
    Clause.IN: {Clause.TRY},
    Clause.HANDLE: {Clause.TRY, Clause.IN},
    Clause.CATCH: {Clause.TRY, Clause.IN, Clause.HANDLE, Clause.CATCH},
    Clause.CATCH_ANY: {Clause.TRY, Clause.IN, Clause.HANDLE, Clause.CATCH},
    Clause.FINALLY: {Clause.TRY, Clause.IN, Clause.HANDLE, Clause.CATCH, Clause.CATCH_ANY},
}
