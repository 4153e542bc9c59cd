# failscope/core/scope/context.py
"""
Function-boundary adapter: THROWS ... DONE.

A FunctionContext is opened when a protocol function starts and closed when
it returns. It catches whatever kind reaches the boundary, maps EarlyReturn
back to NoError and hands the final kind to the caller.

Decorator form:
    >>> @throws(ErrorKind.NO_MEMORY)
    ... def load():
    ...     try_(maybe(alloc, ErrorKind.NO_MEMORY)).in_(fill).finally_(release)
    >>> load()
    <NO_ERROR>

Context manager form:
    >>> def load():
    ...     with throws(ErrorKind.NO_MEMORY) as fn:
    ...         try_(maybe(alloc, ErrorKind.NO_MEMORY)).in_(fill).finally_(release)
    ...     return fn.done()
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional, Tuple

from ...config import load_config
from ..errors import ProtocolError
from ..errors import codes
from ..kinds import EarlyReturn, Kind, NoError, Sentinel, is_kind, kind_name, same_kind
from ..outcome import Outcome, outcome_of
from ..trace import EventType
from .propagation import KindRaised
from .state import CURRENT_FRAME, CURRENT_FUNCTION, emit


logger = logging.getLogger(__name__)


class FunctionContext:
    """
    Function error context.

    ``declared`` is documentation: the kinds the function says it may return.
    ``kind`` is the kind that reached the boundary (NoError while running).
    """

    def __init__(self, *declared: Kind, name: Optional[str] = None):
        for kind in declared:
            if not is_kind(kind):
                raise ProtocolError.invalid_kind(kind)
        self.declared: Tuple[Kind, ...] = declared
        self.name = name or "<anonymous>"
        self.kind: Any = NoError
        self.value: Any = None
        self._tokens: Optional[tuple] = None
        self._closed = False

    def __enter__(self) -> "FunctionContext":
        if self._tokens is not None or self._closed:
            raise ProtocolError(
                message=f"function context {self.name} cannot be entered twice",
                error_code=codes.CONTEXT_CLOSED,
                details={"function": self.name},
            )
        # A function boundary starts a fresh frame chain.
        self._tokens = (CURRENT_FUNCTION.set(self), CURRENT_FRAME.set(None))
        emit(EventType.FUNCTION_ENTER, kind=NoError, function=self,
             data={"declared": [kind_name(k) for k in self.declared]})
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        function_token, frame_token = self._tokens
        CURRENT_FRAME.reset(frame_token)
        CURRENT_FUNCTION.reset(function_token)
        self._tokens = None
        self._closed = True

        if isinstance(exc, KindRaised):
            self.kind = exc.kind
            return True
        return False

    # -------- DONE / EXIT --------

    def done(self) -> Any:
        """
        DONE: the function's final kind. EarlyReturn is reported as NoError.
        """
        final = NoError if self.kind is EarlyReturn else self.kind
        config = load_config()

        if final is not NoError and config.log_unhandled:
            if config.warn_undeclared and not self.declares(final):
                logger.warning("%s returned undeclared kind %s", self.name, kind_name(final))
            else:
                logger.info("%s returned %s", self.name, kind_name(final))

        emit(EventType.FUNCTION_EXIT, kind=final, function=self,
             data={"early_return": self.kind is EarlyReturn})
        return final

    exit = done

    def outcome(self) -> Outcome:
        """DONE, with the function's return value embedded: Bound(value) or Failed(kind)."""
        return outcome_of(self.done(), self.value)

    def declares(self, kind: Any) -> bool:
        if isinstance(kind, Sentinel):
            return True
        return any(same_kind(kind, k) for k in self.declared)

    def __repr__(self) -> str:
        return f"<FunctionContext {self.name} kind={kind_name(self.kind)}>"


class _Throws:
    """Both a decorator and a context manager factory (see throws())."""

    def __init__(self, declared: Tuple[Kind, ...], outcome: bool):
        self.declared = declared
        self.outcome = outcome

    def __call__(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        declared = self.declared
        want_outcome = self.outcome

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ctx = FunctionContext(*declared, name=fn.__qualname__)
            with ctx:
                ctx.value = fn(*args, **kwargs)
            return ctx.outcome() if want_outcome else ctx.done()

        wrapper.__throws__ = declared
        return wrapper

    def __enter__(self) -> FunctionContext:
        # One fresh context per entry; the same throws() object may be
        # entered recursively or from several threads at once.
        return FunctionContext(*self.declared).__enter__()

    def __exit__(self, exc_type, exc, tb) -> bool:
        # The context opened by the matching __enter__ is still the current
        # one for this call stack.
        return CURRENT_FUNCTION.get().__exit__(exc_type, exc, tb)


def throws(*declared: Any, outcome: bool = False) -> Any:
    """
    THROWS: declare the kinds a function may return and open its error context.

    Args:
        *declared: documentation list of kinds
        outcome: decorator returns Bound(return_value)/Failed(kind) instead of the bare kind

    Returns:
        A decorator, also usable as ``with throws(...) as fn:``
    """
    # bare @throws
    if len(declared) == 1 and callable(declared[0]) and not is_kind(declared[0]):
        return _Throws((), outcome)(declared[0])

    for kind in declared:
        if not is_kind(kind):
            raise ProtocolError.invalid_kind(kind)
    return _Throws(declared, outcome)
