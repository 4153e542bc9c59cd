# failscope/core/bindings/forms.py
"""
Binding forms.

Adapters that turn an ordinary expression (a value that may be None, a
boolean check, an OS call) into an Outcome a scope can enter on.

Every binding is lazy: the wrapped callable runs when the frame is entered,
exactly once. A binding that is classified a second time returns the cached
outcome instead of calling again.
"""

from __future__ import annotations

import ctypes
import logging
from enum import Enum
from typing import Any, Callable, Optional

from ..errors import ProtocolError
from ..kinds import ErrorKind, Kind, NoError, Sentinel, from_errno, is_kind
from ..outcome import Bound, Failed, Outcome


logger = logging.getLogger(__name__)

EmptyCheck = Callable[[Any], bool]


def _is_none(value: Any) -> bool:
    return value is None


def _as_thunk(expr: Any) -> Callable[[], Any]:
    if callable(expr):
        return expr
    return lambda: expr


class Binding:
    """
    A deferred classification.

    Subclasses implement ``_classify``; ``evaluate`` guarantees it is called
    once per binding.
    """

    form = "binding"

    def __init__(self) -> None:
        self._outcome: Optional[Outcome] = None

    @property
    def evaluated(self) -> bool:
        return self._outcome is not None

    def evaluate(self) -> Outcome:
        if self._outcome is None:
            self._outcome = self._classify()
        return self._outcome

    def _classify(self) -> Outcome:
        raise NotImplementedError

    def __repr__(self) -> str:
        state = repr(self._outcome) if self._outcome is not None else "pending"
        return f"<{self.form} {state}>"


class Maybe(Binding):
    form = "maybe"

    def __init__(self, expr: Any, kind: Kind, empty: EmptyCheck = _is_none):
        super().__init__()
        if not is_kind(kind):
            raise ProtocolError.invalid_kind(kind)
        self._thunk = _as_thunk(expr)
        self._kind = kind
        self._empty = empty

    def _classify(self) -> Outcome:
        value = self._thunk()
        if self._empty(value):
            return Failed(self._kind)
        return Bound(value)


class Let(Maybe):
    form = "let"

    def __init__(self, expr: Any, empty: EmptyCheck = _is_none):
        super().__init__(expr, ErrorKind.NULL_REF, empty)


class Ensure(Binding):
    form = "ensure"

    def __init__(self, cond: Any, kind: Kind = ErrorKind.ENSURE_VIOLATED):
        super().__init__()
        if not is_kind(kind):
            raise ProtocolError.invalid_kind(kind)
        self._thunk = _as_thunk(cond)
        self._kind = kind

    def _classify(self) -> Outcome:
        if self._thunk():
            return Bound(True)
        return Failed(self._kind)


class TryErrno(Binding):
    """Run a call; an OSError it raises is classified by its errno."""

    form = "trye"

    def __init__(self, fn: Callable[..., Any], args: tuple, kwargs: dict):
        super().__init__()
        self._fn = fn
        self._args = args
        self._kwargs = kwargs

    def _classify(self) -> Outcome:
        try:
            value = self._fn(*self._args, **self._kwargs)
        except OSError as e:
            kind = from_errno(e.errno)
            logger.debug("%s raised %s, classified as %s", _name(self._fn), e, kind.name)
            return Failed(kind)
        return Bound(value)


class CheckErrno(Binding):
    """
    Run a call, then read the ambient C errno.

    Meant for foreign functions loaded with ``use_errno=True``. errno is
    cleared before the call so a stale value is never picked up.
    """

    form = "check"

    def __init__(
        self,
        fn: Callable[..., Any],
        args: tuple,
        kwargs: dict,
        get_errno: Callable[[], int] = ctypes.get_errno,
        set_errno: Callable[[int], Any] = ctypes.set_errno,
    ):
        super().__init__()
        self._fn = fn
        self._args = args
        self._kwargs = kwargs
        self._get_errno = get_errno
        self._set_errno = set_errno

    def _classify(self) -> Outcome:
        self._set_errno(0)
        value = self._fn(*self._args, **self._kwargs)
        code = self._get_errno()
        if code:
            return Failed(from_errno(code))
        return Bound(value)


def _name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


# ---- public constructors ----

def let_(expr: Any, *, empty: EmptyCheck = _is_none) -> Let:
    """LET: bind ``expr``; an empty (None) result raises NULL_REF."""
    return Let(expr, empty=empty)


def maybe(expr: Any, kind: Kind, *, empty: EmptyCheck = _is_none) -> Maybe:
    """MAYBE: bind ``expr``; an empty result raises ``kind``."""
    return Maybe(expr, kind, empty=empty)


def ensure(cond: Any, kind: Kind = ErrorKind.ENSURE_VIOLATED) -> Ensure:
    """ENSURE: a falsy condition raises ENSURE_VIOLATED (or ``kind``)."""
    return Ensure(cond, kind)


def trye(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> TryErrno:
    return TryErrno(fn, args, kwargs)


def check(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> CheckErrno:
    return CheckErrno(fn, args, kwargs)


def classify(source: Any) -> Outcome:
    """
    Turn any TRY source into an Outcome.

    Accepted sources:
    - a Binding (evaluated once)
    - an Outcome (Bound/Failed), e.g. from a throws(outcome=True) callee
    - a kind or sentinel, e.g. the return value of a throws() callee
    - a zero-argument callable returning any of the above
    """
    if isinstance(source, Binding):
        return source.evaluate()
    if isinstance(source, (Bound, Failed)):
        return source
    if isinstance(source, Sentinel):
        if source is NoError:
            return Bound(None)
        return Failed(source)
    if isinstance(source, Enum):
        return Failed(source)
    if callable(source):
        return classify(source())
    raise ProtocolError.invalid_kind(source)
