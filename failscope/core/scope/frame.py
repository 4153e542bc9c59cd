# failscope/core/scope/frame.py
"""
Scope machine: one protected block (TRY / IN / HANDLE / CATCH / FINALLY).

A frame is declared with try_() and a chain of clause methods, and runs when
finally_() closes it:

    (try_(maybe(lambda: open_socket(), ErrorKind.CONNECTION_REFUSED))
        .in_(lambda sock: talk(sock))
        .handle()
        .catch(ErrorKind.TIMED_OUT, lambda kind: log_timeout())
        .catch_any(lambda kind: rethrow())
        .finally_(lambda sock: sock and sock.close()))

Lifecycle: ENTERED -> PROTECTED | RAISED -> HANDLING -> FINALIZING -> CLOSED.
The finalizer runs exactly once on every path out of the frame, including
foreign Python exceptions and raises from handlers. A kind that is still
pending after finalizing goes to the enclosing frame (or the function
boundary); inner frames therefore always finalize before outer frames see
the kind.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple

from ...config import load_config
from ...utils.callsite import CallSite
from ..bindings import classify
from ..errors import ProtocolError
from ..errors import codes
from ..kinds import EarlyReturn, Kind, NoError, Sentinel, is_kind, kind_name, same_kind
from ..outcome import Failed, Outcome, outcome_of
from ..trace import EventType
from .phases import ALLOWED_AFTER, Clause, FramePhase
from .propagation import KindRaised
from .state import CURRENT_FRAME, CURRENT_FUNCTION, emit


logger = logging.getLogger(__name__)

Body = Callable[[Any], Any]
Handler = Callable[[Any], Any]

_frame_ids = itertools.count(1)


class Frame:
    """
    One activation of the scope machine.

    Owned by the code that declared it; runs once and is never shared.
    """

    def __init__(self, source: Any):
        self.frame_id = next(_frame_ids)
        self.phase = FramePhase.DECLARED
        self.kind: Any = NoError
        self.value: Any = None
        self.depth = 0
        self.raised_at: Optional[CallSite] = None
        self.handled: Any = None

        self._source = source
        self._body: Optional[Body] = None
        self._catches: List[Tuple[Tuple[Kind, ...], Handler]] = []
        self._catch_any: Optional[Handler] = None
        self._finalizer: Optional[Body] = None
        self._last = Clause.TRY
        self._seen = {Clause.TRY}

    # -------- clause declaration --------

    def _advance(self, clause: Clause) -> None:
        if self.phase is not FramePhase.DECLARED:
            raise ProtocolError(
                message=f"frame #{self.frame_id} already ran",
                error_code=codes.FRAME_REUSED,
                details={"frame_id": self.frame_id, "clause": clause.value},
            )
        if self._last not in ALLOWED_AFTER[clause]:
            raise ProtocolError.clause_order(clause.value, self._last.value)

        if load_config().strict_clauses:
            if clause is not Clause.IN and Clause.IN not in self._seen:
                raise ProtocolError.clause_missing(Clause.IN.value, clause.value)
            if clause in (Clause.CATCH, Clause.CATCH_ANY) and Clause.HANDLE not in self._seen:
                raise ProtocolError.clause_missing(Clause.HANDLE.value, clause.value)

        self._last = clause
        self._seen.add(clause)

    def in_(self, body: Body) -> "Frame":
        """IN: primary body, runs with the bound value only if the frame entered clean."""
        self._advance(Clause.IN)
        self._body = body
        return self

    def handle(self) -> "Frame":
        """HANDLE: start of handler declarations."""
        self._advance(Clause.HANDLE)
        return self

    def catch(self, kinds: Any, handler: Handler) -> "Frame":
        """CATCH: ``handler(kind)`` runs when the pending kind is one of ``kinds``."""
        self._advance(Clause.CATCH)
        declared = tuple(kinds) if isinstance(kinds, (tuple, list, set, frozenset)) else (kinds,)
        for kind in declared:
            if not is_kind(kind):
                raise ProtocolError.invalid_kind(kind)
        self._catches.append((declared, handler))
        return self

    def catch_any(self, handler: Handler) -> "Frame":
        """CATCHANY: wildcard handler for any error kind not matched above."""
        self._advance(Clause.CATCH_ANY)
        self._catch_any = handler
        return self

    otherwise = catch_any

    def finally_(self, finalizer: Optional[Body] = None) -> Outcome:
        """
        FINALLY: declare the finalizer, close the clause list and run the frame.

        ``finalizer(value)`` receives the bound value, or None when nothing
        was bound; it must tolerate that.

        Returns the frame's outcome when it closes clean or when it is a
        standalone frame. Otherwise the pending kind is raised outward.
        """
        self._advance(Clause.FINALLY)
        self._finalizer = finalizer
        return self._run()

    # -------- machine --------

    def _run(self) -> Outcome:
        parent = CURRENT_FRAME.get()
        function = CURRENT_FUNCTION.get()
        if parent is not None:
            self.depth = parent.depth + 1

        token = CURRENT_FRAME.set(self)
        try:
            self._execute(function)
        finally:
            CURRENT_FRAME.reset(token)
            self.phase = FramePhase.CLOSED

        if self.kind is NoError:
            return outcome_of(NoError, self.value)

        if parent is None and function is None:
            if self.kind is EarlyReturn:
                # A standalone frame is its own boundary.
                return outcome_of(NoError, self.value)
            return Failed(self.kind)

        self._trace(EventType.FRAME_PROPAGATED, function,
                    data={"to": "frame" if parent is not None else "function"})
        raise KindRaised(self.kind, self.raised_at)

    def _execute(self, function: Any) -> None:
        self.phase = FramePhase.ENTERED

        try:
            self._trace(EventType.FRAME_ENTER, function,
                        data={"source": getattr(self._source, "form", type(self._source).__name__)})
            try:
                outcome = classify(self._source)
                self.kind = outcome.kind
                self.value = outcome.value
            except KindRaised as e:
                self._raise(e, function)

            if self.kind is NoError:
                self._protected(function)
            if self.kind is not NoError:
                if self.phase is not FramePhase.RAISED:
                    self.phase = FramePhase.RAISED
                    self._trace(EventType.FRAME_RAISED, function, callsite=self.raised_at)
                self._dispatch(function)
        finally:
            self._finalize(function)

    def _protected(self, function: Any) -> None:
        self.phase = FramePhase.PROTECTED
        if self._body is None:
            return
        try:
            self._body(self.value)
        except KindRaised as e:
            self._raise(e, function)

    def _dispatch(self, function: Any) -> None:
        if isinstance(self.kind, Sentinel):
            # EarlyReturn is not an error: no handler sees it.
            return

        handler = self._match(self.kind)
        if handler is None:
            self._trace(EventType.HANDLER_MISSED, function)
            return

        self._trace(EventType.HANDLER_MATCHED, function)
        self.phase = FramePhase.HANDLING
        self.handled = self.kind
        try:
            handler(self.kind)
        except KindRaised as e:
            self._raise(e, function)
        else:
            self.kind = NoError

    def _match(self, kind: Any) -> Optional[Handler]:
        for declared, handler in self._catches:
            if any(same_kind(kind, k) for k in declared):
                return handler
        return self._catch_any

    def _finalize(self, function: Any) -> None:
        self.phase = FramePhase.FINALIZING
        try:
            if self._finalizer is not None:
                self._finalizer(self.value)
        except KindRaised as e:
            if self.kind is not NoError:
                logger.debug("frame #%s: finalizer raise %s replaces pending %s",
                             self.frame_id, kind_name(e.kind), kind_name(self.kind))
            self._raise(e, function)
        self._trace(EventType.FRAME_FINALIZED, function)

    def _raise(self, e: KindRaised, function: Any) -> None:
        raised_from = self.phase
        self.kind = e.kind
        self.raised_at = e.callsite
        self.phase = FramePhase.RAISED if raised_from in (FramePhase.ENTERED, FramePhase.PROTECTED) else raised_from
        self._trace(
            EventType.FRAME_RAISED,
            function,
            callsite=e.callsite,
            data={"during": raised_from.value, "rethrown": e.rethrown},
        )

    def _trace(self, type: EventType, function: Any, callsite: Optional[CallSite] = None,
               data: Optional[dict] = None) -> None:
        if load_config().log_transitions:
            where = f" at {callsite}" if callsite is not None else ""
            logger.debug("frame #%s depth=%s %s kind=%s%s",
                         self.frame_id, self.depth, type.value, kind_name(self.kind), where)
        emit(type, kind=self.kind, function=function, frame=self, callsite=callsite, data=data)

    def __repr__(self) -> str:
        return f"<Frame #{self.frame_id} {self.phase.value} kind={kind_name(self.kind)}>"


def try_(source: Any) -> Frame:
    """
    TRY: open a frame on ``source``.

    ``source`` is a binding (let_/maybe/ensure/trye/check), an Outcome, a
    kind, or a zero-argument callable returning one of those.
    """
    return Frame(source)
