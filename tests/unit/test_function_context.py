# tests/unit/test_function_context.py
from __future__ import annotations

import logging
import threading

import pytest

from failscope import (
    Bound,
    ErrorKind,
    FailScopeConfig,
    Failed,
    FunctionContext,
    NoError,
    ProtocolError,
    current_kind,
    maybe,
    rethrow,
    return_,
    set_config,
    throw,
    throws,
    try_,
)
from failscope.core.errors import codes


CONTEXT_LOGGER = "failscope.core.scope.context"


# ---- boundary basics ----

def test_unhandled_kind_reaches_caller():
    finalized = []

    @throws(ErrorKind.NO_MEMORY)
    def allocate():
        (try_(maybe(lambda: None, ErrorKind.NO_MEMORY))
            .in_(lambda buf: None)
            .finally_(finalized.append))
        finalized.append("unreachable")

    assert allocate() is ErrorKind.NO_MEMORY
    assert finalized == [None]


def test_clean_function_returns_no_error():
    @throws(ErrorKind.NO_MEMORY)
    def allocate():
        try_(maybe(lambda: bytearray(8), ErrorKind.NO_MEMORY)).in_(lambda buf: None).finally_()
        return "ignored"

    assert allocate() is NoError


def test_throw_directly_in_function_body():
    @throws(ErrorKind.BUSY)
    def lock():
        throw(ErrorKind.BUSY)

    assert lock() is ErrorKind.BUSY


def test_bare_decorator():
    @throws
    def noop():
        return 1

    assert noop() is NoError
    assert noop.__throws__ == ()


def test_declared_kinds_are_attached():
    @throws(ErrorKind.BUSY, ErrorKind.TIMED_OUT)
    def fn():
        pass

    assert fn.__throws__ == (ErrorKind.BUSY, ErrorKind.TIMED_OUT)
    assert fn.__name__ == "fn"


def test_throws_rejects_non_kinds():
    with pytest.raises(ProtocolError):
        throws(ErrorKind.BUSY, "busy")


def test_outcome_mode_embeds_return_value():
    @throws(ErrorKind.NOT_FOUND, outcome=True)
    def lookup(key):
        if key is None:
            throw(ErrorKind.NOT_FOUND)
        return key.upper()

    assert lookup("a") == Bound("A")
    assert lookup(None) == Failed(ErrorKind.NOT_FOUND)


def test_foreign_exception_passes_through_boundary():
    @throws(ErrorKind.BUSY)
    def broken():
        raise KeyError("x")

    with pytest.raises(KeyError):
        broken()


def test_current_kind_is_no_error_in_running_function():
    seen = []

    @throws
    def fn():
        seen.append(current_kind())

    fn()
    assert seen == [NoError]


# ---- early return ----

def test_early_return_through_nested_frames_is_invisible_to_caller():
    trail = []

    def level3(_):
        trail.append("level3")
        return_()

    def level2(_):
        (try_(NoError)
            .in_(level3)
            .handle()
            .catch_any(lambda k: trail.append("level3-any"))
            .finally_(lambda _: trail.append("level3-finally")))
        trail.append("after-level3")

    def level1(_):
        (try_(NoError)
            .in_(level2)
            .handle()
            .catch_any(lambda k: trail.append("level2-any"))
            .finally_(lambda _: trail.append("level2-finally")))

    @throws(ErrorKind.BUSY)
    def fn():
        (try_(NoError)
            .in_(level1)
            .handle()
            .catch_any(lambda k: trail.append("level1-any"))
            .finally_(lambda _: trail.append("level1-finally")))
        trail.append("after-frames")

    assert fn() is NoError
    assert trail == ["level3", "level3-finally", "level2-finally", "level1-finally"]


def test_early_return_keeps_return_value_none_in_outcome_mode():
    @throws(outcome=True)
    def fn():
        return_()
        return "never"

    assert fn() == Bound(None)


# ---- composition ----

def test_callee_kind_composes_into_caller_frame():
    @throws(ErrorKind.CONNECTION_REFUSED)
    def connect():
        throw(ErrorKind.CONNECTION_REFUSED)

    handled = []

    @throws(ErrorKind.CONNECTION_REFUSED)
    def session():
        (try_(connect)
            .handle()
            .catch(ErrorKind.CONNECTION_REFUSED, handled.append)
            .finally_())

    assert session() is NoError
    assert handled == [ErrorKind.CONNECTION_REFUSED]


def test_frames_do_not_cross_function_boundary():
    trail = []

    @throws(ErrorKind.IO_ERROR)
    def callee():
        try_(ErrorKind.IO_ERROR).finally_(lambda _: trail.append("callee-finally"))

    def body(_):
        trail.append(("callee", callee()))
        trail.append("caller-body-continues")

    outcome = (try_(NoError)
               .in_(body)
               .handle()
               .catch_any(lambda k: trail.append("caller-any"))
               .finally_())

    assert outcome.ok
    assert trail == ["callee-finally", ("callee", ErrorKind.IO_ERROR), "caller-body-continues"]


def test_rethrow_to_function_boundary():
    @throws(ErrorKind.BROKEN_PIPE)
    def write():
        (try_(ErrorKind.BROKEN_PIPE)
            .handle()
            .catch_any(lambda k: rethrow())
            .finally_())

    assert write() is ErrorKind.BROKEN_PIPE


# ---- context manager form ----

def test_context_manager_form():
    def read():
        with throws(ErrorKind.NOT_FOUND) as fn:
            try_(ErrorKind.NOT_FOUND).finally_()
        return fn.done()

    assert read() is ErrorKind.NOT_FOUND


def test_function_context_exit_alias():
    with FunctionContext(name="early") as ctx:
        return_()
    assert ctx.exit() is NoError


def test_function_context_cannot_be_reentered():
    ctx = FunctionContext(name="once")
    with ctx:
        pass
    with pytest.raises(ProtocolError) as exc_info:
        with ctx:
            pass
    assert exc_info.value.error_code == codes.CONTEXT_CLOSED


def test_declares():
    ctx = FunctionContext(ErrorKind.BUSY, name="x")
    assert ctx.declares(ErrorKind.BUSY)
    assert ctx.declares(NoError)
    assert not ctx.declares(ErrorKind.IO_ERROR)


# ---- logging ----

def test_undeclared_kind_is_warned(caplog):
    @throws(ErrorKind.BUSY)
    def fn():
        throw(ErrorKind.IO_ERROR)

    with caplog.at_level(logging.INFO, logger=CONTEXT_LOGGER):
        assert fn() is ErrorKind.IO_ERROR

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "undeclared kind IO_ERROR" in warnings[0].getMessage()


def test_declared_kind_is_logged_at_info(caplog):
    @throws(ErrorKind.BUSY)
    def fn():
        throw(ErrorKind.BUSY)

    with caplog.at_level(logging.INFO, logger=CONTEXT_LOGGER):
        fn()

    assert [r.levelno for r in caplog.records] == [logging.INFO]
    assert "returned BUSY" in caplog.records[0].getMessage()


def test_unhandled_logging_can_be_disabled(caplog):
    set_config(FailScopeConfig(log_unhandled=False))

    @throws
    def fn():
        throw(ErrorKind.IO_ERROR)

    with caplog.at_level(logging.DEBUG, logger=CONTEXT_LOGGER):
        assert fn() is ErrorKind.IO_ERROR

    assert caplog.records == []


# ---- shared throws() objects ----

def test_shared_throws_object_can_be_entered_recursively():
    guard = throws(ErrorKind.BUSY, ErrorKind.TIMED_OUT)

    def inner():
        with guard as fn:
            throw(ErrorKind.BUSY)
        return fn.done()

    with guard as outer:
        assert inner() is ErrorKind.BUSY
        assert current_kind() is NoError
        throw(ErrorKind.TIMED_OUT)

    assert outer.done() is ErrorKind.TIMED_OUT


def test_shared_throws_object_used_from_two_threads():
    guard = throws(ErrorKind.BUSY, ErrorKind.TIMED_OUT)
    barrier = threading.Barrier(2, timeout=5)
    results = {}
    errors = []

    def worker(name, kind):
        try:
            with guard as fn:
                barrier.wait()
                throw(kind)
            results[name] = fn.done()
        except BaseException as e:
            errors.append(e)

    threads = [
        threading.Thread(target=worker, args=("A", ErrorKind.BUSY)),
        threading.Thread(target=worker, args=("B", ErrorKind.TIMED_OUT)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert results == {"A": ErrorKind.BUSY, "B": ErrorKind.TIMED_OUT}
