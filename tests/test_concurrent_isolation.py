"""
Test: Concurrent scope isolation

Two call stacks that interleave inside their protected bodies must keep
separate frame chains, separate function contexts and separate trace
recorders. Nothing raised on one stack may surface on the other.
"""

import asyncio
import threading

from failscope import (
    ErrorKind,
    EventType,
    MemoryTraceRecorder,
    NoError,
    current_kind,
    recording,
    throw,
    throws,
    try_,
)


def test_threads_keep_separate_frame_chains():
    barrier = threading.Barrier(2, timeout=5)
    results = {}
    seen_inside = {}

    def make_worker(name, kind):
        @throws(kind)
        def worker():
            def body(_):
                barrier.wait()
                throw(kind)

            def finalizer(_):
                # the other thread has raised by now; we only see our own kind
                barrier.wait()
                seen_inside[name] = current_kind()

            try_(NoError).in_(body).finally_(finalizer)

        def run():
            with recording(MemoryTraceRecorder()) as rec:
                results[name] = (worker(), rec)

        return run

    threads = [
        threading.Thread(target=make_worker("A", ErrorKind.BUSY)),
        threading.Thread(target=make_worker("B", ErrorKind.TIMED_OUT)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    kind_a, rec_a = results["A"]
    kind_b, rec_b = results["B"]
    assert kind_a is ErrorKind.BUSY
    assert kind_b is ErrorKind.TIMED_OUT
    assert seen_inside == {"A": ErrorKind.BUSY, "B": ErrorKind.TIMED_OUT}

    # each recorder only saw its own stack
    assert {e.kind for e in rec_a.of_type(EventType.FUNCTION_EXIT)} == {"BUSY"}
    assert {e.kind for e in rec_b.of_type(EventType.FUNCTION_EXIT)} == {"TIMED_OUT"}
    assert not {e.frame_id for e in rec_a.events if e.frame_id} & {e.frame_id for e in rec_b.events if e.frame_id}


def test_asyncio_tasks_do_not_share_function_context():
    @throws(ErrorKind.NOT_FOUND)
    def lookup(key):
        if key is None:
            throw(ErrorKind.NOT_FOUND)

    async def task(key):
        # yield so the two tasks interleave between calls
        await asyncio.sleep(0)
        first = lookup(key)
        await asyncio.sleep(0)
        return first, lookup(key), current_kind()

    async def main():
        return await asyncio.gather(task(None), task("k"))

    missing, present = asyncio.run(main())
    assert missing == (ErrorKind.NOT_FOUND, ErrorKind.NOT_FOUND, NoError)
    assert present == (NoError, NoError, NoError)
