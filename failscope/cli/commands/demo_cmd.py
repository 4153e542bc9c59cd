# failscope/cli/commands/demo_cmd.py
"""
Nested acquisition demo: a memory buffer, then a file, then a socket.

Each resource lives in its own scope. Whatever step fails, every resource
acquired so far is released exactly once, innermost first, and the kind
that escaped is returned to the caller.
"""

from __future__ import annotations

import logging
import random
import socket
import tempfile
from pathlib import Path
from typing import List, Optional

from failscope import (
    ErrorKind,
    JsonlTraceRecorder,
    MemoryTraceRecorder,
    kind_name,
    maybe,
    recording,
    rethrow,
    throw,
    throws,
    trye,
    try_,
)


logger = logging.getLogger(__name__)

FAIL_POINTS = ("none", "buffer", "file", "socket", "random")
BUFFER_SIZE = 256 * 1024


def _bomb(rng: Optional[random.Random]) -> bool:
    """One chance in five."""
    return rng is not None and rng.randrange(5) == 4


@throws(ErrorKind.NO_MEMORY, ErrorKind.UNRECOVERABLE, ErrorKind.CONNECTION_REFUSED)
def acquire_resources(
    workdir: Path,
    fail_at: str = "none",
    log: Optional[List[str]] = None,
    seed: Optional[int] = None,
):
    """
    Acquire buffer -> file -> socket, injecting a failure at ``fail_at``.

    ``log`` collects one line per handler/finalizer so callers can check
    which branch ran.
    """
    log = log if log is not None else []
    rng = random.Random(seed) if fail_at == "random" else None

    def note(line: str) -> None:
        log.append(line)
        logger.info(line)

    # ---- acquisition steps ----

    def alloc_buffer():
        note("allocate buffer")
        if fail_at == "buffer":
            return None
        return bytearray(BUFFER_SIZE)

    def open_file():
        if fail_at == "file" or _bomb(rng):
            throw(ErrorKind.UNRECOVERABLE)
        note("open file")
        return open(workdir / "dummy-file.txt", "w", encoding="utf-8")

    def open_socket():
        if _bomb(rng):
            throw(ErrorKind.UNRECOVERABLE)
        note("open socket")
        if fail_at == "socket":
            return None
        return socket.socket(socket.AF_INET, socket.SOCK_STREAM)

    # ---- releases ----

    def free_buffer(buf):
        if buf is not None:
            buf.clear()
            note("buffer freed")

    def close_file(fh):
        if fh is not None:
            fh.close()
            note("file closed")

    def close_socket(sock):
        if sock is not None:
            sock.close()
            note("socket closed")

    # ---- handlers that pass the kind on ----

    def socket_failed(kind):
        note(f"socket() failed: {kind_name(kind)}")
        rethrow()

    def open_failed(kind):
        note(f"open() failed: {kind_name(kind)}")
        rethrow()

    def malloc_failed(kind):
        note("malloc() failed")
        rethrow()

    def buffer_scope_failed(kind):
        note(f"buffer scope saw {kind_name(kind)}")
        rethrow()

    # ---- scopes, outermost first ----

    def socket_stage(fh):
        fh.write("scoped\n")
        (try_(maybe(open_socket, ErrorKind.CONNECTION_REFUSED))
            .in_(lambda sock: note("socket ready"))
            .handle()
            .catch(ErrorKind.UNRECOVERABLE, lambda kind: note("random failure after open()"))
            .catch_any(socket_failed)
            .finally_(close_socket))

    def file_stage(buf):
        (try_(trye(open_file))
            .in_(socket_stage)
            .handle()
            .catch(ErrorKind.UNRECOVERABLE, lambda kind: note("random failure after malloc()"))
            .catch((ErrorKind.NOT_FOUND, ErrorKind.ACCESS_DENIED), open_failed)
            .finally_(close_file))

    (try_(maybe(alloc_buffer, ErrorKind.NO_MEMORY))
        .in_(file_stage)
        .handle()
        .catch(ErrorKind.NO_MEMORY, malloc_failed)
        .catch_any(buffer_scope_failed)
        .finally_(free_buffer))


def register_command(subparsers):
    """Register the 'demo' command and its arguments."""
    demo_p = subparsers.add_parser(
        "demo",
        help="Run the buffer / file / socket nested-scope demonstration",
    )
    demo_p.add_argument(
        "--fail-at",
        choices=FAIL_POINTS,
        default="none",
        help="Step to fail (default: none; 'random' fails 1 in 5 at the file and socket steps)",
    )
    demo_p.add_argument("--seed", type=int, default=None, help="Seed for --fail-at random")
    demo_p.add_argument("--workdir", help="Directory for the dummy file (default: temp dir)")
    demo_p.add_argument("--trace", help="Also write scope events to this JSONL file")
    demo_p.set_defaults(func=run_demo)


def run_demo(args) -> int:
    """
    Run the demo once and print the handler trail and the returned kind.
    """
    log: List[str] = []

    print(f"\n{'='*70}")
    print(f"  failscope nested-scope demo (fail at: {args.fail_at})")
    print(f"{'='*70}\n")

    with tempfile.TemporaryDirectory(prefix="failscope-demo-") as tmp:
        workdir = Path(args.workdir) if args.workdir else Path(tmp)
        workdir.mkdir(parents=True, exist_ok=True)

        if args.trace:
            recorder = JsonlTraceRecorder(args.trace)
        else:
            recorder = MemoryTraceRecorder()

        try:
            with recording(recorder):
                kind = acquire_resources(workdir, fail_at=args.fail_at, log=log, seed=args.seed)
        finally:
            recorder.close()

    for line in log:
        print(f"  - {line}")
    print(f"\n  retVal: {kind_name(kind)}")
    if isinstance(recorder, MemoryTraceRecorder):
        print(f"  events: {len(recorder.events)}")
    else:
        print(f"  trace: {args.trace}")
    return 0
