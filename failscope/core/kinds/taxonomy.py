# failscope/core/kinds/taxonomy.py
"""
Error-kind taxonomy.

Two disjoint families make up the kind space:

- Sentinel: the control values NO_ERROR and EARLY_RETURN. They are their own
  enum type, so no error kind can ever compare equal to them.
- ErrorKind: the built-in catalogue. Platform members reuse the values of the
  errno module so system failures can be funneled through directly; library
  members sit above the platform range.

Applications add kinds by declaring their own enum.Enum classes. Any enum
member that is not a Sentinel is a valid kind.
"""

from __future__ import annotations

import errno
from enum import Enum, IntEnum
from typing import Any, Dict, Final, FrozenSet, Union


class Sentinel(Enum):
    """Reserved control kinds."""
    NO_ERROR = "no_error"
    EARLY_RETURN = "early_return"

    def __repr__(self) -> str:
        return f"<{self.name}>"


NoError: Final = Sentinel.NO_ERROR
EarlyReturn: Final = Sentinel.EARLY_RETURN

# Integer codes for interop with C-style callers. EarlyReturn uses -1.
_SENTINEL_CODES: Final[Dict[Sentinel, int]] = {
    Sentinel.NO_ERROR: 0,
    Sentinel.EARLY_RETURN: -1,
}

# Library kinds start above anything errno hands out.
LIBRARY_BASE: Final[int] = 0x10000


class ErrorKind(IntEnum):
    # resource acquisition
    NO_MEMORY = errno.ENOMEM
    TOO_MANY_FILES = errno.EMFILE
    FILE_TABLE_OVERFLOW = errno.ENFILE
    NO_SPACE = errno.ENOSPC

    # i/o
    IO_ERROR = errno.EIO
    BAD_DESCRIPTOR = errno.EBADF
    ILLEGAL_SEEK = errno.ESPIPE
    BROKEN_PIPE = errno.EPIPE
    NOT_FOUND = errno.ENOENT
    ALREADY_EXISTS = errno.EEXIST
    ACCESS_DENIED = errno.EACCES
    NOT_PERMITTED = errno.EPERM
    IS_A_DIRECTORY = errno.EISDIR
    NOT_A_DIRECTORY = errno.ENOTDIR
    INVALID_ARGUMENT = errno.EINVAL

    # network
    CONNECTION_REFUSED = errno.ECONNREFUSED
    CONNECTION_RESET = errno.ECONNRESET
    CONNECTION_ABORTED = errno.ECONNABORTED
    TIMED_OUT = errno.ETIMEDOUT
    HOST_UNREACHABLE = errno.EHOSTUNREACH
    NETWORK_UNREACHABLE = errno.ENETUNREACH
    ADDRESS_IN_USE = errno.EADDRINUSE
    ADDRESS_NOT_AVAILABLE = errno.EADDRNOTAVAIL
    NOT_CONNECTED = errno.ENOTCONN

    # concurrency / ipc
    TRY_AGAIN = errno.EAGAIN
    BUSY = errno.EBUSY
    DEADLOCK = errno.EDEADLK
    INTERRUPTED = errno.EINTR

    # library kinds
    NULL_REF = LIBRARY_BASE
    ENSURE_VIOLATED = LIBRARY_BASE + 1
    UNRECOVERABLE = LIBRARY_BASE + 2
    UNKNOWN = LIBRARY_BASE + 3


# Catalogue names the current platform collapsed onto another member
# (IntEnum turns equal values into aliases). Empty on Linux and macOS.
ALIASED_KINDS: Final[Dict[str, ErrorKind]] = {
    name: member
    for name, member in ErrorKind.__members__.items()
    if member.name != name
}


class KindCategory(str, Enum):
    RESOURCE = "resource"
    IO = "io"
    NETWORK = "network"
    CONCURRENCY = "concurrency"
    BINDING = "binding"
    CONTROL = "control"
    GENERIC = "generic"


# ---- semantic groups ----

RESOURCE_KINDS: Final[FrozenSet[ErrorKind]] = frozenset({
    ErrorKind.NO_MEMORY,
    ErrorKind.TOO_MANY_FILES,
    ErrorKind.FILE_TABLE_OVERFLOW,
    ErrorKind.NO_SPACE,
})

IO_KINDS: Final[FrozenSet[ErrorKind]] = frozenset({
    ErrorKind.IO_ERROR,
    ErrorKind.BAD_DESCRIPTOR,
    ErrorKind.ILLEGAL_SEEK,
    ErrorKind.BROKEN_PIPE,
    ErrorKind.NOT_FOUND,
    ErrorKind.ALREADY_EXISTS,
    ErrorKind.ACCESS_DENIED,
    ErrorKind.NOT_PERMITTED,
    ErrorKind.IS_A_DIRECTORY,
    ErrorKind.NOT_A_DIRECTORY,
})

NETWORK_KINDS: Final[FrozenSet[ErrorKind]] = frozenset({
    ErrorKind.CONNECTION_REFUSED,
    ErrorKind.CONNECTION_RESET,
    ErrorKind.CONNECTION_ABORTED,
    ErrorKind.TIMED_OUT,
    ErrorKind.HOST_UNREACHABLE,
    ErrorKind.NETWORK_UNREACHABLE,
    ErrorKind.ADDRESS_IN_USE,
    ErrorKind.ADDRESS_NOT_AVAILABLE,
    ErrorKind.NOT_CONNECTED,
})

CONCURRENCY_KINDS: Final[FrozenSet[ErrorKind]] = frozenset({
    ErrorKind.TRY_AGAIN,
    ErrorKind.BUSY,
    ErrorKind.DEADLOCK,
    ErrorKind.INTERRUPTED,
})

BINDING_KINDS: Final[FrozenSet[ErrorKind]] = frozenset({
    ErrorKind.NULL_REF,
    ErrorKind.ENSURE_VIOLATED,
})


Kind = Union[Sentinel, Enum]


def is_sentinel(value: Any) -> bool:
    return isinstance(value, Sentinel)


def is_kind(value: Any) -> bool:
    """True for any error kind, i.e. an enum member that is not a sentinel."""
    return isinstance(value, Enum) and not isinstance(value, Sentinel)


def kind_code(kind: Kind) -> int:
    """
    Integer tag of a kind.

    Sentinels map to 0 (NoError) and -1 (EarlyReturn). Integer-valued enums
    return their value; other application kinds have no integer form.
    """
    if isinstance(kind, Sentinel):
        return _SENTINEL_CODES[kind]
    if isinstance(kind, Enum) and isinstance(kind.value, int):
        return int(kind.value)
    raise TypeError(f"{kind!r} has no integer code")


def kind_name(kind: Any) -> str:
    if isinstance(kind, Enum):
        return kind.name
    return str(kind)


def same_kind(a: Any, b: Any) -> bool:
    """
    Kind identity. IntEnum members of different enums compare equal as ints;
    kinds never do.
    """
    return a is b


def category_of(kind: Kind) -> KindCategory:
    if isinstance(kind, Sentinel):
        return KindCategory.CONTROL
    if not isinstance(kind, ErrorKind):
        return KindCategory.GENERIC
    if kind in RESOURCE_KINDS:
        return KindCategory.RESOURCE
    if kind in IO_KINDS:
        return KindCategory.IO
    if kind in NETWORK_KINDS:
        return KindCategory.NETWORK
    if kind in CONCURRENCY_KINDS:
        return KindCategory.CONCURRENCY
    if kind in BINDING_KINDS:
        return KindCategory.BINDING
    return KindCategory.GENERIC
