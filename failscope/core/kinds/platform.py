# failscope/core/kinds/platform.py
"""
Bridge between the platform errno space and ErrorKind.

Several errno names share one value on most platforms (EAGAIN/EWOULDBLOCK,
EDEADLK/EDEADLOCK, ENOTSUP/EOPNOTSUPP, ...). Such a code is ambiguous: the
kind it maps to does not say which of the names the caller meant. The
helpers below expose the ambiguity instead of hiding it.
"""

from __future__ import annotations

import errno
import logging
from typing import Dict, Final, Tuple

from .taxonomy import ErrorKind, LIBRARY_BASE


logger = logging.getLogger(__name__)


def _collect_errno_names() -> Dict[int, Tuple[str, ...]]:
    grouped: Dict[int, list] = {}
    for name in dir(errno):
        if not name.startswith("E"):
            continue
        value = getattr(errno, name)
        if isinstance(value, int):
            grouped.setdefault(value, []).append(name)
    return {code: tuple(sorted(names)) for code, names in grouped.items()}


ERRNO_NAMES: Final[Dict[int, Tuple[str, ...]]] = _collect_errno_names()

AMBIGUOUS_ERRNO: Final[Dict[int, Tuple[str, ...]]] = {
    code: names for code, names in ERRNO_NAMES.items() if len(names) > 1
}

_BY_CODE: Final[Dict[int, ErrorKind]] = {
    int(member): member
    for member in ErrorKind
    if int(member) < LIBRARY_BASE
}


def errno_aliases(code: int) -> Tuple[str, ...]:
    """All errno names defined for ``code`` on this platform."""
    return ERRNO_NAMES.get(code, ())


def is_ambiguous_errno(code: int) -> bool:
    return code in AMBIGUOUS_ERRNO


def from_errno(code: int | None, default: ErrorKind = ErrorKind.UNKNOWN) -> ErrorKind:
    """
    Map a platform errno to an error kind.

    Codes outside the catalogue downgrade to ``default``; the original value
    is kept in the log record.
    """
    if not code:
        return default
    kind = _BY_CODE.get(code)
    if kind is None:
        logger.debug("errno %s (%s) not in catalogue, using %s",
                     code, "/".join(errno_aliases(code)) or "?", default.name)
        return default
    if code in AMBIGUOUS_ERRNO:
        logger.debug("errno %s is ambiguous (%s), classified as %s",
                     code, "/".join(AMBIGUOUS_ERRNO[code]), kind.name)
    return kind


def from_os_error(exc: OSError, default: ErrorKind = ErrorKind.UNKNOWN) -> ErrorKind:
    return from_errno(exc.errno, default)
