# failscope/core/kinds/__init__.py
"""
Error-kind taxonomy and the errno bridge.

No side effects on import.
"""

from .taxonomy import (
    Sentinel,
    NoError,
    EarlyReturn,
    ErrorKind,
    Kind,
    KindCategory,
    ALIASED_KINDS,
    RESOURCE_KINDS,
    IO_KINDS,
    NETWORK_KINDS,
    CONCURRENCY_KINDS,
    BINDING_KINDS,
    is_kind,
    is_sentinel,
    same_kind,
    kind_code,
    kind_name,
    category_of,
)
from .platform import (
    ERRNO_NAMES,
    AMBIGUOUS_ERRNO,
    errno_aliases,
    is_ambiguous_errno,
    from_errno,
    from_os_error,
)

__all__ = [
    "Sentinel",
    "NoError",
    "EarlyReturn",
    "ErrorKind",
    "Kind",
    "KindCategory",
    "ALIASED_KINDS",
    "RESOURCE_KINDS",
    "IO_KINDS",
    "NETWORK_KINDS",
    "CONCURRENCY_KINDS",
    "BINDING_KINDS",
    "is_kind",
    "is_sentinel",
    "same_kind",
    "kind_code",
    "kind_name",
    "category_of",
    "ERRNO_NAMES",
    "AMBIGUOUS_ERRNO",
    "errno_aliases",
    "is_ambiguous_errno",
    "from_errno",
    "from_os_error",
]
