# failscope/core/outcome.py
"""
Outcome: the result of classifying an expression for a scope.

Tagged union of two variants:
- Bound(value): no error, ``value`` is visible to the protected body
- Failed(kind): an error kind (or EarlyReturn) to dispatch on
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from .errors import ProtocolError
from .kinds import Kind, NoError, Sentinel, is_kind, kind_name


T = TypeVar("T")


@dataclass(frozen=True)
class Bound(Generic[T]):
    value: Optional[T] = None

    @property
    def kind(self) -> Sentinel:
        return NoError

    @property
    def ok(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Bound({self.value!r})"


@dataclass(frozen=True)
class Failed:
    kind: Kind

    def __post_init__(self) -> None:
        if self.kind is NoError:
            raise ProtocolError.invalid_kind(self.kind)
        if not isinstance(self.kind, Sentinel) and not is_kind(self.kind):
            raise ProtocolError.invalid_kind(self.kind)

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Failed({kind_name(self.kind)})"


Outcome = Union[Bound[Any], Failed]


def outcome_of(kind: Kind, value: Any = None) -> Outcome:
    """Build the outcome matching ``kind``; NoError yields Bound(value)."""
    if kind is NoError:
        return Bound(value)
    return Failed(kind)
