"""Tagged parse outcomes.

Parsers in this package never raise to their callers. They return either
``Ok(value)`` or ``Err(reason)`` and callers branch on ``result.ok``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse carrying the decoded value (which may be None)."""

    value: T
    ok: bool = field(default=True, init=False)

    def unwrap_or(self, default: Any = None) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed parse. ``reason`` is informational only."""

    reason: str = ""
    ok: bool = field(default=False, init=False)

    def unwrap_or(self, default: Any = None) -> Any:
        return default


ParseResult = Union[Ok[T], Err]


async def try_await(awaitable: Awaitable[T]) -> Tuple[Optional[Exception], Optional[T]]:
    """Await ``awaitable`` and return ``(error, value)`` instead of raising."""
    try:
        value = await awaitable
    except Exception as exc:
        return exc, None
    return None, value
