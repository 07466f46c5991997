"""Failure wrapper.

Marks a value as an error payload so that ``Result(Failure(x))`` builds the
failure side even when ``x`` would also be a perfectly good success value.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, TypeGuard

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["Failure", "fail", "fail_with", "is_failure"]


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class Failure[E]:
    """An error payload waiting to be placed in a Result."""

    error: E

    @classmethod
    def in_place[**P](
        cls, factory: Callable[P, E], /, *args: P.args, **kwargs: P.kwargs
    ) -> Failure[E]:
        """Build the error with ``factory(*args, **kwargs)``."""
        return cls(factory(*args, **kwargs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return bool(self.error == other.error)

    def __hash__(self) -> int:
        return hash((Failure, self.error))


def fail[E](error: E) -> Failure[E]:
    """Wrap ``error`` as a failure payload."""
    return Failure(error)


def fail_with[E, **P](
    factory: Callable[P, E], /, *args: P.args, **kwargs: P.kwargs
) -> Failure[E]:
    """Construct the error in place, e.g. ``fail_with(ValueError, "bad")``."""
    return Failure.in_place(factory, *args, **kwargs)


def is_failure(obj: Any) -> TypeGuard[Failure[Any]]:
    return isinstance(obj, Failure)
