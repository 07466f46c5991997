"""Continuation handles for suspended computations.

A driver resumes a suspended computation, or asks it to react to a
cancellation it did not handle itself, through a ``ContinuationHandle``.
The handle is type-erased: it is built from any ``Resumable`` and records,
at construction time, whether the computation's type knows how to handle an
unhandled stop. Computations that do not are terminated, since reaching that
path means a cancellable computation was wired up without a cancellation
handler.

``TypedContinuationHandle[P]`` keeps the static type of the computation for
code that built it. Downgrading to the erased form is one-way.
"""

from __future__ import annotations

from operator import methodcaller
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

from castor.errors import ContinuationError

from ._fatal import terminate

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "ContinuationHandle",
    "Resumable",
    "StopHandling",
    "TypedContinuationHandle",
    "erase",
]


@runtime_checkable
class Resumable(Protocol):
    """A suspended computation's control block."""

    def resume(self) -> None: ...  # noqa: D102

    @property
    def done(self) -> bool: ...  # noqa: D102


@runtime_checkable
class StopHandling(Resumable, Protocol):
    """A computation that knows how to react to an unhandled stop.

    ``unhandled_stopped()`` returns the computation to continue with.
    """

    def unhandled_stopped(self) -> Resumable: ...  # noqa: D102


type _StopCallback = Callable[[Any], Resumable]

_call_unhandled_stopped: _StopCallback = methodcaller("unhandled_stopped")


def _terminate_on_stop(computation: Any) -> Resumable:
    kind = "null handle" if computation is None else type(computation).__qualname__
    terminate(
        f"unhandled_stopped() requested for {kind}, which does not handle cancellation"
    )


def _stop_callback_for(cls: type) -> _StopCallback:
    if callable(getattr(cls, "unhandled_stopped", None)):
        return _call_unhandled_stopped
    return _terminate_on_stop


class ContinuationHandle:
    """Type-erased reference to a suspended computation.

    ``ContinuationHandle()`` is the null handle: falsy, not resumable, and
    fatal when asked to handle a stop.
    """

    __slots__ = ("_callback", "_handle")

    def __init__(self, computation: Resumable | None = None) -> None:
        self._handle: Resumable | None = computation
        self._callback: _StopCallback = (
            _terminate_on_stop
            if computation is None
            else _stop_callback_for(type(computation))
        )

    def handle(self) -> Resumable | None:
        """Return the referenced computation as an opaque ``Resumable``."""
        return self._handle

    @property
    def done(self) -> bool:
        return self._handle is None or self._handle.done

    def resume(self) -> None:
        """Resume the computation.

        Raises:
            ContinuationError: The handle is null or the computation finished.
        """
        if self._handle is None:
            raise ContinuationError("resume() called on a null continuation handle")
        if self._handle.done:
            raise ContinuationError(
                f"resume() called on a finished {type(self._handle).__qualname__}"
            )
        self._handle.resume()

    def unhandled_stopped(self) -> Resumable:
        """Let the computation react to a stop nobody handled.

        Terminates the process when the computation's type does not define
        ``unhandled_stopped``.
        """
        return self._callback(self._handle)

    def __bool__(self) -> bool:
        return self._handle is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContinuationHandle):
            return NotImplemented
        return self._handle is other._handle

    def __hash__(self) -> int:
        return id(self._handle)

    def __repr__(self) -> str:
        if self._handle is None:
            return "ContinuationHandle(null)"
        return f"ContinuationHandle({type(self._handle).__qualname__} at {id(self._handle):#x})"


class TypedContinuationHandle[P: Resumable]:
    """Continuation handle that remembers the concrete computation type."""

    __slots__ = ("_handle",)

    def __init__(self, computation: P | None = None) -> None:
        self._handle = ContinuationHandle(computation)

    def handle(self) -> P | None:
        # Only ever built from a P, so the erased reference is a P.
        return cast("P | None", self._handle.handle())

    @property
    def done(self) -> bool:
        return self._handle.done

    def resume(self) -> None:
        self._handle.resume()

    def unhandled_stopped(self) -> Resumable:
        return self._handle.unhandled_stopped()

    def erase(self) -> ContinuationHandle:
        """Return the type-erased handle. There is no way back."""
        return self._handle

    def __bool__(self) -> bool:
        return bool(self._handle)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypedContinuationHandle):
            return self._handle == other._handle
        if isinstance(other, ContinuationHandle):
            return self._handle == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._handle)

    def __repr__(self) -> str:
        return f"Typed{self._handle!r}"


def erase(handle: ContinuationHandle | TypedContinuationHandle[Any]) -> ContinuationHandle:
    """Return the type-erased form of ``handle``."""
    if isinstance(handle, TypedContinuationHandle):
        return handle.erase()
    if isinstance(handle, ContinuationHandle):
        return handle
    raise TypeError(f"Expected a continuation handle, got {type(handle).__name__}")
