"""Result type for explicit, non-raising error handling.

A ``Result`` holds exactly one of a success payload or a failure payload.
Expected failures are values: they flow through ``and_then``/``or_else``/
``transform``/``transform_error`` instead of being raised, and a failure
short-circuits every success-side combinator without calling it (and vice
versa).

Example:
    def parse(text: str) -> Result[int, str]:
        if not text.isdigit():
            return Result(fail(f"not a number: {text!r}"))
        return success(int(text))

    parse("41").transform(lambda n: n + 1)  # Result(value=42)
    parse("x").transform(lambda n: n + 1)   # Result(error="not a number: 'x'")

Accessing the wrong side (``value()`` on a failure, ``error()`` on a
success) is a programming error and raises ``ResultAccessError``. The one
deliberate exception to the non-raising design is ``VoidResult.value()``,
which raises the stored error so that ``result.value()`` works as a check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final, Self, TypeGuard, overload

from castor._storage import ResultStorage
from castor.errors import ResultAccessError
from castor.failure import Failure

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["Result", "VoidResult", "is_result", "success", "swap"]

log = logging.getLogger(__name__)

_ACCESS_HINT: Final = "Check has_value() first, or use value_or()/error_or() or a combinator."


class Result[T, E](ResultStorage):
    """A success payload of type ``T`` or a failure payload of type ``E``.

    Construction:
        - ``Result()``: success holding ``None``.
        - ``Result(value)``: success holding ``value``.
        - ``Result(Failure(err))`` / ``Result(fail(err))``: failure.
        - ``Result(other_result)``: same side, same payload.
        - ``Result.in_place(factory, *args)``: success built by ``factory``.
        - ``Result.from_result(src, value=..., error=...)``: converts the live
          payload of ``src`` with the matching converter.

    Results are mutable (``emplace``, ``assign``, ``swap``) and therefore
    unhashable.
    """

    __slots__ = ()

    def __init__(self, value: T | Failure[E] | Result[T, E] | None = None) -> None:
        if isinstance(value, Failure):
            self._construct_failure(value.error)
        elif isinstance(value, Result):
            self._construct_from_state(value._state)
        elif value is None:
            self._construct_void_success()
        else:
            self._assign_state((True, value))

    @classmethod
    def in_place[**P](
        cls, factory: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs
    ) -> Self:
        """Build the success payload with ``factory(*args, **kwargs)``.

        Unlike ``Result(value)``, the payload is taken as-is even if it is
        itself a Result or a Failure.
        """
        new = object.__new__(cls)
        new._construct_success(factory, *args, **kwargs)
        return new

    @classmethod
    def from_result[U, G](
        cls,
        src: Result[U, G],
        *,
        value: Callable[[U], T] | None = None,
        error: Callable[[G], E] | None = None,
    ) -> Result[T, E]:
        """Convert ``src``, keeping its live side.

        Only the converter for the live side runs. With no converters this is
        the same as ``Result(src)``. A ``VoidResult`` source stays a
        ``VoidResult``.

        Raises:
            TypeError: ``src`` is not a Result, or a value converter was given
                for a ``VoidResult`` source.
        """
        if not isinstance(src, Result):
            raise TypeError(
                f"from_result() expects a Result, got {type(src).__name__}"
            )
        target: type[Result[Any, Any]] = cls
        if issubclass(cls, VoidResult) and not isinstance(src, VoidResult):
            raise TypeError(
                f"VoidResult cannot be converted from a {type(src).__name__} "
                "holding a success payload"
            )
        if isinstance(src, VoidResult):
            if value is not None:
                raise TypeError("A VoidResult has no success payload to convert")
            target = VoidResult
        new = object.__new__(target)
        new._assign_state(src._state, value=value, error=error)
        return new

    # --- Observers ---

    def has_value(self) -> bool:
        """Return True when the success side is live."""
        return self._state[0]

    def __bool__(self) -> bool:
        return self._state[0]

    def value(self) -> T:
        """Return the success payload.

        Raises:
            ResultAccessError: The failure side is live.
        """
        has_value, payload = self._state
        if not has_value:
            raise ResultAccessError(
                f"value() called on a failed Result (error={payload!r})",
                hint=_ACCESS_HINT,
            )
        return payload

    def error(self) -> E:
        """Return the failure payload.

        Raises:
            ResultAccessError: The success side is live.
        """
        has_value, payload = self._state
        if has_value:
            raise ResultAccessError(
                "error() called on a successful Result", hint=_ACCESS_HINT
            )
        return payload

    def value_or(self, default: T) -> T:
        has_value, payload = self._state
        return payload if has_value else default

    def error_or(self, default: E) -> E:
        has_value, payload = self._state
        return default if has_value else payload

    # --- Modifiers ---

    def emplace(self, value: T) -> T:
        """Replace whatever is live with a new success payload and return it."""
        _reject_nesting(value, "emplace")
        self._assign_state((True, value))
        return value

    def emplace_with[**P](
        self, factory: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Like ``emplace`` but builds the payload with ``factory``.

        If ``factory`` raises, the Result keeps its previous contents.
        """
        return self._construct_success(factory, *args, **kwargs)

    def assign(
        self,
        src: T | Failure[E] | Result[Any, Any],
        *,
        value: Callable[[Any], T] | None = None,
        error: Callable[[Any], E] | None = None,
    ) -> Self:
        """Overwrite this Result from a Result, a Failure or a bare value.

        ``value``/``error`` convert the incoming payload. If a converter
        raises, this Result keeps its previous contents.
        """
        if isinstance(src, Result):
            state = src._state
        elif isinstance(src, Failure):
            state = (False, src.error)
        else:
            state = (True, src)
        self._assign_state(state, value=value, error=error)
        return self

    def swap(self, other: Result[T, E]) -> None:
        """Exchange contents with ``other``. Calling it twice restores both."""
        if not isinstance(other, Result):
            raise TypeError(f"Cannot swap a Result with {type(other).__name__}")
        if isinstance(self, VoidResult) is not isinstance(other, VoidResult):
            raise TypeError("Cannot swap a VoidResult with a non-void Result")
        self._swap_state(other)

    # --- Monadic combinators ---

    def and_then[U](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a Result-returning step on the success side.

        On success returns ``f(payload)`` exactly; on failure returns a new
        Result carrying the same error and never calls ``f``.
        """
        has_value, payload = self._state
        if has_value:
            return _expect_result(self._invoke(f, payload), "and_then")
        return Result(Failure(payload))

    def or_else[G](self, f: Callable[[E], Result[T, G]]) -> Result[T, G]:
        """Chain a Result-returning recovery step on the failure side."""
        has_value, payload = self._state
        if has_value:
            return self._clone()
        return _expect_result(f(payload), "or_else")

    def transform[U](self, f: Callable[[T], U]) -> Result[U, E]:
        """Map the success payload; ``f``'s return value is the new payload."""
        has_value, payload = self._state
        if has_value:
            return Result.in_place(self._invoke, f, payload)
        return Result(Failure(payload))

    def transform_error[G](self, f: Callable[[E], G]) -> Result[T, G]:
        """Map the failure payload; the success side passes through untouched."""
        has_value, payload = self._state
        if has_value:
            return self._clone()
        new = object.__new__(type(self))
        new._construct_failure(f(payload))
        return new

    # --- Comparison & representation ---

    def __eq__(self, other: object) -> bool:
        has_value, payload = self._state
        if isinstance(other, Result):
            other_has_value, other_payload = other._state
            return has_value == other_has_value and bool(payload == other_payload)
        if isinstance(other, Failure):
            return not has_value and bool(payload == other.error)
        return has_value and bool(payload == other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        has_value, payload = self._state
        side = "value" if has_value else "error"
        return f"{type(self).__name__}({side}={payload!r})"

    # --- Internal ---

    def _invoke(self, f: Callable[..., Any], payload: Any) -> Any:
        return f(payload)

    def _clone(self) -> Self:
        new = object.__new__(type(self))
        new._construct_from_state(self._state)
        return new


class VoidResult[E](Result[None, E]):
    """A Result whose success side carries no payload.

    ``value()`` doubles as a check: on failure it raises the stored error
    (or ``ResultAccessError`` wrapping it when the error is not an
    exception). Success-side callbacks (``and_then``, ``transform``) are
    called with no arguments.
    """

    __slots__ = ()

    def __init__(self, src: Failure[E] | VoidResult[E] | None = None) -> None:
        if src is None:
            self._construct_void_success()
        elif isinstance(src, Failure):
            self._construct_failure(src.error)
        elif isinstance(src, VoidResult):
            self._construct_from_state(src._state)
        else:
            raise TypeError(
                "VoidResult holds no success payload; "
                f"expected a Failure or a VoidResult, got {type(src).__name__}"
            )

    def value(self) -> None:
        has_value, payload = self._state
        if has_value:
            return None
        if isinstance(payload, BaseException):
            raise payload
        raise ResultAccessError(
            f"value() called on a failed VoidResult (error={payload!r})",
            hint=_ACCESS_HINT,
            error=payload,
        )

    @classmethod
    def in_place(cls, *args: Any, **kwargs: Any) -> Self:  # type: ignore[override]
        raise TypeError("VoidResult holds no success payload; use success()")

    def emplace(self) -> None:  # type: ignore[override]
        """Switch to the (payload-free) success side."""
        self._construct_void_success()

    def emplace_with(self, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        raise TypeError("VoidResult holds no success payload; use emplace()")

    def assign(  # type: ignore[override]
        self,
        src: Failure[E] | VoidResult[Any],
        *,
        error: Callable[[Any], E] | None = None,
    ) -> Self:
        if isinstance(src, VoidResult):
            state = src._state
        elif isinstance(src, Failure):
            state = (False, src.error)
        else:
            raise TypeError(
                "VoidResult can only be assigned from a Failure or a VoidResult, "
                f"got {type(src).__name__}"
            )
        self._assign_state(state, error=error)
        return self

    def __eq__(self, other: object) -> bool:
        # A void success matches any success, whatever its payload.
        if isinstance(other, Result) and self._state[0] and other._state[0]:
            return True
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        has_value, payload = self._state
        return "VoidResult()" if has_value else f"VoidResult(error={payload!r})"

    def _invoke(self, f: Callable[..., Any], payload: Any) -> Any:
        del payload
        return f()


# --- Free helpers ---


_NO_VALUE: Any = object()


@overload
def success() -> VoidResult[Any]: ...
@overload
def success[T](value: T) -> Result[T, Any]: ...
def success(value: Any = _NO_VALUE) -> Result[Any, Any]:
    """Build a successful Result; with no argument, a void success."""
    if value is _NO_VALUE:
        return VoidResult()
    _reject_nesting(value, "success")
    return Result(value)


def swap[T, E](a: Result[T, E], b: Result[T, E]) -> None:
    a.swap(b)


def is_result(obj: Any) -> TypeGuard[Result[Any, Any]]:
    return isinstance(obj, Result)


def _reject_nesting(value: Any, op: str) -> None:
    if isinstance(value, (Result, Failure)):
        raise TypeError(
            f"{op}() would nest a {type(value).__name__} inside a Result; "
            "use Result.in_place() if nesting is intended"
        )


def _expect_result(out: Any, op: str) -> Result[Any, Any]:
    if not isinstance(out, Result):
        raise TypeError(
            f"{op}() callback must return a Result, got {type(out).__name__}"
        )
    return out
