"""Two-slot storage underlying ``Result`` (internal).

The live side and its payload are kept together in one ``_state`` tuple so a
commit is a single rebinding: no reader can ever see a discriminant that
disagrees with the payload. Every operation that has to *produce* a payload
(factory call, converter, deep copy) stages it first and commits only after
staging succeeded, which gives all modifiers the strong guarantee.

Staging results are threaded through small Success/Failure records instead
of try/except around the commit, so the commit step itself has no failure
path.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

State = tuple[bool, Any]


@dataclasses.dataclass(frozen=True, slots=True)
class _Staged:
    """A payload that was produced successfully and is ready to commit."""

    payload: Any


@dataclasses.dataclass(frozen=True, slots=True)
class _StageFailed:
    """Producing the payload raised; nothing has been committed."""

    exc: BaseException


type Staging = _Staged | _StageFailed


def stage(factory: Callable[..., Any], *args: Any, **kwargs: Any) -> Staging:
    """Run ``factory`` and capture its outcome without touching any storage."""
    try:
        return _Staged(factory(*args, **kwargs))
    except Exception as e:
        return _StageFailed(e)


def _identity(x: Any) -> Any:
    return x


class ResultStorage:
    """Discriminant plus a single payload slot.

    Subclasses build their public API on top of the ``_construct_*``,
    ``_assign_state`` and ``_swap_state`` primitives and never write
    ``_state`` directly.
    """

    __slots__ = ("_state",)

    _state: State

    # --- Construction ---

    def _construct_success(
        self, factory: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Any:
        """Stage ``factory(*args, **kwargs)`` and commit it as the success payload."""
        return self._commit(True, stage(factory, *args, **kwargs))

    def _construct_void_success(self) -> None:
        self._state = (True, None)

    def _construct_failure(self, error: Any) -> None:
        self._state = (False, error)

    def _construct_from_state(self, state: State) -> None:
        self._state = state

    # --- Assignment ---

    def _assign_state(
        self,
        src: State,
        *,
        value: Callable[[Any], Any] | None = None,
        error: Callable[[Any], Any] | None = None,
    ) -> None:
        """Take over ``src``'s live side, converting its payload on the way.

        The four (source, destination) combinations collapse into one path:
        the destination's old payload is released only when ``_state`` is
        rebound, so a failing converter leaves the destination exactly as it
        was, whichever side was live before.
        """
        has_value, payload = src
        convert = (value if has_value else error) or _identity
        self._commit(has_value, stage(convert, payload))

    # --- Swap ---

    def _swap_state(self, other: ResultStorage) -> None:
        """Exchange live sides and payloads with ``other``.

        Covers both-success, both-failure and mixed operands alike. Nothing
        is constructed, so there is no step that can fail between the two
        rebindings.
        """
        if other is self:
            return
        mine, theirs = self._state, other._state
        self._state = theirs
        other._state = mine

    # --- Copy ---

    def __copy__(self) -> Self:
        new = object.__new__(type(self))
        new._construct_from_state(self._state)
        return new

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        has_value, payload = self._state
        new = object.__new__(type(self))
        memo[id(self)] = new
        new._commit(has_value, stage(copy.deepcopy, payload, memo))
        return new

    def __getstate__(self) -> State:
        return self._state

    def __setstate__(self, state: State) -> None:
        self._construct_from_state(tuple(state))  # type: ignore[arg-type]

    # --- Commit ---

    def _commit(self, has_value: bool, staged: Staging) -> Any:
        match staged:
            case _Staged(payload=payload):
                self._state = (has_value, payload)
                return payload
            case _StageFailed(exc=exc):
                log.debug(
                    "Payload staging failed with %s; storage left unchanged",
                    type(exc).__name__,
                )
                raise exc
