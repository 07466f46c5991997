"""Built-in operators."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .continuation import ContinuationHandle

__all__ = ["ReadyValue", "SuspendAlways", "SuspendNever"]


class SuspendAlways:
    """Always suspends; resumes with ``None``."""

    __slots__ = ()

    def is_ready(self) -> bool:
        return False

    def suspend(self, handle: ContinuationHandle) -> None:
        del handle

    def resume_value(self) -> None:
        return None


class SuspendNever:
    """Never suspends; produces ``None`` immediately."""

    __slots__ = ()

    def is_ready(self) -> bool:
        return True

    def suspend(self, handle: ContinuationHandle) -> None:  # pragma: no cover - never reached
        del handle

    def resume_value(self) -> None:
        return None


@dataclasses.dataclass(frozen=True, slots=True)
class ReadyValue[T]:
    """Produces ``value`` without ever yielding control.

    Reports not-ready and cancels the suspension from ``suspend``, so a
    driver sees a synchronous completion on the suspend path. Useful for
    handing an already-known value (a ``Result``, say) to code written
    against the operator protocol.
    """

    value: T

    def is_ready(self) -> bool:
        return False

    def suspend(self, handle: ContinuationHandle) -> bool:
        del handle
        return False

    def resume_value(self) -> T:
        return self.value
