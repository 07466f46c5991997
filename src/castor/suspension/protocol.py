"""The operator protocol: the three steps every awaitable reduces to.

An operator answers three questions for a driver:

- ``is_ready()``: can the value be taken right away, skipping suspension?
- ``suspend(handle)``: suspension is happening; ``handle`` resumes the
  awaiting computation later. The return value decides what happens next:

  ============================  =============================================
  ``None`` or ``True``          suspend; someone resumes ``handle`` later
  ``False``                     cancel the suspension, resume synchronously
  a continuation handle         symmetric transfer to that computation
  ============================  =============================================

- ``resume_value()``: the value produced once control comes back.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Protocol, runtime_checkable

from castor.errors import ProtocolError

from .continuation import ContinuationHandle, TypedContinuationHandle

__all__ = ["Operator", "SuspendKind", "classify_suspend", "is_operator"]

log = logging.getLogger(__name__)

type SuspendReturn = None | bool | ContinuationHandle | TypedContinuationHandle[Any]


@runtime_checkable
class Operator[T](Protocol):
    """Canonical suspension protocol consumed by drivers."""

    def is_ready(self) -> bool: ...  # noqa: D102

    def suspend(self, handle: ContinuationHandle) -> SuspendReturn: ...  # noqa: D102

    def resume_value(self) -> T: ...  # noqa: D102


class SuspendKind(str, Enum):
    """What a ``suspend`` call asked the driver to do."""

    SUSPEND = "suspend"
    CANCEL = "cancel"
    TRANSFER = "transfer"


def is_operator(obj: Any) -> bool:
    """Return True if ``obj`` provides all three operator capabilities."""
    return isinstance(obj, Operator)


def classify_suspend(ret: Any, *, strict: bool = True) -> SuspendKind:
    """Map a ``suspend`` return value to the action it requests.

    Raises:
        ProtocolError: ``strict`` is set and ``ret`` is none of ``None``, a
            bool, or a continuation handle.
    """
    if ret is None or ret is True:
        return SuspendKind.SUSPEND
    if ret is False:
        return SuspendKind.CANCEL
    if isinstance(ret, (ContinuationHandle, TypedContinuationHandle)):
        return SuspendKind.TRANSFER
    if strict:
        raise ProtocolError(
            f"suspend() returned {type(ret).__name__}",
            hint="Return None, a bool, or a ContinuationHandle.",
        )
    log.warning(
        "suspend() returned %s; treating it as %s by truthiness",
        type(ret).__name__,
        "suspend" if ret else "cancel",
    )
    return SuspendKind.SUSPEND if ret else SuspendKind.CANCEL
