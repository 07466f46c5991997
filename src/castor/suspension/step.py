"""One suspension attempt, as seen by a driver.

``await_step`` resolves an awaitable and runs the protocol up to the point
where control would leave the awaiting computation, then reports what
happened as a ``Step``:

- ``Ready``: the value is available now (``is_ready()`` was true, or
  ``suspend`` cancelled the suspension by returning ``False``).
- ``Suspended``: the computation is parked; the driver resumes it through the
  handle it passed in and then collects ``resume_value()``.
- ``Transfer``: control should move straight to ``target``; the awaiting
  computation collects ``resume_value()`` when it is resumed later.

Scheduling is left entirely to the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from castor.config import current_config

from .continuation import ContinuationHandle, TypedContinuationHandle, erase
from .protocol import Operator, SuspendKind, classify_suspend
from .resolution import get_operator

if TYPE_CHECKING:
    from castor.config import FrozenConfig

__all__ = ["Ready", "Step", "Suspended", "Transfer", "await_step"]

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Ready[T]:
    """The awaited value is available without any external resumption."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Suspended[T]:
    """The awaiting computation is parked until its handle is resumed."""

    operator: Operator[T]

    def resume_value(self) -> T:
        return self.operator.resume_value()


@dataclasses.dataclass(frozen=True, slots=True)
class Transfer[T]:
    """Control moves directly to ``target`` instead of back to the driver."""

    target: ContinuationHandle
    operator: Operator[T]

    def resume_value(self) -> T:
        return self.operator.resume_value()


type Step[T] = Ready[T] | Suspended[T] | Transfer[T]


def await_step(
    awaitable: Any,
    handle: ContinuationHandle | TypedContinuationHandle[Any],
    *,
    context: Any = None,
    config: FrozenConfig | None = None,
) -> Step[Any]:
    """Resolve ``awaitable`` and attempt one suspension on behalf of ``handle``.

    ``suspend`` is never called when the operator is already ready.

    Raises:
        ProtocolError: With ``strict_protocol`` enabled, when the awaitable
            does not resolve to an operator or ``suspend`` returns something
            other than ``None``, a bool, or a continuation handle.
    """
    cfg = config or current_config()
    op = get_operator(awaitable, context, config=cfg)

    if op.is_ready():
        return Ready(op.resume_value())

    ret = op.suspend(erase(handle))
    match classify_suspend(ret, strict=cfg.strict_protocol):
        case SuspendKind.CANCEL:
            log.debug("Suspension of %r cancelled; resuming synchronously", handle)
            return Ready(op.resume_value())
        case SuspendKind.TRANSFER:
            return Transfer(erase(ret), op)
        case SuspendKind.SUSPEND:
            return Suspended(op)
