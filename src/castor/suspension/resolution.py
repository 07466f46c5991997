"""Resolve arbitrary awaitables into operators.

Resolution order for ``get_operator(awaitable, context)``:

1. A ``context`` defining ``transform_awaitable(awaitable)`` gets the first
   say; everything below acts on its return value.
2. A value defining ``as_operator()`` provides its own operator.
3. Otherwise an adapter registered for the value's type via
   ``to_operator.register`` is used.
4. Otherwise the value is taken to be an operator already.

A driving context can therefore override a type's own behaviour, a type's
own behaviour wins over adapters bolted on from outside, and plain operators
need no ceremony.

Registering an adapter for a type you do not own:

    @to_operator.register
    def _(fut: concurrent.futures.Future) -> Operator[Any]:
        return FutureOperator(fut)
"""

from __future__ import annotations

import dataclasses
from functools import singledispatch
import logging
from typing import TYPE_CHECKING, Any

from castor.config import FrozenConfig, current_config
from castor.errors import ProtocolError

from .protocol import Operator, is_operator

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["get_operator", "is_awaitable", "to_operator"]

log = logging.getLogger(__name__)


@singledispatch
def to_operator(awaitable: object) -> Operator[Any]:
    """Registry of external conversions from a type to an ``Operator``.

    Calling it for a type with no registration raises ``ProtocolError``.
    """
    raise ProtocolError(
        f"No operator adapter registered for {type(awaitable).__name__}",
        hint="Register one with @to_operator.register.",
    )


_UNREGISTERED: Callable[..., Any] = to_operator.registry[object]


def _has_adapter(cls: type) -> bool:
    return to_operator.dispatch(cls) is not _UNREGISTERED


def get_operator(
    awaitable: Any,
    context: Any = None,
    *,
    config: FrozenConfig | None = None,
) -> Operator[Any]:
    """Resolve ``awaitable`` (optionally through ``context``) into an operator.

    Args:
        awaitable: Any value that is, provides, or adapts to an operator.
        context: Optional driving environment; consulted first through its
            ``transform_awaitable`` method, if it has one.
        config: Configuration to use; defaults to ``current_config()``.

    Raises:
        ProtocolError: With ``strict_protocol`` enabled, when the resolved
            value lacks any of ``is_ready``/``suspend``/``resume_value``.
    """
    cfg = config or current_config()
    value = awaitable
    transformed = False

    transform = getattr(context, "transform_awaitable", None)
    if context is not None and callable(transform):
        value = transform(awaitable)
        transformed = True

    # On a class, as_operator is the unbound function.
    member = None if isinstance(value, type) else getattr(value, "as_operator", None)
    if callable(member):
        op, path = member(), "member"
    elif _has_adapter(type(value)):
        op, path = to_operator(value), "registered"
    else:
        op, path = value, "identity"

    if cfg.trace_resolution:
        log.debug(
            "Resolved %s via %s%s -> %s",
            type(awaitable).__name__,
            "context transform, " if transformed else "",
            path,
            type(op).__name__,
        )

    if cfg.strict_protocol and not is_operator(op):
        raise ProtocolError(
            f"{type(op).__name__} is not awaitable (resolved via {path})",
            hint=(
                "Provide is_ready(), suspend(handle) and resume_value(), "
                "define as_operator(), or register an adapter with "
                "@to_operator.register."
            ),
        )
    return op


def is_awaitable(awaitable: Any, context: Any = None) -> bool:
    """Return True if ``awaitable`` resolves to a valid operator."""
    cfg = dataclasses.replace(current_config(), strict_protocol=True)
    try:
        get_operator(awaitable, context, config=cfg)
    except ProtocolError:
        return False
    return True
