"""Suspension protocol and continuation handles.

Public surface:
    - Operator, is_operator, classify_suspend, SuspendKind
    - get_operator, to_operator, is_awaitable
    - await_step, Ready, Suspended, Transfer
    - ContinuationHandle, TypedContinuationHandle, Resumable, StopHandling
    - SuspendAlways, SuspendNever, ReadyValue
"""

from __future__ import annotations

from .awaiters import ReadyValue, SuspendAlways, SuspendNever
from .continuation import (
    ContinuationHandle,
    Resumable,
    StopHandling,
    TypedContinuationHandle,
    erase,
)
from .protocol import Operator, SuspendKind, classify_suspend, is_operator
from .resolution import get_operator, is_awaitable, to_operator
from .step import Ready, Step, Suspended, Transfer, await_step

__all__ = [
    "ContinuationHandle",
    "Operator",
    "Ready",
    "ReadyValue",
    "Resumable",
    "Step",
    "StopHandling",
    "SuspendAlways",
    "SuspendKind",
    "SuspendNever",
    "Suspended",
    "Transfer",
    "TypedContinuationHandle",
    "await_step",
    "classify_suspend",
    "erase",
    "get_operator",
    "is_awaitable",
    "is_operator",
    "to_operator",
]
