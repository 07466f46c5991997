"""Castor: a Result type and a suspension protocol for cooperative drivers.

Public API:
    - Result, VoidResult, success(): success/failure container
    - Failure, fail(), fail_with(): failure payload wrapper
    - get_operator(), await_step(): normalize and step awaitables
    - ContinuationHandle, TypedContinuationHandle: resume suspended work
    - config_scope(), resolve_config(): configuration
"""

from __future__ import annotations

import logging

from castor.config import FrozenConfig, config_scope, current_config, resolve_config
from castor.errors import (
    CastorError,
    ConfigurationError,
    ContinuationError,
    ProtocolError,
    ResultAccessError,
)
from castor.failure import Failure, fail, fail_with, is_failure
from castor.result import Result, VoidResult, is_result, success, swap
from castor.suspension import (
    ContinuationHandle,
    Operator,
    Ready,
    ReadyValue,
    Resumable,
    Suspended,
    SuspendAlways,
    SuspendNever,
    Transfer,
    TypedContinuationHandle,
    await_step,
    get_operator,
    is_awaitable,
    is_operator,
    to_operator,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("castor-aio")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("castor").addHandler(logging.NullHandler())

__all__ = [
    "CastorError",
    "ConfigurationError",
    "ContinuationError",
    "ContinuationHandle",
    "Failure",
    "FrozenConfig",
    "Operator",
    "ProtocolError",
    "Ready",
    "ReadyValue",
    "Result",
    "ResultAccessError",
    "Resumable",
    "SuspendAlways",
    "SuspendNever",
    "Suspended",
    "Transfer",
    "TypedContinuationHandle",
    "VoidResult",
    "__version__",
    "await_step",
    "config_scope",
    "current_config",
    "fail",
    "fail_with",
    "get_operator",
    "is_awaitable",
    "is_failure",
    "is_operator",
    "is_result",
    "resolve_config",
    "success",
    "swap",
    "to_operator",
]
