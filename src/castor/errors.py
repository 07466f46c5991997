"""Exception hierarchy for Castor.

Expected, domain-level failures never appear here: they travel as the
failure payload of a ``Result``. These exceptions signal programming errors
(wrong accessor, malformed awaitable) or invalid configuration.
"""

from __future__ import annotations

from typing import Any


class CastorError(Exception):
    """Base exception for all Castor errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(CastorError):
    """Configuration validation or resolution failed."""


class ResultAccessError(CastorError):
    """The accessor does not match the live side of a Result.

    When raised by ``VoidResult.value()`` for a non-exception error payload,
    the payload is available as ``error``.
    """

    _MISSING: Any = object()

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        error: Any = _MISSING,
    ) -> None:
        super().__init__(message, hint=hint)
        self._error = error

    @property
    def has_error(self) -> bool:
        return self._error is not ResultAccessError._MISSING

    @property
    def error(self) -> Any:
        """The failure payload carried by this exception, if any."""
        if not self.has_error:
            raise AttributeError("ResultAccessError carries no error payload")
        return self._error


class ProtocolError(CastorError, TypeError):
    """A value does not satisfy the operator protocol.

    Subclasses ``TypeError`` so callers treating "not awaitable" as a type
    mismatch keep working.
    """


class ContinuationError(CastorError):
    """A continuation handle was used in a state that forbids the operation."""
