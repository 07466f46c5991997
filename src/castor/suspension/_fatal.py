"""Fail-fast process termination (internal)."""

from __future__ import annotations

from contextlib import suppress
import logging
import os
import sys
from typing import NoReturn

log = logging.getLogger(__name__)


def terminate(reason: str) -> NoReturn:
    """Abort the process. Used for logic defects that must not be caught."""
    log.critical("Terminating: %s", reason)
    with suppress(OSError, ValueError):
        sys.stderr.write(f"castor: fatal: {reason}\n")
        sys.stderr.flush()
    os.abort()
