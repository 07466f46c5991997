"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and the test doubles
shared by the suspension tests. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from castor.config import refresh_default_config
from castor.suspension import ContinuationHandle

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeComputation:
    """Resumable test double without cancellation handling."""

    steps: int = 1
    resumed: int = 0

    @property
    def done(self) -> bool:
        return self.resumed >= self.steps

    def resume(self) -> None:
        self.resumed += 1


@dataclass
class StoppableComputation(FakeComputation):
    """Resumable test double that handles unhandled stops by continuing elsewhere."""

    stopped_calls: int = 0
    continue_with: Any = None

    def unhandled_stopped(self) -> Any:
        self.stopped_calls += 1
        return self.continue_with if self.continue_with is not None else self


@dataclass
class RecordingOperator:
    """Operator test double that records how the protocol was driven."""

    ready: bool = False
    suspend_returns: Any = None
    value: Any = "resumed"
    calls: list[str] = field(default_factory=list)
    seen_handle: ContinuationHandle | None = None

    def is_ready(self) -> bool:
        self.calls.append("is_ready")
        return self.ready

    def suspend(self, handle: ContinuationHandle) -> Any:
        self.calls.append("suspend")
        self.seen_handle = handle
        return self.suspend_returns

    def resume_value(self) -> Any:
        self.calls.append("resume_value")
        return self.value


@pytest.fixture
def computation() -> FakeComputation:
    """A fresh resumable computation (not autouse)."""
    return FakeComputation()


@pytest.fixture
def handle(computation: FakeComputation) -> ContinuationHandle:
    """An erased handle to ``computation`` (not autouse)."""
    return ContinuationHandle(computation)


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_castor_env(request, monkeypatch, tmp_path):
    """Clear CASTOR_* variables and point project config at an empty location.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("CASTOR_"):
                monkeypatch.delenv(key, raising=False)
        monkeypatch.setenv("CASTOR_PYPROJECT_PATH", str(tmp_path / "pyproject.toml"))
    refresh_default_config()
    yield
    refresh_default_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def castor_debug_logging():
    """Let caplog see castor's DEBUG records."""
    logging.getLogger("castor").setLevel(logging.DEBUG)
