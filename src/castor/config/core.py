# src/castor/config/core.py

"""Configuration schema and resolution.

Resolve once, freeze, then flow: settings from defaults, the project file,
the environment and explicit overrides are merged, validated by a Pydantic
schema, and frozen into a ``FrozenConfig``. Code that needs configuration
asks ``current_config()``, which honours an ambient ``config_scope``.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from enum import Enum
from functools import cache
import logging
from typing import TYPE_CHECKING, Any, Literal, overload

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from castor.errors import ConfigurationError

from .loaders import ENV_PREFIX, get_pyproject_path, load_env, load_pyproject

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Single source of truth for configuration fields and defaults."""

    model_config = ConfigDict(extra="forbid")

    #: Check resolved operators and ``suspend`` returns against the protocol.
    strict_protocol: bool = Field(default=True)
    #: Log which resolution path (transform, member, registered, identity) was taken.
    trace_resolution: bool = Field(default=False)


@cache
def _default_settings() -> dict[str, Any]:
    return Settings().model_dump()


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Validated, immutable configuration."""

    strict_protocol: bool
    trace_resolution: bool


# --- Audit types ---


class Origin(str, Enum):
    """Source origin for configuration field values."""

    DEFAULT = "default"
    PROJECT = "project"
    ENV = "env"
    OVERRIDES = "overrides"


@dataclass(frozen=True)
class FieldOrigin:
    """Tracks where a configuration field value came from."""

    origin: Origin
    env_key: str | None = None  # e.g., "CASTOR_STRICT_PROTOCOL"
    file: str | None = None


SourceMap = dict[str, FieldOrigin]


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "castor_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration without touching global state.

    Thread-safe and async-safe (backed by a ``ContextVar``).

    Example:
        with config_scope(strict_protocol=False):
            step = await_step(loose_awaitable, handle)
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config(overrides={**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


def current_config() -> FrozenConfig:
    """Return the ambient configuration, or the process default.

    The process default is resolved once; call ``refresh_default_config()``
    after changing the environment to pick up new values.
    """
    cfg = _AMBIENT.get()
    return cfg if cfg is not None else _process_default()


@cache
def _process_default() -> FrozenConfig:
    return resolve_config()


def refresh_default_config() -> None:
    """Drop the cached process default so the next lookup resolves again."""
    _process_default.cache_clear()


def _try_load_dotenv() -> None:
    """Load a ``.env`` file from the working directory (or a parent) once."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))
    _DOTENV_LOADED = True


# --- Public resolution API ---


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[True],
) -> tuple[FrozenConfig, SourceMap]: ...


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[False] = ...,
) -> FrozenConfig: ...


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    explain: bool = False,
) -> FrozenConfig | tuple[FrozenConfig, SourceMap]:
    """Resolve configuration from all sources into a FrozenConfig.

    Precedence: defaults < project (``[tool.castor]``) < env (``CASTOR_*``)
    < overrides.

    Args:
        overrides: Programmatic configuration overrides.
        explain: If True, also return the per-field origin map.

    Raises:
        ConfigurationError: If validation fails.
    """
    _try_load_dotenv()

    merged, sources = _resolve_layers(
        overrides=overrides or {},
        env=load_env(),
        project=load_pyproject(),
    )

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        msg = err.get("msg", "invalid value")
        raise ConfigurationError(
            f"Configuration validation failed for {field!r}: {msg}",
            hint=field_spec_hint(field),
        ) from e

    frozen = FrozenConfig(
        strict_protocol=settings.strict_protocol,
        trace_resolution=settings.trace_resolution,
    )
    log.debug("Resolved configuration: %s", frozen)
    return (frozen, sources) if explain else frozen


def field_spec_hint(field: str) -> str:
    """Return where a field can be set, for error hints."""
    return (
        f"Set {ENV_PREFIX}{field.upper()}, add '{field}' under [tool.castor] "
        "in pyproject.toml, or pass it as an override."
    )


def _resolve_layers(
    *,
    overrides: Mapping[str, Any],
    env: Mapping[str, Any],
    project: Mapping[str, Any],
) -> tuple[dict[str, Any], SourceMap]:
    """Merge layers with last-wins precedence and record each field's origin."""
    out: dict[str, Any] = dict(_default_settings())
    src: SourceMap = {k: FieldOrigin(origin=Origin.DEFAULT) for k in out}

    layers = [
        (Origin.PROJECT, project),
        (Origin.ENV, env),
        (Origin.OVERRIDES, overrides),
    ]
    for origin, payload in layers:
        for k, v in payload.items():
            out[k] = v
            if origin is Origin.ENV:
                src[k] = FieldOrigin(origin=origin, env_key=f"{ENV_PREFIX}{k.upper()}")
            elif origin is Origin.PROJECT:
                src[k] = FieldOrigin(origin=origin, file=str(get_pyproject_path()))
            else:
                src[k] = FieldOrigin(origin=origin)
    return out, src
