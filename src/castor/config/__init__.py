# src/castor/config/__init__.py

"""Configuration management for Castor.

Configuration is resolved once into an immutable ``FrozenConfig``. Library
code reads it through ``current_config()``; callers scope overrides with
``config_scope``.

Key exports:
- resolve_config: resolve defaults < pyproject < env < overrides
- FrozenConfig: immutable configuration payload
- config_scope: context manager for scoped configuration
- current_config: the ambient (or process default) configuration
- Settings: Pydantic schema for validation and defaults
"""

from .core import (
    FieldOrigin,
    FrozenConfig,
    Origin,
    Settings,
    SourceMap,
    config_scope,
    current_config,
    field_spec_hint,
    refresh_default_config,
    resolve_config,
)

__all__ = [
    "FieldOrigin",
    "FrozenConfig",
    "Origin",
    "Settings",
    "SourceMap",
    "config_scope",
    "current_config",
    "field_spec_hint",
    "refresh_default_config",
    "resolve_config",
]
