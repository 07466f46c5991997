# src/castor/config/loaders.py

"""Configuration loaders for environment and project files.

Pure data loading: each loader returns a plain mapping that the resolver in
``core`` merges and validates. Nothing here validates values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tomllib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

CONFIG_TOOL_NAME = "castor"
ENV_PREFIX = "CASTOR_"

# Variables that steer resolution itself rather than map to a field
META_ENV_FIELDS = {"pyproject_path"}


def _coerce_bool(v: str) -> bool:
    """Convert string to boolean using common conventions."""
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_env_value(value: str, target_type: type | None) -> Any:
    """Coerce env string to target type when possible.

    Falls back to the original string so the schema reports the error.
    """
    if target_type is bool:
        return _coerce_bool(value)
    if target_type is int:
        try:
            return int(value)
        except ValueError:
            return value
    return value


def load_env() -> Mapping[str, Any]:
    """Load configuration from ``CASTOR_*`` environment variables.

    Types are coerced using the ``Settings`` schema annotations. ``.env``
    loading happens in the resolver; this function only reads ``os.environ``.
    """
    from .core import Settings  # local import to keep loaders import-light

    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in META_ENV_FIELDS:
            continue
        info = Settings.model_fields.get(field_name)
        if info is None:
            log.warning("Ignoring unknown configuration variable %s", key)
            continue
        target_type = info.annotation
        if target_type not in {bool, int}:
            target_type = None
        config[field_name] = _coerce_env_value(value, target_type)
    return config


def get_pyproject_path() -> Path:
    """Return the project file to read, honouring ``CASTOR_PYPROJECT_PATH``."""
    override = os.environ.get(f"{ENV_PREFIX}PYPROJECT_PATH")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "pyproject.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file, returning an empty dict when missing or invalid."""
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def load_pyproject() -> Mapping[str, Any]:
    """Load the ``[tool.castor]`` table from the project file."""
    data = _read_toml(get_pyproject_path())
    section = data.get("tool", {}).get(CONFIG_TOOL_NAME, {})
    return dict(section) if isinstance(section, dict) else {}
