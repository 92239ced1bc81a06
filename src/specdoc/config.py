"""Project configuration with XDG paths and precedence resolution.

specdoc reads an optional project file, ``specdoc.json``, from the working
directory (or from the path given with ``--config``). Its keys are the
fields of :class:`~specdoc.models.ProjectConfig`, in snake_case or
camelCase::

    {
      "spec": "openapi.yaml",
      "outputDir": "./docs",
      "generators": ["markdown", "postman"],
      "tagOrder": ["Users", "Orders"],
      "excludeBrand": true
    }

:func:`resolve_config` layers CLI flags and environment variables on top
of the file. :func:`get_data_dir` locates the directory used for crash logs.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specdoc.exceptions import ConfigError
from specdoc.models import ProjectConfig

_APP_NAME = "specdoc"
PROJECT_CONFIG_FILENAME = "specdoc.json"

ENV_SPEC = "SPECDOC_SPEC"
ENV_OUTPUT_DIR = "SPECDOC_OUTPUT_DIR"
ENV_BASE_URL = "SPECDOC_BASE_URL"
ENV_EXCLUDE_BRAND = "SPECDOC_EXCLUDE_BRAND"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specdoc/`` (default ``~/.local/share/specdoc/``).
    On macOS/Windows: ``~/.specdoc/logs/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project config ---


def load_project_config(path: Optional[str | Path] = None) -> Optional[dict[str, Any]]:
    """Load the raw project configuration.

    Args:
        path: Explicit config file. When ``None``, ``./specdoc.json`` is
            read if it exists.

    Returns:
        The parsed JSON object, or ``None`` when no file was given and
        ``./specdoc.json`` does not exist.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is
            not a valid JSON object.
    """
    if path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME
        if not config_path.is_file():
            return None
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {config_path}: expected a JSON object")
    return data


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


# --- Precedence resolution ---


def resolve_config(
    config_path: Optional[str | Path] = None,
    cli_spec: Optional[str] = None,
    cli_output_dir: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    cli_exclude_brand: Optional[bool] = None,
    cli_tag_order: Optional[list[str]] = None,
    cli_url_encode_anchors: Optional[bool] = None,
    cli_generators: Optional[list[str]] = None,
) -> ProjectConfig:
    """Resolve the effective project configuration.

    Precedence (high to low):
        1. CLI flags (any ``cli_*`` argument that is not ``None``)
        2. Environment variables (``SPECDOC_SPEC``, ``SPECDOC_OUTPUT_DIR``,
           ``SPECDOC_BASE_URL``, ``SPECDOC_EXCLUDE_BRAND``)
        3. Project config (``./specdoc.json`` or *config_path*)
        4. Defaults

    Raises:
        ConfigError: If the project file or an environment value is invalid.
    """
    raw = load_project_config(config_path) or {}
    try:
        config = ProjectConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc

    updates: dict[str, Any] = {}

    # 2. Environment variables
    if os.environ.get(ENV_SPEC):
        updates["spec"] = os.environ[ENV_SPEC]
    if os.environ.get(ENV_OUTPUT_DIR):
        updates["output_dir"] = os.environ[ENV_OUTPUT_DIR]
    if os.environ.get(ENV_BASE_URL):
        updates["base_url"] = os.environ[ENV_BASE_URL]
    env_exclude_brand = _env_flag(ENV_EXCLUDE_BRAND)
    if env_exclude_brand is not None:
        updates["exclude_brand"] = env_exclude_brand

    # 1. CLI flags
    cli_values = {
        "spec": cli_spec,
        "output_dir": cli_output_dir,
        "base_url": cli_base_url,
        "exclude_brand": cli_exclude_brand,
        "tag_order": cli_tag_order or None,
        "url_encode_anchors": cli_url_encode_anchors,
        "generators": cli_generators or None,
    }
    updates.update({key: value for key, value in cli_values.items() if value is not None})

    return config.model_copy(update=updates)
