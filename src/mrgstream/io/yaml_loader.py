"""Run config loading from YAML or JSON files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mrgstream.config.schema import RunConfig
from mrgstream.utils.exceptions import ConfigError


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    Args:
        path: Absolute or relative path to the YAML file.

    Returns:
        Parsed YAML content (typically a dict or list).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(path) as f:
        return yaml.safe_load(f)


def load_run_config(path: Path) -> RunConfig:
    """Load a :class:`RunConfig` from a ``.yaml``/``.yml`` or ``.json`` file.

    JSON is a subset of YAML, so both go through the YAML parser.

    Raises:
        ConfigError: If the file content is not a mapping or fails validation.
    """
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    try:
        return RunConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
