"""Project configuration loading for alkali.

This module handles loading alkali.config.json:
- load_config: Parse a config file into AlkaliConfig, with defaults when absent
- ALKALI_CONFIG environment variable as the default config path
- JSON by default; .yaml/.yml files are parsed as YAML
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from alkali_core.errors import ConfigurationError
from alkali_core.schemas import AlkaliConfig

logger = structlog.get_logger(__name__)

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "ALKALI_CONFIG"

# Standard config file name in the project root
CONFIG_FILE_NAME = "alkali.config.json"

YAML_SUFFIXES = (".yaml", ".yml")


def get_config_path() -> Path:
    """Return the config path from ALKALI_CONFIG, or alkali.config.json."""
    return Path(os.environ.get(CONFIG_ENV_VAR, CONFIG_FILE_NAME))


def load_config(path: Path | str | None = None) -> AlkaliConfig:
    """Load alkali.config.json.

    A missing file is not an error: the default configuration is returned.
    A file that exists but cannot be parsed or validated is.

    Args:
        path: Config file path. Defaults to get_config_path().

    Returns:
        Validated AlkaliConfig.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.

    Example:
        >>> config = load_config("alkali.config.json")
        >>> options = config.to_compiler_options()
    """
    config_path = Path(path) if path is not None else get_config_path()

    if not config_path.exists():
        logger.debug("config_not_found", path=str(config_path))
        return AlkaliConfig()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration: {e.strerror or e}",
            file_path=str(config_path),
        ) from e

    raw_data = _parse(content, config_path)

    try:
        config = AlkaliConfig.model_validate(raw_data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(x) for x in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}",
            file_path=str(config_path),
            field_path=field_path,
        ) from e

    logger.debug("config_loaded", path=str(config_path), name=config.name)
    return config


def _parse(content: str, config_path: Path) -> dict[str, Any]:
    """Parse config file content as JSON or YAML depending on the suffix.

    Args:
        content: Raw file content.
        config_path: Path the content was read from.

    Returns:
        Parsed mapping. An empty file yields an empty mapping.

    Raises:
        ConfigurationError: If the content is not a valid mapping.
    """
    try:
        if config_path.suffix in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content) if content.strip() else None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Configuration is not valid: {e}",
            file_path=str(config_path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration must be a mapping",
            file_path=str(config_path),
        )
    return data
