"""YAML loading for HintsConfig."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from sass_hints.core.config.models import HintsConfig
from sass_hints.core.exceptions import ConfigError, ConfigValidationError

logger = logging.getLogger(__name__)

# Settings files are tiny; anything bigger is almost certainly the wrong file
MAX_CONFIG_SIZE = 64 * 1024


def load_config(path: Path) -> HintsConfig:
    """Load and validate a configuration file.

    Args:
        path: Path to a YAML mapping of option names to values.

    Returns:
        Validated HintsConfig.

    Raises:
        ConfigError: On file or parse errors.
        ConfigValidationError: If values fail validation.

    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config {path} exceeds {MAX_CONFIG_SIZE} bytes")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.debug("Config %s is empty, using defaults", path)
        return HintsConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(data).__name__}")

    try:
        return HintsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Config validation failed for {path}",
            [dict(err) for err in e.errors()],
        ) from e
