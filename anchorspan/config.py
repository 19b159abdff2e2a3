"""
Resolver configuration.

Settings live in a YAML file:

    resolution:
      window: 50
    validation:
      warn_on_fuzzy: true

The file path can also come from ANCHORSPAN_CONFIG (a .env file is honoured).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

from .binding.anchor_resolver import LOOKBACK_WINDOW

CONFIG_ENV_VAR = "ANCHORSPAN_CONFIG"

_SECTIONS = {
    "resolution": {"window"},
    "validation": {"warn_on_fuzzy"},
}


@dataclass
class ResolverConfig:
    """Resolver and validation settings."""

    # Back-mapping window for the whitespace-normalized tier
    window: int = LOOKBACK_WINDOW

    # Validation
    warn_on_fuzzy: bool = True


def load_config(path: Optional[Union[str, Path]] = None) -> ResolverConfig:
    """
    Load configuration from YAML.

    Args:
        path: Config file; falls back to $ANCHORSPAN_CONFIG, then defaults

    Returns:
        ResolverConfig

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If the file contains unknown keys or invalid values
    """
    if path is None:
        load_dotenv()
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return ResolverConfig()

    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping at the top level")

    values: dict = {}
    for section, content in data.items():
        allowed = _SECTIONS.get(section)
        if allowed is None:
            raise ValueError(f"Unknown config section: {section!r}")
        content = content or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config section {section!r} must be a mapping")
        for key, value in content.items():
            if key not in allowed:
                raise ValueError(f"Unknown key {key!r} in section {section!r}")
            values[key] = value

    config = ResolverConfig(**values)

    if isinstance(config.window, bool) or not isinstance(config.window, int) or config.window <= 0:
        raise ValueError(f"resolution.window must be a positive integer, got {config.window!r}")
    if not isinstance(config.warn_on_fuzzy, bool):
        raise ValueError(f"validation.warn_on_fuzzy must be a boolean, got {config.warn_on_fuzzy!r}")

    return config
