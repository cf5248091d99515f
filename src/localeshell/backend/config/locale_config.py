"""Configuration loader wrapping the localization schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    DetectionConfig,
    DetectionSource,
    LocaleEntry,
    LocalizationConfig,
    PersistenceConfig,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
LOCALIZATION_FILE = CONFIG_DIRECTORY / "localization.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def parse_localization_config(raw_config: dict[str, Any]) -> LocalizationConfig:
    """Validate a raw mapping against the localization schema."""

    try:
        return LocalizationConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Localization configuration invalid: {error}") from error


@lru_cache(maxsize=1)
def load_localization_config() -> LocalizationConfig:
    """Load and cache the localization configuration from disk."""

    if not LOCALIZATION_FILE.exists():
        raise FileNotFoundError("Localization configuration not found")

    return parse_localization_config(_load_yaml(LOCALIZATION_FILE))


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "DetectionConfig",
    "DetectionSource",
    "LOCALIZATION_FILE",
    "LocaleEntry",
    "LocalizationConfig",
    "PersistenceConfig",
    "load_localization_config",
    "parse_localization_config",
]
