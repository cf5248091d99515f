"""YAML-backed configuration for locales, namespaces and persistence."""

from .locale_config import (
    ConfigurationError,
    LocalizationConfig,
    load_localization_config,
    parse_localization_config,
)

__all__ = [
    "ConfigurationError",
    "LocalizationConfig",
    "load_localization_config",
    "parse_localization_config",
]
