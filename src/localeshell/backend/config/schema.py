"""Pydantic models describing the localization configuration schema."""

from __future__ import annotations

import re
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_CODE_PATTERN = re.compile(r"^[a-z]{2,3}$")
_NAMESPACE_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

DetectionSource = Literal["querystring", "cookie", "local_storage", "navigator"]


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class LocaleEntry(ImmutableModel):
    """A supported locale with its display metadata."""

    code: str
    name: str
    native_name: str

    @field_validator("code")
    @classmethod
    def _validate_code(cls, value: str) -> str:
        if not _CODE_PATTERN.match(value):
            raise ConfigurationError(
                f"Locale codes must be lower-case primary language subtags: {value!r}"
            )
        return value


class DetectionConfig(ImmutableModel):
    """Ordered detection sources and the query parameter name."""

    order: tuple[DetectionSource, ...] = (
        "querystring",
        "cookie",
        "local_storage",
        "navigator",
    )
    query_parameter: str = "lng"

    @model_validator(mode="after")
    def _validate_order(self) -> DetectionConfig:
        if not self.order:
            raise ConfigurationError("Detection order must list at least one source")
        if len(set(self.order)) != len(self.order):
            raise ConfigurationError("Detection sources must not repeat")
        if not self.query_parameter:
            raise ConfigurationError("Detection query parameter must not be empty")
        return self


class PersistenceConfig(ImmutableModel):
    """Cookie and local storage layout for the persisted preference."""

    cookie_name: str = "i18next"
    cookie_path: str = "/"
    cookie_same_site: Literal["Strict", "Lax", "None"] = "Strict"
    cookie_max_age: int = Field(default=60 * 60 * 24 * 365, gt=0)
    storage_key: str = "i18nextLng"

    @model_validator(mode="after")
    def _validate_names(self) -> PersistenceConfig:
        if not self.cookie_name or not self.storage_key:
            raise ConfigurationError("Cookie name and storage key must not be empty")
        if not self.cookie_path.startswith("/"):
            raise ConfigurationError("Cookie path must be absolute")
        return self


class LocalizationConfig(ImmutableModel):
    """Top-level localization configuration."""

    locales: tuple[LocaleEntry, ...]
    default_locale: str
    namespaces: tuple[str, ...]
    default_namespace: str
    rtl_locales: tuple[str, ...] = ()
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)

    @field_validator("namespaces")
    @classmethod
    def _validate_namespaces(cls, value: Sequence[str]) -> tuple[str, ...]:
        for namespace in value:
            if not _NAMESPACE_PATTERN.match(namespace):
                raise ConfigurationError(f"Invalid namespace name: {namespace!r}")
        return tuple(value)

    @field_validator("rtl_locales")
    @classmethod
    def _validate_rtl_locales(cls, value: Sequence[str]) -> tuple[str, ...]:
        for code in value:
            if not _CODE_PATTERN.match(code):
                raise ConfigurationError(f"Invalid right-to-left locale code: {code!r}")
        return tuple(value)

    @model_validator(mode="after")
    def _validate_closed_sets(self) -> LocalizationConfig:
        if not self.locales:
            raise ConfigurationError("At least one locale must be configured")
        if not self.namespaces:
            raise ConfigurationError("At least one namespace must be configured")

        codes = [entry.code for entry in self.locales]
        if len(set(codes)) != len(codes):
            raise ConfigurationError("Locale codes must be unique")
        if len(set(self.namespaces)) != len(self.namespaces):
            raise ConfigurationError("Namespaces must be unique")

        if self.default_locale not in codes:
            raise ConfigurationError(
                f"Default locale {self.default_locale!r} is not a supported locale"
            )
        if self.default_namespace not in self.namespaces:
            raise ConfigurationError(
                f"Default namespace {self.default_namespace!r} is not a supported namespace"
            )
        return self


__all__ = [
    "ConfigurationError",
    "DetectionConfig",
    "DetectionSource",
    "ImmutableModel",
    "LocaleEntry",
    "LocalizationConfig",
    "PersistenceConfig",
]
