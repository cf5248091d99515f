"""Closed sets of supported locales and translation namespaces."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import Iterator, NamedTuple

from localeshell.backend.config import LocalizationConfig, load_localization_config


class ResourceKey(NamedTuple):
    """Identifies one loadable translation bundle."""

    locale: str
    namespace: str

    @property
    def path(self) -> str:
        return f"{self.locale}/{self.namespace}"


@dataclass(frozen=True)
class LocaleInfo:
    """Display metadata for a supported locale."""

    code: str
    name: str
    native_name: str


@dataclass(frozen=True)
class LocaleCatalog:
    """Immutable description of every locale and namespace the system accepts."""

    locales: tuple[LocaleInfo, ...]
    namespaces: tuple[str, ...]
    default_locale: str
    default_namespace: str
    rtl_locales: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config: LocalizationConfig) -> LocaleCatalog:
        return cls(
            locales=tuple(
                LocaleInfo(code=entry.code, name=entry.name, native_name=entry.native_name)
                for entry in config.locales
            ),
            namespaces=tuple(config.namespaces),
            default_locale=config.default_locale,
            default_namespace=config.default_namespace,
            rtl_locales=frozenset(config.rtl_locales),
        )

    @property
    def locale_codes(self) -> tuple[str, ...]:
        return tuple(info.code for info in self.locales)

    def is_supported_locale(self, code: object) -> bool:
        return isinstance(code, str) and code in self.locale_codes

    def is_supported_namespace(self, namespace: object) -> bool:
        return isinstance(namespace, str) and namespace in self.namespaces

    def direction(self, locale: str) -> str:
        """Return the text direction (``rtl`` or ``ltr``) for ``locale``."""

        return "rtl" if locale in self.rtl_locales else "ltr"

    def locale_info(self, code: str) -> LocaleInfo:
        for info in self.locales:
            if info.code == code:
                return info
        raise KeyError(code)

    def resource_keys(self) -> Iterator[ResourceKey]:
        """Yield every (locale, namespace) pair the catalog admits."""

        for code in self.locale_codes:
            for namespace in self.namespaces:
                yield ResourceKey(code, namespace)


@cache
def get_catalog() -> LocaleCatalog:
    """Return the process-wide catalog built from the packaged configuration."""

    return LocaleCatalog.from_config(load_localization_config())


__all__ = ["LocaleCatalog", "LocaleInfo", "ResourceKey", "get_catalog"]
