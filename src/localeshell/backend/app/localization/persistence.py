"""Durable storage of the user's last explicitly chosen locale.

The preference is written to two redundant backends: a cookie, visible to every
tab of the browser, and a local storage entry that backs it up when cookies are
cleared. Reads feed the detector and never raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Protocol

from localeshell.backend.config import load_localization_config
from localeshell.backend.config.schema import PersistenceConfig

from .catalog import LocaleCatalog, get_catalog
from .diagnostics import report
from .normaliser import normalise_locale

_LOGGER = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    """Raised by storage backends that cannot be read or written."""


@dataclass(frozen=True)
class CookieAttributes:
    """Attributes attached to a cookie when it is written."""

    path: str
    same_site: str
    max_age: int


class CookieJar(Protocol):
    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str, attributes: CookieAttributes) -> None: ...


class LocalStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class InMemoryCookieJar:
    """Thread-safe cookie jar that remembers the attributes of each write."""

    def __init__(self, cookies: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(cookies or {})
        self._attributes: dict[str, CookieAttributes] = {}
        self._lock = Lock()

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._values.get(name)

    def set(self, name: str, value: str, attributes: CookieAttributes) -> None:
        with self._lock:
            self._values[name] = value
            self._attributes[name] = attributes

    def attributes(self, name: str) -> CookieAttributes | None:
        with self._lock:
            return self._attributes.get(name)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self._attributes.clear()


class InMemoryLocalStorage:
    """Thread-safe key/value store standing in for browser local storage."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})
        self._lock = Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class PersistenceAdapter:
    """Write-through store for the locale preference."""

    def __init__(
        self,
        cookies: CookieJar,
        storage: LocalStorage,
        *,
        catalog: LocaleCatalog | None = None,
        config: PersistenceConfig | None = None,
    ) -> None:
        self._cookies = cookies
        self._storage = storage
        self._catalog = catalog or get_catalog()
        self._config = config or load_localization_config().persistence

    @property
    def cookie_attributes(self) -> CookieAttributes:
        return CookieAttributes(
            path=self._config.cookie_path,
            same_site=self._config.cookie_same_site,
            max_age=self._config.cookie_max_age,
        )

    def write(self, locale: str) -> None:
        """Persist ``locale`` to both backends.

        A failing backend is reported and skipped so the other one still
        receives the preference.
        """

        try:
            self._cookies.set(self._config.cookie_name, locale, self.cookie_attributes)
        except StorageUnavailableError as error:
            report(_LOGGER, logging.WARNING, "Cookie write failed: %s", error)

        try:
            self._storage.set_item(self._config.storage_key, locale)
        except StorageUnavailableError as error:
            report(_LOGGER, logging.WARNING, "Local storage write failed: %s", error)

    def read_cookie(self) -> str | None:
        try:
            raw = self._cookies.get(self._config.cookie_name)
        except StorageUnavailableError as error:
            report(_LOGGER, logging.WARNING, "Cookie read failed: %s", error)
            return None
        return normalise_locale(raw, self._catalog)

    def read_storage(self) -> str | None:
        try:
            raw = self._storage.get_item(self._config.storage_key)
        except StorageUnavailableError as error:
            report(_LOGGER, logging.WARNING, "Local storage read failed: %s", error)
            return None
        return normalise_locale(raw, self._catalog)

    def read(self) -> str | None:
        """Return the persisted preference, cookie first."""

        return self.read_cookie() or self.read_storage()


__all__ = [
    "CookieAttributes",
    "CookieJar",
    "InMemoryCookieJar",
    "InMemoryLocalStorage",
    "LocalStorage",
    "PersistenceAdapter",
    "StorageUnavailableError",
]
