"""Memoised, fallback-aware loading of translation bundles."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Mapping

from .catalog import LocaleCatalog, ResourceKey, get_catalog
from .diagnostics import report
from .registry import (
    EMPTY_BUNDLE,
    BundleLoader,
    TranslationBundle,
    build_registry,
    freeze_bundle,
    read_bundle_sync,
)

_LOGGER = logging.getLogger(__name__)


class ResourceLoader:
    """Resolve ``(locale, namespace)`` pairs to immutable translation bundles.

    Each key is loaded at most once: concurrent callers share the in-flight
    task and every later call is served from the cache. A missing or failing
    bundle falls back to the default locale for the same namespace; if that
    fails too the caller receives an empty bundle instead of an exception.
    """

    def __init__(
        self,
        registry: Mapping[ResourceKey, BundleLoader],
        *,
        catalog: LocaleCatalog | None = None,
        embedded: Mapping[ResourceKey, Mapping[str, object]] | None = None,
    ) -> None:
        self._catalog = catalog or get_catalog()
        self._registry = dict(registry)
        self._cache: dict[ResourceKey, TranslationBundle] = {}
        self._pending: dict[ResourceKey, asyncio.Future[TranslationBundle]] = {}

        for key, payload in (embedded or {}).items():
            self._cache[ResourceKey(*key)] = freeze_bundle(payload)

    @classmethod
    def from_package(cls, catalog: LocaleCatalog | None = None) -> ResourceLoader:
        """Build a loader over the packaged bundles.

        The default locale's default namespace is read eagerly so the first
        render never waits on I/O.
        """

        catalog = catalog or get_catalog()
        default_key = ResourceKey(catalog.default_locale, catalog.default_namespace)
        return cls(
            build_registry(catalog),
            catalog=catalog,
            embedded={default_key: read_bundle_sync(*default_key)},
        )

    @property
    def catalog(self) -> LocaleCatalog:
        return self._catalog

    def peek(self, locale: str, namespace: str) -> TranslationBundle | None:
        """Return the cached bundle for the key without loading it."""

        return self._cache.get(ResourceKey(locale, namespace))

    def cached_keys(self) -> tuple[ResourceKey, ...]:
        return tuple(self._cache)

    async def load(self, locale: str, namespace: str) -> TranslationBundle:
        if not self._catalog.is_supported_namespace(namespace):
            report(_LOGGER, logging.ERROR, "Unknown namespace: %s", namespace)
            return EMPTY_BUNDLE

        if not self._catalog.is_supported_locale(locale):
            report(
                _LOGGER,
                logging.WARNING,
                "Unsupported language: %s, falling back to '%s'",
                locale,
                self._catalog.default_locale,
            )
            locale = self._catalog.default_locale

        key = ResourceKey(locale, namespace)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        pending = self._pending.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve(key))
            self._pending[key] = pending
            pending.add_done_callback(partial(self._forget, key))

        # Shielded so one cancelled caller does not cancel the shared load.
        return await asyncio.shield(pending)

    def _forget(self, key: ResourceKey, future: asyncio.Future[TranslationBundle]) -> None:
        if self._pending.get(key) is future:
            del self._pending[key]

    async def _resolve(self, key: ResourceKey) -> TranslationBundle:
        loader = self._registry.get(key)
        if loader is None:
            report(_LOGGER, logging.ERROR, "Translation file not found: %s", key.path)
            bundle = await self._fall_back(key)
            if bundle is not EMPTY_BUNDLE:
                self._cache[key] = bundle
            return bundle

        try:
            bundle = freeze_bundle(await loader())
        except Exception as error:
            report(_LOGGER, logging.ERROR, "Failed to load %s: %s", key.path, error)
            return await self._fall_back(key)

        self._cache[key] = bundle
        report(_LOGGER, logging.DEBUG, "Loaded %s successfully", key.path)
        return bundle

    async def _fall_back(self, key: ResourceKey) -> TranslationBundle:
        default_locale = self._catalog.default_locale
        if key.locale == default_locale:
            return EMPTY_BUNDLE

        report(
            _LOGGER,
            logging.WARNING,
            "Falling back to %s/%s",
            default_locale,
            key.namespace,
        )
        return await self.load(default_locale, key.namespace)


__all__ = ["ResourceLoader"]
