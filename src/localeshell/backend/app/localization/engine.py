"""Translation engine: resource store, key lookup and language switching."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from .catalog import LocaleCatalog, ResourceKey
from .diagnostics import report
from .loader import ResourceLoader
from .registry import TranslationBundle

_LOGGER = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"{{\s*([a-zA-Z0-9_.-]+)\s*}}")

Listener = Callable[..., None]


class EngineEvent(str, Enum):
    """Notifications emitted by :class:`TranslationEngine`."""

    LANGUAGE_CHANGED = "language_changed"
    LOADED = "loaded"


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving strings from one namespace."""

    locale: str
    namespace: str
    _engine: TranslationEngine

    def __call__(self, key: str, **params: Any) -> str:
        return self._engine.t(key, self.namespace, **params)


def _lookup(bundle: Mapping[str, Any], key: str) -> str | None:
    value = bundle.get(key)
    if isinstance(value, str):
        return value

    cursor: Any = bundle
    for part in key.split("."):
        if not isinstance(cursor, Mapping) or part not in cursor:
            return None
        cursor = cursor[part]
    return cursor if isinstance(cursor, str) else None


def _interpolate(message: str, params: Mapping[str, Any]) -> str:
    if not params:
        return message

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, message)


class TranslationEngine:
    """Holds registered bundles and the active language.

    Listeners run synchronously in subscription order. ``language_changed``
    fires only after every namespace in use has been loaded for the new
    language, so renders never observe a half-switched state.
    """

    def __init__(self, loader: ResourceLoader, *, language: str | None = None) -> None:
        self._loader = loader
        self._catalog = loader.catalog
        self._language = language or self._catalog.default_locale
        self._store: dict[ResourceKey, TranslationBundle] = {}
        self._namespaces_in_use: list[str] = [self._catalog.default_namespace]
        self._listeners: dict[EngineEvent, list[Listener]] = {event: [] for event in EngineEvent}

        for key in self._catalog.resource_keys():
            bundle = loader.peek(*key)
            if bundle is not None:
                self._store[key] = bundle

    @property
    def language(self) -> str:
        return self._language

    @property
    def catalog(self) -> LocaleCatalog:
        return self._catalog

    @property
    def namespaces_in_use(self) -> tuple[str, ...]:
        return tuple(self._namespaces_in_use)

    def subscribe(self, event: EngineEvent | str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``event`` and return its unsubscribe callable."""

        listeners = self._listeners[EngineEvent(event)]
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: EngineEvent, *args: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(*args)

    def has_resource_bundle(self, locale: str, namespace: str) -> bool:
        return ResourceKey(locale, namespace) in self._store

    def add_resource_bundle(self, locale: str, namespace: str, bundle: TranslationBundle) -> None:
        self._store[ResourceKey(locale, namespace)] = bundle
        self._emit(EngineEvent.LOADED, locale, namespace)

    async def load_namespaces(
        self, namespaces: Iterable[str], locale: str | None = None
    ) -> None:
        """Ensure ``namespaces`` are registered for ``locale`` and the default locale.

        Unknown namespaces are reported and dropped. A bundle the loader did
        not cache under the requested key (a fallback after a failed load) is
        not registered, so the next call retries it.
        """

        requested: list[str] = []
        for namespace in dict.fromkeys(namespaces):
            if not self._catalog.is_supported_namespace(namespace):
                report(_LOGGER, logging.ERROR, "Unknown namespace: %s", namespace)
                continue
            requested.append(namespace)
            if namespace not in self._namespaces_in_use:
                self._namespaces_in_use.append(namespace)

        locales = dict.fromkeys([locale or self._language, self._catalog.default_locale])
        missing = [
            ResourceKey(code, namespace)
            for namespace in requested
            for code in locales
            if not self.has_resource_bundle(code, namespace)
        ]
        if not missing:
            return

        bundles = await asyncio.gather(*(self._loader.load(*key) for key in missing))
        for key, bundle in zip(missing, bundles):
            if self._loader.peek(*key) is not bundle:
                report(_LOGGER, logging.DEBUG, "Serving fallback for %s until it loads", key.path)
                continue
            self.add_resource_bundle(key.locale, key.namespace, bundle)

    async def change_language(self, locale: str) -> None:
        if not self._catalog.is_supported_locale(locale):
            report(
                _LOGGER,
                logging.WARNING,
                "Unsupported language: %s, falling back to '%s'",
                locale,
                self._catalog.default_locale,
            )
            locale = self._catalog.default_locale

        await self.load_namespaces(self._namespaces_in_use, locale)
        self._language = locale
        report(_LOGGER, logging.DEBUG, "Language changed to: %s", locale)
        self._emit(EngineEvent.LANGUAGE_CHANGED, locale)

    async def use_translation(self, namespace: str | None = None) -> Translator:
        """Load ``namespace`` for the active language and bind a translator to it."""

        namespace = namespace or self._catalog.default_namespace
        await self.load_namespaces([namespace])
        return Translator(locale=self._language, namespace=namespace, _engine=self)

    def t(self, key: str, namespace: str | None = None, **params: Any) -> str:
        """Translate ``key``; unresolved keys are returned verbatim."""

        namespace = namespace or self._catalog.default_namespace
        namespaces = dict.fromkeys([namespace, self._catalog.default_namespace])
        locales = dict.fromkeys([self._language, self._catalog.default_locale])

        for candidate_namespace in namespaces:
            for code in locales:
                bundle = self._store.get(ResourceKey(code, candidate_namespace))
                if bundle is None:
                    continue
                message = _lookup(bundle, key)
                if message is not None:
                    return _interpolate(message, params)

        report(_LOGGER, logging.WARNING, "Missing key: %s/%s/%s", self._language, namespace, key)
        return key


__all__ = ["EngineEvent", "PLACEHOLDER_PATTERN", "TranslationEngine", "Translator"]
