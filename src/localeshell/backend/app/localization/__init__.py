"""Locale detection, translation bundle loading and locale synchronisation."""

from .catalog import LocaleCatalog, LocaleInfo, ResourceKey, get_catalog
from .detector import LocaleDetector, Navigation
from .dom import Document, DomSync
from .engine import EngineEvent, TranslationEngine, Translator
from .loader import ResourceLoader
from .normaliser import normalise_locale
from .persistence import (
    CookieAttributes,
    InMemoryCookieJar,
    InMemoryLocalStorage,
    PersistenceAdapter,
    StorageUnavailableError,
)
from .provider import (
    LocaleCapability,
    LocaleProviderError,
    bind_locale_state,
    provide_locale,
    release_locale_state,
    use_locale,
)
from .registry import EMPTY_BUNDLE, TranslationBundle, build_registry
from .session import LocaleRuntime, LocaleSession
from .state import LocaleState

__all__ = [
    "CookieAttributes",
    "Document",
    "DomSync",
    "EMPTY_BUNDLE",
    "EngineEvent",
    "InMemoryCookieJar",
    "InMemoryLocalStorage",
    "LocaleCapability",
    "LocaleCatalog",
    "LocaleDetector",
    "LocaleInfo",
    "LocaleProviderError",
    "LocaleRuntime",
    "LocaleSession",
    "LocaleState",
    "Navigation",
    "PersistenceAdapter",
    "ResourceKey",
    "ResourceLoader",
    "StorageUnavailableError",
    "TranslationBundle",
    "TranslationEngine",
    "Translator",
    "bind_locale_state",
    "build_registry",
    "get_catalog",
    "normalise_locale",
    "provide_locale",
    "release_locale_state",
    "use_locale",
]
