"""Registry of lazy bundle loaders generated from the translations manifest.

``scripts/validate_translations.py`` writes ``translations/manifest.json``
listing every ``{locale}/{namespace}`` bundle shipped with the package. The
registry built here maps each listed key to an async loader, restricted to the
catalog's locale and namespace product, so nothing is discovered by scanning
directories at runtime.
"""

from __future__ import annotations

import asyncio
import json
from functools import partial
from importlib import resources
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

from .catalog import LocaleCatalog, ResourceKey, get_catalog

TRANSLATIONS_PACKAGE = "localeshell.translations"
MANIFEST_NAME = "manifest.json"

TranslationBundle = Mapping[str, Any]
BundleLoader = Callable[[], Awaitable[Mapping[str, Any]]]

EMPTY_BUNDLE: TranslationBundle = MappingProxyType({})


def freeze_bundle(payload: Mapping[str, Any], _prefix: str = "") -> TranslationBundle:
    """Return a read-only copy of ``payload`` with nested groups frozen too.

    Leaves must be strings; anything else raises :class:`ValueError` so the
    loader falls back instead of rendering a stringified list or number.
    """

    frozen: dict[str, Any] = {}
    for key, value in payload.items():
        path = f"{_prefix}{key}"
        if isinstance(value, Mapping):
            frozen[str(key)] = freeze_bundle(value, f"{path}.")
        elif isinstance(value, str):
            frozen[str(key)] = value
        else:
            raise ValueError(
                f"Translation value at {path!r} must be a string, not {type(value).__name__}"
            )
    return MappingProxyType(frozen)


def bundle_to_dict(bundle: TranslationBundle) -> dict[str, Any]:
    """Return a plain, JSON-serialisable copy of ``bundle``."""

    return {
        key: bundle_to_dict(value) if isinstance(value, Mapping) else value
        for key, value in bundle.items()
    }


def read_bundle_sync(locale: str, namespace: str) -> dict[str, Any]:
    """Read one packaged bundle from disk."""

    resource = (
        resources.files(TRANSLATIONS_PACKAGE).joinpath(locale).joinpath(f"{namespace}.json")
    )
    if not resource.is_file():
        raise FileNotFoundError(f"Translation file not found: {locale}/{namespace}.json")

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, dict):
        raise ValueError(f"Translation file must define a mapping: {locale}/{namespace}.json")
    return payload


async def read_bundle(locale: str, namespace: str) -> dict[str, Any]:
    return await asyncio.to_thread(read_bundle_sync, locale, namespace)


def load_manifest() -> tuple[str, ...]:
    """Return the ``{locale}/{namespace}`` paths listed in the manifest."""

    resource = resources.files(TRANSLATIONS_PACKAGE).joinpath(MANIFEST_NAME)
    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    entries = payload.get("resources") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise ValueError("Translation manifest must list resources")
    return tuple(str(entry) for entry in entries)


def build_registry(
    catalog: LocaleCatalog | None = None,
    manifest: tuple[str, ...] | None = None,
) -> dict[ResourceKey, BundleLoader]:
    """Map every manifest entry inside the catalog to its loader."""

    catalog = catalog or get_catalog()
    admitted = set(catalog.resource_keys())
    registry: dict[ResourceKey, BundleLoader] = {}

    for entry in manifest if manifest is not None else load_manifest():
        locale, _, namespace = entry.partition("/")
        key = ResourceKey(locale, namespace)
        if key in admitted:
            registry[key] = partial(read_bundle, locale, namespace)

    return registry


__all__ = [
    "BundleLoader",
    "EMPTY_BUNDLE",
    "MANIFEST_NAME",
    "TRANSLATIONS_PACKAGE",
    "TranslationBundle",
    "build_registry",
    "bundle_to_dict",
    "freeze_bundle",
    "load_manifest",
    "read_bundle",
    "read_bundle_sync",
]
