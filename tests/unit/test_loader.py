"""Tests for memoised, fallback-aware bundle loading."""

from __future__ import annotations

import asyncio
from collections import Counter
from functools import partial
from typing import Any

import pytest

from localeshell.backend.app.localization import (
    EMPTY_BUNDLE,
    LocaleCatalog,
    ResourceKey,
    ResourceLoader,
    build_registry,
    get_catalog,
)
from localeshell.backend.app.localization.registry import freeze_bundle

EN_COMMON = {"app": {"title": "LocaleShell"}, "greeting": "Hello"}
JA_COMMON = {"app": {"title": "ロケールシェル"}, "greeting": "こんにちは"}
EN_ERRORS = {"generic": "Something went wrong."}


class FakeSource:
    """Counting async loaders over in-memory payloads."""

    def __init__(
        self,
        payloads: dict[tuple[str, str], dict[str, Any]],
        *,
        failing: tuple[tuple[str, str], ...] = (),
        gate: asyncio.Event | None = None,
    ) -> None:
        self.payloads = payloads
        self.failing = failing
        self.gate = gate
        self.calls: Counter[tuple[str, str]] = Counter()

    def registry(self) -> dict[ResourceKey, Any]:
        keys = set(self.payloads) | set(self.failing)
        return {ResourceKey(*key): partial(self._load, key) for key in keys}

    async def _load(self, key: tuple[str, str]) -> dict[str, Any]:
        self.calls[key] += 1
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        if key in self.failing:
            raise OSError(f"disk error reading {key}")
        return self.payloads[key]


def _loader(source: FakeSource, catalog: LocaleCatalog) -> ResourceLoader:
    return ResourceLoader(
        source.registry(),
        catalog=catalog,
        embedded={ResourceKey("en", "common"): EN_COMMON},
    )


def test_embedded_bundle_is_available_synchronously(catalog: LocaleCatalog) -> None:
    source = FakeSource({})
    loader = _loader(source, catalog)

    bundle = loader.peek("en", "common")

    assert bundle is not None
    assert bundle["greeting"] == "Hello"
    assert loader.peek("ja", "common") is None
    assert not source.calls


def test_concurrent_loads_share_one_fetch(catalog: LocaleCatalog) -> None:
    source = FakeSource({("ja", "common"): JA_COMMON})
    loader = _loader(source, catalog)

    async def scenario():
        return await asyncio.gather(loader.load("ja", "common"), loader.load("ja", "common"))

    first, second = asyncio.run(scenario())

    assert first is second
    assert first["greeting"] == "こんにちは"
    assert source.calls[("ja", "common")] == 1


def test_resolved_bundles_are_served_from_cache(catalog: LocaleCatalog) -> None:
    source = FakeSource({("ja", "common"): JA_COMMON})
    loader = _loader(source, catalog)

    async def scenario():
        first = await loader.load("ja", "common")
        second = await loader.load("ja", "common")
        return first, second

    first, second = asyncio.run(scenario())

    assert first is second
    assert source.calls[("ja", "common")] == 1
    assert ResourceKey("ja", "common") in loader.cached_keys()


def test_cancelled_caller_does_not_cancel_shared_load(catalog: LocaleCatalog) -> None:
    async def scenario():
        source = FakeSource({("ja", "common"): JA_COMMON}, gate=asyncio.Event())
        loader = _loader(source, catalog)
        first = asyncio.ensure_future(loader.load("ja", "common"))
        second = asyncio.ensure_future(loader.load("ja", "common"))
        await asyncio.sleep(0)
        first.cancel()
        source.gate.set()
        return source, await second

    source, bundle = asyncio.run(scenario())

    assert bundle["greeting"] == "こんにちは"
    assert source.calls[("ja", "common")] == 1


def test_missing_loader_falls_back_to_default_locale(catalog: LocaleCatalog) -> None:
    source = FakeSource({("en", "errors"): EN_ERRORS})
    loader = _loader(source, catalog)

    async def scenario():
        fallback = await loader.load("ja", "errors")
        default = await loader.load("en", "errors")
        return fallback, default

    fallback, default = asyncio.run(scenario())

    assert fallback is default
    assert fallback["generic"] == "Something went wrong."
    assert loader.peek("ja", "errors") is default


def test_failed_load_falls_back_and_retries_later(catalog: LocaleCatalog) -> None:
    source = FakeSource(
        {("en", "errors"): EN_ERRORS},
        failing=(("ja", "errors"),),
    )
    loader = _loader(source, catalog)

    async def scenario():
        first = await loader.load("ja", "errors")
        second = await loader.load("ja", "errors")
        return first, second

    first, second = asyncio.run(scenario())

    assert first["generic"] == "Something went wrong."
    assert second is first
    assert source.calls[("ja", "errors")] == 2
    assert source.calls[("en", "errors")] == 1


def test_default_locale_failure_degrades_to_empty_bundle(catalog: LocaleCatalog) -> None:
    source = FakeSource({}, failing=(("en", "tasks"),))
    loader = _loader(source, catalog)

    async def scenario():
        return await loader.load("ja", "tasks"), await loader.load("en", "tasks")

    from_ja, from_en = asyncio.run(scenario())

    assert from_ja is EMPTY_BUNDLE
    assert from_en is EMPTY_BUNDLE


def test_unknown_namespace_returns_empty_without_io(catalog: LocaleCatalog) -> None:
    source = FakeSource({("ja", "common"): JA_COMMON})
    loader = _loader(source, catalog)

    bundle = asyncio.run(loader.load("ja", "credentials"))

    assert bundle is EMPTY_BUNDLE
    assert not source.calls


def test_unsupported_locale_uses_default_locale(catalog: LocaleCatalog) -> None:
    source = FakeSource({("en", "errors"): EN_ERRORS})
    loader = _loader(source, catalog)

    bundle = asyncio.run(loader.load("fr", "errors"))

    assert bundle["generic"] == "Something went wrong."
    assert source.calls[("en", "errors")] == 1


def test_loaded_bundles_are_read_only(catalog: LocaleCatalog) -> None:
    source = FakeSource({("ja", "common"): JA_COMMON})
    loader = _loader(source, catalog)

    bundle = asyncio.run(loader.load("ja", "common"))

    with pytest.raises(TypeError):
        bundle["greeting"] = "changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        bundle["app"]["title"] = "changed"  # type: ignore[index]


def test_registry_is_closed_over_the_catalog(catalog: LocaleCatalog) -> None:
    registry = build_registry(
        catalog,
        manifest=("en/common", "ja/tasks", "fr/common", "en/credentials"),
    )

    assert set(registry) == {ResourceKey("en", "common"), ResourceKey("ja", "tasks")}


def test_packaged_registry_covers_every_bundle() -> None:
    catalog = get_catalog()

    assert set(build_registry(catalog)) == set(catalog.resource_keys())


def test_packaged_loader_reads_japanese_bundles() -> None:
    loader = ResourceLoader.from_package(get_catalog())

    assert loader.peek("en", "common")["app"]["title"] == "LocaleShell"

    bundle = asyncio.run(loader.load("ja", "workflows"))

    assert bundle["title"] == "ワークフロー"
    assert bundle["run"]["button"] == "実行"


def test_non_string_values_are_rejected_and_fall_back(catalog: LocaleCatalog) -> None:
    source = FakeSource(
        {
            ("en", "tasks"): {"title": "Tasks"},
            ("ja", "tasks"): {"title": "タスク", "labels": ["a", "b"]},
        }
    )
    loader = _loader(source, catalog)

    bundle = asyncio.run(loader.load("ja", "tasks"))

    assert bundle["title"] == "Tasks"
    assert loader.peek("ja", "tasks") is None
    with pytest.raises(ValueError, match="'status.count' must be a string"):
        freeze_bundle({"status": {"count": 3}})
