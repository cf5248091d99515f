"""Tests for locale detection precedence."""

from __future__ import annotations

from localeshell.backend.app.localization import (
    InMemoryCookieJar,
    InMemoryLocalStorage,
    LocaleCatalog,
    LocaleDetector,
    Navigation,
    PersistenceAdapter,
)
from localeshell.backend.config.schema import DetectionConfig


def _detector(
    persistence: PersistenceAdapter,
    catalog: LocaleCatalog,
    navigation: Navigation | None = None,
    **config: object,
) -> LocaleDetector:
    return LocaleDetector(
        persistence,
        navigation or Navigation(),
        catalog=catalog,
        config=DetectionConfig(**config),
    )


def test_query_parameter_beats_cookie(
    cookies: InMemoryCookieJar, persistence: PersistenceAdapter, catalog: LocaleCatalog
) -> None:
    cookies._values["i18next"] = "en"
    navigation = Navigation(query_locale="ja", languages=("en-US",))

    assert _detector(persistence, catalog, navigation).detect() == "ja"


def test_cookie_beats_local_storage(
    cookies: InMemoryCookieJar,
    storage: InMemoryLocalStorage,
    persistence: PersistenceAdapter,
    catalog: LocaleCatalog,
) -> None:
    cookies._values["i18next"] = "ja"
    storage.set_item("i18nextLng", "en")

    assert _detector(persistence, catalog).detect() == "ja"


def test_local_storage_backs_up_a_cleared_cookie(
    storage: InMemoryLocalStorage, persistence: PersistenceAdapter, catalog: LocaleCatalog
) -> None:
    storage.set_item("i18nextLng", "ja")
    navigation = Navigation(languages=("en-US",))

    assert _detector(persistence, catalog, navigation).detect() == "ja"


def test_unsupported_sources_fall_through(
    cookies: InMemoryCookieJar,
    storage: InMemoryLocalStorage,
    persistence: PersistenceAdapter,
    catalog: LocaleCatalog,
) -> None:
    cookies._values["i18next"] = "fr"
    storage.set_item("i18nextLng", "not a locale")
    navigation = Navigation(query_locale="de-DE", languages=("ko-KR", "ja-JP", "en"))

    assert _detector(persistence, catalog, navigation).detect() == "ja"


def test_default_when_nothing_matches(
    persistence: PersistenceAdapter, catalog: LocaleCatalog
) -> None:
    navigation = Navigation(query_locale="", languages=("fr-FR", "de"))

    assert _detector(persistence, catalog, navigation).detect() == "en"


def test_configured_order_is_respected(
    cookies: InMemoryCookieJar, persistence: PersistenceAdapter, catalog: LocaleCatalog
) -> None:
    cookies._values["i18next"] = "en"
    navigation = Navigation(query_locale="en", languages=("ja",))

    detector = _detector(persistence, catalog, navigation, order=("navigator", "cookie"))

    assert detector.detect() == "ja"


def test_detection_has_no_side_effects(
    cookies: InMemoryCookieJar,
    storage: InMemoryLocalStorage,
    persistence: PersistenceAdapter,
    catalog: LocaleCatalog,
) -> None:
    navigation = Navigation(query_locale="ja")

    _detector(persistence, catalog, navigation).detect()

    assert cookies.get("i18next") is None
    assert storage.get_item("i18nextLng") is None


def test_navigation_orders_accept_language_by_quality() -> None:
    navigation = Navigation.from_accept_language(
        "en;q=0.5, ja-JP, fr;q=0.8", query_locale="ja"
    )

    assert navigation.query_locale == "ja"
    assert tuple(language.lower() for language in navigation.languages) == ("ja-jp", "fr", "en")


def test_navigation_without_header_has_no_languages() -> None:
    assert Navigation.from_accept_language(None).languages == ()
