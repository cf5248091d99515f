"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from localeshell.backend.app import create_app  # noqa: E402
from localeshell.backend.app.localization import (  # noqa: E402
    InMemoryCookieJar,
    InMemoryLocalStorage,
    LocaleCatalog,
    LocaleInfo,
    PersistenceAdapter,
)
from localeshell.backend.config.schema import PersistenceConfig  # noqa: E402


@pytest.fixture()
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """Return a configured Flask application for integration tests."""

    monkeypatch.setenv("LOCALESHELL_SECRET_KEY", "test-secret")
    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def catalog() -> LocaleCatalog:
    """A small catalog independent of the packaged configuration."""

    return LocaleCatalog(
        locales=(
            LocaleInfo(code="en", name="English", native_name="English"),
            LocaleInfo(code="ja", name="Japanese", native_name="日本語"),
        ),
        namespaces=("common", "errors", "workflows", "tasks"),
        default_locale="en",
        default_namespace="common",
        rtl_locales=frozenset({"ar", "he"}),
    )


@pytest.fixture()
def cookies() -> InMemoryCookieJar:
    return InMemoryCookieJar()


@pytest.fixture()
def storage() -> InMemoryLocalStorage:
    return InMemoryLocalStorage()


@pytest.fixture()
def persistence(
    cookies: InMemoryCookieJar,
    storage: InMemoryLocalStorage,
    catalog: LocaleCatalog,
) -> PersistenceAdapter:
    return PersistenceAdapter(cookies, storage, catalog=catalog, config=PersistenceConfig())
