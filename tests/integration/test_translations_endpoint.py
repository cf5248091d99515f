"""Integration tests for the translations API."""

from __future__ import annotations

import json
from pathlib import Path

from flask.testing import FlaskClient

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "localeshell" / "translations"


def _load_bundle(locale: str, namespace: str) -> dict:
    path = TRANSLATIONS_ROOT / locale / f"{namespace}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def test_metadata_lists_locales_and_namespaces(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["default_locale"] == "en"
    assert payload["default_namespace"] == "common"
    assert payload["namespaces"] == ["common", "errors", "workflows", "tasks"]
    assert payload["locales"][1] == {
        "code": "ja",
        "name": "Japanese",
        "native_name": "日本語",
        "direction": "ltr",
    }


def test_bundle_endpoint_returns_requested_bundle(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/ja/workflows")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["locale"] == "ja"
    assert payload["namespace"] == "workflows"
    assert payload["resources"] == _load_bundle("ja", "workflows")


def test_bundle_endpoint_normalises_regional_tags(client: FlaskClient) -> None:
    payload = client.get("/api/v1/translations/ja-JP/tasks").get_json()

    assert payload["locale"] == "ja"
    assert payload["resources"]["title"] == _load_bundle("ja", "tasks")["title"]


def test_unsupported_locale_serves_default_bundle(client: FlaskClient) -> None:
    payload = client.get("/api/v1/translations/fr/errors").get_json()

    assert payload["locale"] == "en"
    assert payload["resources"] == _load_bundle("en", "errors")


def test_unknown_namespace_returns_empty_resources(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/ja/credentials")

    assert response.status_code == 200
    assert response.get_json()["resources"] == {}
