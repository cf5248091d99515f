"""Integration tests for the HTML shell rendered in the detected locale."""

from http import HTTPStatus

from flask.testing import FlaskClient


def test_shell_defaults_to_english(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == HTTPStatus.OK
    assert "text/html" in (response.content_type or "").lower()
    body = response.get_data(as_text=True)
    assert '<html lang="en" dir="ltr">' in body
    assert "Automate browser workflows in your language." in body
    assert "Current language: English" in body
    assert "No workflows yet." in body


def test_shell_follows_accept_language(client: FlaskClient) -> None:
    response = client.get("/", headers={"Accept-Language": "ja-JP,ja;q=0.9,en;q=0.8"})

    body = response.get_data(as_text=True)
    assert '<html lang="ja" dir="ltr">' in body
    assert "現在の言語: 日本語" in body
    assert "ワークフローはまだありません。" in body
    assert '<option value="ja" selected>' in body


def test_query_parameter_overrides_cookie(client: FlaskClient) -> None:
    client.set_cookie("i18next", "en")

    response = client.get("/?lng=ja-JP")

    assert '<html lang="ja"' in response.get_data(as_text=True)
    # Detection alone does not persist the choice.
    assert not any(
        header.startswith("i18next=") for header in response.headers.getlist("Set-Cookie")
    )


def test_cookie_overrides_accept_language(client: FlaskClient) -> None:
    client.set_cookie("i18next", "ja")

    response = client.get("/", headers={"Accept-Language": "en-US"})

    assert '<html lang="ja"' in response.get_data(as_text=True)


def test_unsupported_preferences_fall_back_to_default(client: FlaskClient) -> None:
    client.set_cookie("i18next", "de")

    response = client.get("/?lng=fr", headers={"Accept-Language": "es-ES,pt;q=0.5"})

    assert '<html lang="en"' in response.get_data(as_text=True)
