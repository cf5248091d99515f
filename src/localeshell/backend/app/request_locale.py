"""Bind a locale session to every Flask request.

Each request is one navigation: the query string, cookies, the signed Flask
session (standing in for local storage) and ``Accept-Language`` feed detection.
Cookie writes made during the request are emitted as ``Set-Cookie`` headers
once the response is ready.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Coroutine, TypeVar

from flask import Flask, Request, Response, current_app, g, request, session

from .async_bridge import AsyncBridge
from .localization import (
    CookieAttributes,
    LocaleProviderError,
    LocaleRuntime,
    LocaleSession,
    Navigation,
    StorageUnavailableError,
    bind_locale_state,
    release_locale_state,
)

EXTENSION_KEY = "localeshell"

# Endpoints that never read the locale.
LOCALE_EXEMPT_ENDPOINTS = frozenset({"health_check", "static"})

T = TypeVar("T")


@dataclass(frozen=True)
class LocaleExtension:
    """Process-wide localization objects attached to the Flask app."""

    runtime: LocaleRuntime
    bridge: AsyncBridge


class RequestCookieJar:
    """Reads request cookies and queues writes for the response."""

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self._cookies = cookies
        self._pending: dict[str, tuple[str, CookieAttributes]] = {}

    def get(self, name: str) -> str | None:
        if name in self._pending:
            return self._pending[name][0]
        return self._cookies.get(name)

    def set(self, name: str, value: str, attributes: CookieAttributes) -> None:
        self._pending[name] = (value, attributes)

    def apply(self, response: Response) -> None:
        for name, (value, attributes) in self._pending.items():
            response.set_cookie(
                name,
                value,
                max_age=attributes.max_age,
                path=attributes.path,
                samesite=attributes.same_site,
            )


class SessionLocalStorage:
    """Local storage entries kept in the signed Flask session."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    def get_item(self, key: str) -> str | None:
        try:
            value = self._store.get(key)
        except RuntimeError as error:
            raise StorageUnavailableError(str(error)) from error
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            self._store[key] = value
        except RuntimeError as error:
            raise StorageUnavailableError(str(error)) from error


def navigation_from_request(incoming: Request, query_parameter: str) -> Navigation:
    return Navigation.from_accept_language(
        incoming.headers.get("Accept-Language"),
        query_locale=incoming.args.get(query_parameter),
    )


def get_extension() -> LocaleExtension:
    return current_app.extensions[EXTENSION_KEY]


def run_async(coroutine: Coroutine[Any, Any, T]) -> T:
    return get_extension().bridge.run(coroutine)


def current_locale_session() -> LocaleSession:
    locale_session = g.get("locale_session")
    if locale_session is None:
        raise LocaleProviderError("No locale session is bound to this request")
    return locale_session


def init_locale_sessions(app: Flask, extension: LocaleExtension) -> None:
    """Register the request hooks that open, persist and close sessions."""

    app.extensions[EXTENSION_KEY] = extension
    query_parameter = extension.runtime.config.detection.query_parameter

    @app.before_request
    def _open_locale_session() -> None:
        if request.method == "OPTIONS" or request.endpoint in LOCALE_EXEMPT_ENDPOINTS:
            return

        cookies = RequestCookieJar(request.cookies)
        # Unwrapped: detection and writes run on the bridge thread, outside
        # the request context the proxy resolves against.
        locale_session = extension.runtime.open_session(
            navigation_from_request(request, query_parameter),
            cookies,
            SessionLocalStorage(session._get_current_object()),
        )
        g.locale_session = locale_session
        g.locale_cookies = cookies
        g.locale_token = bind_locale_state(locale_session.state)
        extension.bridge.run(locale_session.start())

    @app.after_request
    def _emit_locale_cookies(response: Response) -> Response:
        cookies = g.get("locale_cookies")
        if cookies is not None:
            cookies.apply(response)
        return response

    @app.teardown_request
    def _close_locale_session(_error: BaseException | None) -> None:
        token = g.pop("locale_token", None)
        if token is not None:
            release_locale_state(token)
        locale_session = g.pop("locale_session", None)
        if locale_session is not None:
            locale_session.close()


__all__ = [
    "EXTENSION_KEY",
    "LOCALE_EXEMPT_ENDPOINTS",
    "LocaleExtension",
    "RequestCookieJar",
    "SessionLocalStorage",
    "current_locale_session",
    "get_extension",
    "init_locale_sessions",
    "navigation_from_request",
    "run_async",
]
