"""Scoped access to the locale capability using contextvars.

Consumers call :func:`use_locale` instead of reaching for a module global.
The state is bound for the duration of a provisioning scope, either with the
:func:`provide_locale` context manager or, where a framework splits setup and
teardown across hooks, with :func:`bind_locale_state` and
:func:`release_locale_state`.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator

from .state import LocaleState

_locale_state: ContextVar[LocaleState | None] = ContextVar("locale_state", default=None)


class LocaleProviderError(RuntimeError):
    """Raised when the locale capability is used outside a provisioning scope."""


@dataclass(frozen=True)
class LocaleCapability:
    """What UI collaborators may know and do about the locale."""

    locale: str
    set_locale: Callable[[str], Awaitable[None]]
    # Always False until locale resolution involves a network round trip.
    is_loading: bool = False


def bind_locale_state(state: LocaleState) -> Token[LocaleState | None]:
    return _locale_state.set(state)


def release_locale_state(token: Token[LocaleState | None]) -> None:
    _locale_state.reset(token)


@contextmanager
def provide_locale(state: LocaleState) -> Iterator[LocaleState]:
    token = bind_locale_state(state)
    try:
        yield state
    finally:
        release_locale_state(token)


def use_locale() -> LocaleCapability:
    state = _locale_state.get()
    if state is None:
        raise LocaleProviderError("use_locale must be used within provide_locale")
    return LocaleCapability(locale=state.current(), set_locale=state.set)


__all__ = [
    "LocaleCapability",
    "LocaleProviderError",
    "bind_locale_state",
    "provide_locale",
    "release_locale_state",
    "use_locale",
]
