"""Pick the locale to render in from the ordered detection sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from werkzeug.datastructures import LanguageAccept
from werkzeug.http import parse_accept_header

from localeshell.backend.config import load_localization_config
from localeshell.backend.config.schema import DetectionConfig

from .catalog import LocaleCatalog, get_catalog
from .diagnostics import report
from .normaliser import normalise_locale
from .persistence import PersistenceAdapter

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Navigation:
    """Snapshot of what the current navigation carries about locale.

    ``query_locale`` is the raw value of the locale query parameter, if any.
    ``languages`` is the user agent's preference list, most preferred first.
    """

    query_locale: str | None = None
    languages: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_accept_language(
        cls, header: str | None, *, query_locale: str | None = None
    ) -> Navigation:
        """Build a navigation from an HTTP ``Accept-Language`` header."""

        accept = parse_accept_header(header or "", LanguageAccept)
        languages = tuple(value for value, quality in accept if quality > 0)
        return cls(query_locale=query_locale, languages=languages)


class LocaleDetector:
    """Resolve the starting locale; the first supported source wins."""

    def __init__(
        self,
        persistence: PersistenceAdapter,
        navigation: Navigation,
        *,
        catalog: LocaleCatalog | None = None,
        config: DetectionConfig | None = None,
    ) -> None:
        self._persistence = persistence
        self._navigation = navigation
        self._catalog = catalog or get_catalog()
        self._order: Sequence[str] = (config or load_localization_config().detection).order

    def _candidates(self, source: str) -> Iterator[str | None]:
        if source == "querystring":
            yield normalise_locale(self._navigation.query_locale, self._catalog)
        elif source == "cookie":
            yield self._persistence.read_cookie()
        elif source == "local_storage":
            yield self._persistence.read_storage()
        elif source == "navigator":
            for language in self._navigation.languages:
                yield normalise_locale(language, self._catalog)

    def detect(self) -> str:
        """Return the first supported locale across the sources, else the default."""

        for source in self._order:
            for candidate in self._candidates(source):
                if candidate is not None:
                    report(_LOGGER, logging.DEBUG, "Using %s locale: %s", source, candidate)
                    return candidate

        default = self._catalog.default_locale
        report(_LOGGER, logging.DEBUG, "Using default locale: %s", default)
        return default


__all__ = ["LocaleDetector", "Navigation"]
