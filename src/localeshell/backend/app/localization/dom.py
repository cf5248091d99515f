"""Keep document-level ``lang``/``dir`` attributes aligned with the locale."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .catalog import LocaleCatalog, get_catalog
from .engine import EngineEvent, TranslationEngine


@dataclass
class Document:
    """Presentation attributes of the rendered document root."""

    lang: str
    dir: str = "ltr"


class DomSync:
    """Writes the locale and its text direction onto a :class:`Document`."""

    def __init__(self, document: Document, catalog: LocaleCatalog | None = None) -> None:
        self._document = document
        self._catalog = catalog or get_catalog()

    @property
    def document(self) -> Document:
        return self._document

    def apply(self, locale: str) -> None:
        self._document.lang = locale
        self._document.dir = self._catalog.direction(locale)

    def attach(self, engine: TranslationEngine) -> Callable[[], None]:
        """Follow the engine's language changes; returns the detach callable."""

        return engine.subscribe(EngineEvent.LANGUAGE_CHANGED, self.apply)


__all__ = ["Document", "DomSync"]
