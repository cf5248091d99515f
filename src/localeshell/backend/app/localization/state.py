"""Single source of truth for the active locale."""

from __future__ import annotations

import logging

from .detector import LocaleDetector
from .diagnostics import report
from .dom import DomSync
from .engine import TranslationEngine
from .persistence import PersistenceAdapter

_LOGGER = logging.getLogger(__name__)


class LocaleState:
    """Owns the active locale and keeps engine, storage and document in step.

    ``set`` performs the whole sequence on every call, including when the
    target equals the current locale: engine switch, then persistence write,
    then document sync. Callers issue one explicit change at a time.
    """

    def __init__(
        self,
        engine: TranslationEngine,
        persistence: PersistenceAdapter,
        dom_sync: DomSync,
    ) -> None:
        self._engine = engine
        self._persistence = persistence
        self._dom_sync = dom_sync

    @property
    def engine(self) -> TranslationEngine:
        return self._engine

    def current(self) -> str:
        return self._engine.language

    async def set(self, locale: str) -> None:
        if not self._engine.catalog.is_supported_locale(locale):
            report(_LOGGER, logging.ERROR, "Invalid language: %s", locale)
            return

        report(_LOGGER, logging.INFO, "User requested language change: %s", locale)
        await self._engine.change_language(locale)
        self._persistence.write(locale)
        self._dom_sync.apply(locale)
        report(_LOGGER, logging.INFO, "Language change complete: %s", locale)

    async def start(self, detector: LocaleDetector) -> str:
        """Apply the detected locale, switching only when it differs."""

        target = detector.detect()
        current = self._engine.language
        if current != target:
            report(_LOGGER, logging.DEBUG, "Switching from %s to %s", current, target)
            await self._engine.change_language(target)

        self._dom_sync.apply(self._engine.language)
        return self._engine.language


__all__ = ["LocaleState"]
