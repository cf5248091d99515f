"""Wire the localization components together with a defined lifecycle."""

from __future__ import annotations

from typing import Callable

from localeshell.backend.config import LocalizationConfig, load_localization_config

from .catalog import LocaleCatalog
from .detector import LocaleDetector, Navigation
from .dom import Document, DomSync
from .engine import TranslationEngine
from .loader import ResourceLoader
from .persistence import CookieJar, LocalStorage, PersistenceAdapter
from .state import LocaleState


class LocaleSession:
    """Per-client bundle of engine, state and document sync.

    ``close`` detaches every listener registered by the session; a closed
    session must not be started again.
    """

    def __init__(
        self,
        loader: ResourceLoader,
        persistence: PersistenceAdapter,
        navigation: Navigation,
        config: LocalizationConfig,
    ) -> None:
        catalog = loader.catalog
        self.engine = TranslationEngine(loader)
        self.document = Document(lang=self.engine.language, dir=catalog.direction(self.engine.language))
        self.dom_sync = DomSync(self.document, catalog)
        self.persistence = persistence
        self.state = LocaleState(self.engine, persistence, self.dom_sync)
        self.detector = LocaleDetector(
            persistence, navigation, catalog=catalog, config=config.detection
        )
        self._detach: list[Callable[[], None]] = [self.dom_sync.attach(self.engine)]

    async def start(self) -> str:
        return await self.state.start(self.detector)

    def close(self) -> None:
        while self._detach:
            self._detach.pop()()


class LocaleRuntime:
    """Process-wide owner of the catalog and the shared resource loader."""

    def __init__(
        self,
        loader: ResourceLoader | None = None,
        *,
        config: LocalizationConfig | None = None,
    ) -> None:
        self.config = config or load_localization_config()
        self.catalog: LocaleCatalog = (
            loader.catalog if loader is not None else LocaleCatalog.from_config(self.config)
        )
        self.loader = loader or ResourceLoader.from_package(self.catalog)

    def open_session(
        self,
        navigation: Navigation,
        cookies: CookieJar,
        storage: LocalStorage,
    ) -> LocaleSession:
        persistence = PersistenceAdapter(
            cookies, storage, catalog=self.catalog, config=self.config.persistence
        )
        return LocaleSession(self.loader, persistence, navigation, self.config)


__all__ = ["LocaleRuntime", "LocaleSession"]
