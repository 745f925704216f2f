"""
# services/session.py
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from favpanel.io.paths import PathNormalizer
from favpanel.io.settings_store import SettingsRepository
from favpanel.models.favorites import ClipboardState
from favpanel.models.host import ConsoleHost, HostProtocol
from favpanel.models.types import StrOrPath
from favpanel.services.commands import FavoritesCommands
from favpanel.services.favorites_store import FavoritesStore
from favpanel.services.tree import FavoritesTree
from favpanel.utils.config import (
    SETTINGS_FILE,
    SHOW_HIDDEN,
    WORKSPACE_ROOT,
    ConfigError,
    default_settings_file,
)
from favpanel.utils.logger import LoggerProtocol, ensure_logger


@dataclass
class FavoritesSession:
    """
    Everything the panel needs, wired once at activation.
    """

    normalizer: PathNormalizer
    repository: SettingsRepository
    store: FavoritesStore
    clipboard: ClipboardState
    host: HostProtocol
    commands: FavoritesCommands
    tree: FavoritesTree

    @classmethod
    def open(
        cls,
        root: StrOrPath | None = None,
        settings_file: StrOrPath | None = None,
        host: HostProtocol | None = None,
        *,
        show_hidden: bool | None = None,
        logger: LoggerProtocol | None = None,
    ) -> FavoritesSession:
        """
        Build the components and restore the persisted favorites.

        Defaults come from the environment (FAVPANEL_ROOT, FAVPANEL_SETTINGS_FILE, FAVPANEL_SHOW_HIDDEN).
        """
        logger = ensure_logger(logger, __name__)
        root_str = os.path.abspath(os.fspath(root)) if root is not None else os.path.abspath(WORKSPACE_ROOT)
        if not os.path.isdir(root_str):
            raise ConfigError(f"[CONFIG ERROR] workspace root is not a directory: {root_str}")
        if settings_file is None:
            settings_file = SETTINGS_FILE if root is None else default_settings_file(root_str)

        normalizer = PathNormalizer(root_str)
        repository = SettingsRepository(settings_file, normalizer, logger=logger)
        store = FavoritesStore(persist=repository.save_snapshot, logger=logger)
        settings = repository.load()
        store.load(settings.entries(normalizer), settings.categories, settings.sort_order)

        host = host if host is not None else ConsoleHost(logger=logger)
        clipboard = ClipboardState()
        commands = FavoritesCommands(store, host, normalizer, clipboard_state=clipboard, logger=logger)
        tree = FavoritesTree(store, show_hidden=SHOW_HIDDEN if show_hidden is None else show_hidden, logger=logger)
        logger.info("[SESSION] root=%s settings=%s favorites=%d", root_str, repository.path, len(store))
        return cls(
            normalizer=normalizer,
            repository=repository,
            store=store,
            clipboard=clipboard,
            host=host,
            commands=commands,
            tree=tree,
        )

    @property
    def root(self) -> str | None:
        return self.normalizer.root
