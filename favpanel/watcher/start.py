"""
# watcher/start.py

Refresh the panel when the content of a favorited folder changes on disk.
"""

from __future__ import annotations

from collections.abc import Callable
import os
import time

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers.api import BaseObserver, ObservedWatch
from watchdog.observers.polling import PollingObserver

from favpanel.services.favorites_store import FavoritesStore
from favpanel.utils.config import WATCHDOG_DEBOUNCE_WINDOW, WATCHDOG_POLL_INTERVAL
from favpanel.utils.logger import LoggerProtocol, ensure_logger

EventPath = str | bytes | os.PathLike[str] | os.PathLike[bytes]
# fichiers d'éditeurs, jamais affichés comme changement
_SCRATCH_SUFFIXES = ("~", ".swp", ".tmp")


class RefreshHandler(FileSystemEventHandler):
    """
    Calls `on_change` for filesystem events under a watched folder.

    The same (path, action) pair is accepted at most once per `debounce_window` seconds.
    Runs on the observer thread.
    """

    def __init__(
        self,
        on_change: Callable[[], None],
        *,
        logger: LoggerProtocol | None,
        debounce_window: float,
    ) -> None:
        self._on_change = on_change
        self._logger = logger
        self._debounce_window = debounce_window
        self._seen: dict[tuple[str, str], float] = {}

    @staticmethod
    def _to_str(path: EventPath) -> str:
        raw = os.fspath(path)
        return raw.decode("utf-8", errors="surrogateescape") if isinstance(raw, bytes) else raw

    def _fresh(self, path: str, action: str) -> bool:
        now = time.monotonic()
        # clés hors fenêtre oubliées
        self._seen = {k: t for k, t in self._seen.items() if now - t < self._debounce_window}
        if now - self._seen.get((path, action), 0.0) < self._debounce_window:
            return False
        self._seen[(path, action)] = now
        return True

    def _emit(self, path: EventPath, action: str) -> None:
        text = self._to_str(path)
        if os.path.basename(text).endswith(_SCRATCH_SUFFIXES) or not self._fresh(text, action):
            return
        if self._logger is not None:
            self._logger.debug("[WATCHER] %s → %s", action, text)
        self._on_change()

    def on_created(self, event: FileSystemEvent) -> None:
        self._emit(event.src_path, "created")

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._emit(event.src_path, "deleted")

    def on_modified(self, event: FileSystemEvent) -> None:
        # un dossier modifié = created/deleted déjà reçus pour ses enfants
        if not event.is_directory:
            self._emit(event.src_path, "modified")

    def on_moved(self, event: FileSystemEvent) -> None:
        self._emit(event.dest_path or event.src_path, "moved")


class FavoritesWatcher:
    """
    One recursive watch per favorited folder that exists on disk.

    Watches follow the store: they are re-synchronised on every store notification.
    The watcher only triggers refreshes, it never mutates the store.
    """

    def __init__(
        self,
        store: FavoritesStore,
        *,
        on_change: Callable[[], None] | None = None,
        observer: BaseObserver | None = None,
        debounce_window: float = WATCHDOG_DEBOUNCE_WINDOW,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.store = store
        self.logger = ensure_logger(logger, __name__)
        self.observer = observer if observer is not None else PollingObserver(timeout=WATCHDOG_POLL_INTERVAL)
        self.handler = RefreshHandler(
            on_change if on_change is not None else store.refresh,
            logger=self.logger,
            debounce_window=debounce_window,
        )
        self._watches: dict[str, ObservedWatch] = {}
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def watched(self) -> list[str]:
        return sorted(self._watches)

    def wanted(self) -> set[str]:
        return {e.path for e in self.store.items if e.is_folder and os.path.isdir(e.path)}

    def sync(self) -> None:
        """
        Align scheduled watches with the favorited folders; no-op when nothing changed.
        """
        wanted = self.wanted()
        current = set(self._watches)
        if wanted == current:
            return
        for path in current - wanted:
            self.observer.unschedule(self._watches.pop(path))
            self.logger.debug("[WATCHER] unwatch %s", path)
        for path in sorted(wanted - current):
            try:
                self._watches[path] = self.observer.schedule(self.handler, path, recursive=True)
            except OSError as exc:
                self.logger.warning("[WATCHER] cannot watch %s : %s", path, exc)
                continue
            self.logger.debug("[WATCHER] watch %s", path)

    def start(self) -> FavoritesWatcher:
        self.sync()
        self._unsubscribe = self.store.subscribe(self.sync)
        self.observer.start()
        self.logger.info("[WATCHER] started on %d folder(s)", len(self._watches))
        return self

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.observer.unschedule_all()
        self._watches.clear()
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join(timeout=10)
        self.logger.info("[WATCHER] stopped")

    def __enter__(self) -> FavoritesWatcher:
        return self.start()

    def __exit__(self, *exc: object) -> None:
        self.stop()


def start_watcher(store: FavoritesStore, *, logger: LoggerProtocol | None = None) -> None:
    """
    Watch the favorited folders until Ctrl+C; the store is refreshed on every change.
    """
    logger = ensure_logger(logger, __name__)
    logger.info("[WATCHER] polling every %.2fs, Ctrl+C to quit", WATCHDOG_POLL_INTERVAL)
    with FavoritesWatcher(store, logger=logger):
        try:
            while True:
                time.sleep(WATCHDOG_POLL_INTERVAL)
        except KeyboardInterrupt:
            logger.info("[WATCHER] interrupted")
