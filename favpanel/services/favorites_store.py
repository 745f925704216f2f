"""
# services/favorites_store.py

Single source of truth for favorites, categories and sort mode.

Every mutation ends in exactly one notification followed by one persistence call;
inside `transaction()` these are deferred to the outermost exit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
import os

from favpanel.io.paths import is_within
from favpanel.models.exceptions import FavPanelError
from favpanel.models.favorites import EntryKind, FavoriteEntry, FavoritesSnapshot, SortMode
from favpanel.models.types import Listener
from favpanel.utils.logger import LoggerProtocol, ensure_logger

PersistFn = Callable[[FavoritesSnapshot], object]


class FavoritesStore:
    """
    Ordered favorites + ordered category list.

    Entries returned by queries are copies; changes go through the mutators.
    """

    def __init__(
        self,
        *,
        persist: PersistFn | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._items: list[FavoriteEntry] = []
        self._categories: list[str] = []
        self._sort_mode: SortMode = SortMode.MANUAL
        self._listeners: list[Listener] = []
        self._persist = persist
        self._depth = 0
        self._dirty = False
        self.logger = ensure_logger(logger, __name__)

    # ------------------------------------------------------------------ queries

    @property
    def items(self) -> list[FavoriteEntry]:
        return [replace(e) for e in self._items]

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._find(path) is not None

    def get(self, path: str) -> FavoriteEntry | None:
        entry = self._find(path)
        return replace(entry) if entry else None

    def index_of(self, path: str) -> int:
        for i, entry in enumerate(self._items):
            if entry.path == path:
                return i
        return -1

    def entries_in(self, category: str | None) -> list[FavoriteEntry]:
        """
        Partition of entries sharing `category` (None = root level), in stored order.
        """
        return [replace(e) for e in self._items if (e.category or None) == (category or None)]

    def all_categories(self) -> list[str]:
        """
        CategoryList followed by any category only referenced by an entry.
        """
        result = list(self._categories)
        for entry in self._items:
            if entry.category and entry.category not in result:
                result.append(entry.category)
        return result

    def snapshot(self) -> FavoritesSnapshot:
        return FavoritesSnapshot(
            items=tuple(replace(e) for e in self._items),
            categories=tuple(self._categories),
            sort_mode=self._sort_mode,
        )

    # ---------------------------------------------------------- notifications

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a refresh callback; returns the matching unsubscribe function.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> None:
        """
        Notify listeners without persisting.
        """
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:  # pylint: disable=broad-except
                self.logger.exception("[STORE] refresh listener failed")

    @contextmanager
    def transaction(self) -> Iterator[FavoritesStore]:
        """
        Group mutations: one notification and one persistence at the outermost exit.
        """
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            if self._depth == 0 and self._dirty:
                self._flush()

    def _commit(self) -> None:
        self._dirty = True
        if self._depth == 0:
            self._flush()

    def _flush(self) -> None:
        self._dirty = False
        self.refresh()
        if self._persist is None:
            return
        try:
            self._persist(self.snapshot())
        except (FavPanelError, OSError):
            # fire-and-forget: l'état en mémoire reste la référence
            self.logger.exception("[STORE] persistence failed")

    # --------------------------------------------------------------- loading

    def load(
        self,
        entries: Iterable[FavoriteEntry],
        categories: Iterable[str] = (),
        sort_mode: SortMode = SortMode.MANUAL,
    ) -> None:
        """
        Replace the whole state (activation). Notifies, does not persist.

        Duplicate paths keep their first occurrence; categories referenced by an entry
        but absent from `categories` are appended to the list.
        """
        items: list[FavoriteEntry] = []
        seen: set[str] = set()
        for entry in entries:
            if entry.path in seen:
                self.logger.warning("[STORE] duplicate favorite ignored: %s", entry.path)
                continue
            seen.add(entry.path)
            items.append(replace(entry, category=entry.category or None))
        cats: list[str] = []
        for name in categories:
            if name and name not in cats:
                cats.append(name)
        for entry in items:
            if entry.category and entry.category not in cats:
                cats.append(entry.category)
        self._items, self._categories, self._sort_mode = items, cats, sort_mode
        self.logger.debug("[STORE] loaded %d favorite(s), %d categorie(s)", len(items), len(cats))
        self.refresh()

    # ------------------------------------------------------------- mutations

    def add(self, path: str, kind: EntryKind, category: str | None = None) -> bool:
        """
        Append a favorite. False (and no change) when the path is already tracked.
        """
        if self._find(path) is not None:
            self.logger.info("[STORE] already in favorites: %s", path)
            return False
        if category and category not in self._categories:
            self._categories.append(category)
        self._items.append(FavoriteEntry(path=path, kind=kind, category=category or None))
        self.logger.info("[STORE] added %s (%s)", path, kind)
        self._commit()
        return True

    def remove(self, path: str) -> bool:
        index = self.index_of(path)
        if index < 0:
            return False
        del self._items[index]
        self.logger.info("[STORE] removed %s", path)
        self._commit()
        return True

    def set_sort_mode(self, mode: SortMode) -> None:
        self._sort_mode = mode
        self._commit()

    def add_category(self, name: str) -> bool:
        if not name or name in self._categories:
            return False
        self._categories.append(name)
        self.logger.info("[STORE] category created: %s", name)
        self._commit()
        return True

    def rename_category(self, old: str, new: str) -> bool:
        """
        Rewrite the category on every member and in the list in one step.

        Renaming onto an existing category merges both.
        """
        if not old or not new or old == new:
            return False
        if old not in self._categories and not any(e.category == old for e in self._items):
            return False
        for entry in self._items:
            if entry.category == old:
                entry.category = new
        if new in self._categories:
            self._categories = [c for c in self._categories if c != old]
        elif old in self._categories:
            self._categories[self._categories.index(old)] = new
        else:
            self._categories.append(new)
        self.logger.info("[STORE] category renamed: %s → %s", old, new)
        self._commit()
        return True

    def delete_category(self, name: str) -> bool:
        """
        Drop a category; its members move to root level (files are never touched).
        """
        members = [e for e in self._items if e.category == name]
        if name not in self._categories and not members:
            return False
        for entry in members:
            entry.category = None
        self._categories = [c for c in self._categories if c != name]
        self.logger.info("[STORE] category deleted: %s (%d entrie(s) moved to root)", name, len(members))
        self._commit()
        return True

    def move_to_category(self, path: str, name: str) -> bool:
        entry = self._find(path)
        if entry is None or not name:
            return False
        if name not in self._categories:
            self._categories.append(name)
        entry.category = name
        self._commit()
        return True

    def move_to_root(self, path: str) -> bool:
        entry = self._find(path)
        if entry is None:
            return False
        entry.category = None
        self._commit()
        return True

    def tracked_under(self, path: str) -> list[str]:
        """
        Tracked paths equal to `path` or beneath it, in stored order.
        """
        return [e.path for e in self._items if is_within(e.path, path)]

    def relocate(self, old_path: str, new_path: str) -> int:
        """
        Rewrite tracked paths after `old_path` moved to `new_path` on disk.

        Covers the entry itself and entries beneath a moved folder; category and
        position are kept. An untouched entry already sitting on a rewritten path is
        stale and dropped so paths stay unique. Returns the number of rewritten entries.
        """
        old_norm = os.path.normpath(old_path)
        moved: dict[int, str] = {}
        for i, entry in enumerate(self._items):
            if entry.path == old_path or os.path.normpath(entry.path) == old_norm:
                moved[i] = new_path
            elif is_within(entry.path, old_norm):
                suffix = os.path.relpath(os.path.normpath(entry.path), old_norm)
                moved[i] = os.path.join(new_path, suffix)
        if not moved:
            return 0

        targets = set(moved.values())
        kept: list[FavoriteEntry] = []
        for i, entry in enumerate(self._items):
            if i in moved:
                entry.path = moved[i]
            elif entry.path in targets:
                self.logger.warning("[STORE] stale duplicate dropped: %s", entry.path)
                continue
            kept.append(entry)
        self._items = kept
        self.logger.info("[STORE] relocated %d entrie(s): %s → %s", len(moved), old_path, new_path)
        self._commit()
        return len(moved)

    def swap(self, path_a: str, path_b: str) -> bool:
        """
        Exchange two entries in the persisted order (positions resolved by path).
        """
        i, j = self.index_of(path_a), self.index_of(path_b)
        if i < 0 or j < 0 or i == j:
            return False
        self._items[i], self._items[j] = self._items[j], self._items[i]
        self._commit()
        return True

    # ---------------------------------------------------------------- helpers

    def _find(self, path: str) -> FavoriteEntry | None:
        for entry in self._items:
            if entry.path == path:
                return entry
        return None
