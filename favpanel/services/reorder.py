"""
# services/reorder.py
"""

from __future__ import annotations

from favpanel.services.favorites_store import FavoritesStore
from favpanel.utils.logger import LoggerProtocol, ensure_logger


class ReorderController:
    """
    Manual up/down moves, scoped to the entry's category partition.

    Root entries only swap with root entries, categorized entries only inside their category.
    The neighbour is found in the partition, then both entries are swapped at their real
    indices in the full list (other categories may sit in between).
    """

    def __init__(self, store: FavoritesStore, *, logger: LoggerProtocol | None = None) -> None:
        self.store = store
        self.logger = ensure_logger(logger, __name__)

    def move_up(self, path: str) -> bool:
        return self._shift(path, -1)

    def move_down(self, path: str) -> bool:
        return self._shift(path, +1)

    def _shift(self, path: str, step: int) -> bool:
        entry = self.store.get(path)
        if entry is None:
            self.logger.debug("[REORDER] not a favorite: %s", path)
            return False
        partition = [e.path for e in self.store.entries_in(entry.category)]
        index = partition.index(path)
        neighbour = index + step
        if neighbour < 0 or neighbour >= len(partition):
            return False
        swapped = self.store.swap(path, partition[neighbour])
        if swapped:
            self.logger.debug(
                "[REORDER] %s %s (category=%s)", "up" if step < 0 else "down", path, entry.category or "<root>"
            )
        return swapped
