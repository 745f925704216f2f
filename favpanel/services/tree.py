"""
# services/tree.py
"""

from __future__ import annotations

import os
from typing import assert_never

from favpanel.models.favorites import FavoriteEntry
from favpanel.models.nodes import CategoryNode, FavoriteNode, ResourceNode, TreeNode
from favpanel.services.favorites_store import FavoritesStore
from favpanel.services.sort_policy import list_children, order_entries
from favpanel.utils.logger import LoggerProtocol, ensure_logger


class FavoritesTree:
    """
    Builds the nodes of the favorites panel, level by level.
    """

    def __init__(
        self,
        store: FavoritesStore,
        *,
        show_hidden: bool = False,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.store = store
        self.show_hidden = show_hidden
        self.logger = ensure_logger(logger, __name__)

    def _favorite_nodes(self, entries: list[FavoriteEntry]) -> list[TreeNode]:
        ordered = order_entries(entries, self.store.sort_mode)
        return [FavoriteNode(entry=e, missing=not os.path.lexists(e.path)) for e in ordered]

    def get_children(self, node: TreeNode | None = None) -> list[TreeNode]:
        """
        Root: root-level favorites then one node per category.
        Category: its favorites. Folder favorite / directory: its contents on disk.
        """
        if node is None:
            nodes = self._favorite_nodes(self.store.entries_in(None))
            nodes.extend(CategoryNode(name=name) for name in self.store.all_categories())
            return nodes
        if isinstance(node, CategoryNode):
            return self._favorite_nodes(self.store.entries_in(node.name))
        if isinstance(node, FavoriteNode):
            if not node.entry.is_folder or node.missing:
                return []
            return self._list(node.path)
        if isinstance(node, ResourceNode):
            return self._list(node.path) if node.is_dir else []
        assert_never(node)

    def _list(self, directory: str) -> list[TreeNode]:
        return [*list_children(directory, self.store.sort_mode, show_hidden=self.show_hidden, logger=self.logger)]

    def walk(self, node: TreeNode | None = None, depth: int = 0, fs_levels: int = 1) -> list[tuple[int, TreeNode]]:
        """
        Flattened (depth, node) listing; favorites are expanded `fs_levels` levels deep.
        """
        rows: list[tuple[int, TreeNode]] = []
        for child in self.get_children(node):
            rows.append((depth, child))
            if isinstance(child, CategoryNode):
                rows.extend(self.walk(child, depth + 1, fs_levels))
            elif fs_levels > 0:
                rows.extend(self.walk(child, depth + 1, fs_levels - 1))
        return rows
