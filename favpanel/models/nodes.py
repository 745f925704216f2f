"""
# models/nodes.py

Closed set of nodes shown in the favorites panel.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Literal, TypedDict, assert_never

from favpanel.models.favorites import FavoriteEntry


@dataclass(slots=True, frozen=True)
class FavoriteNode:
    """
    A favorite entry as rendered; `missing` is set when the path is gone from disk.
    """

    entry: FavoriteEntry
    missing: bool = False

    @property
    def path(self) -> str:
        return self.entry.path

    @property
    def label(self) -> str:
        return os.path.basename(self.entry.path) or self.entry.path


@dataclass(slots=True, frozen=True)
class CategoryNode:
    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(slots=True, frozen=True)
class ResourceNode:
    """
    A file or directory found while expanding a favorited folder. Never persisted.
    """

    path: str
    is_dir: bool

    @property
    def label(self) -> str:
        return os.path.basename(self.path) or self.path


TreeNode = FavoriteNode | CategoryNode | ResourceNode


class DragItem(TypedDict):
    """
    Payload item for one dragged ResourceNode.
    """

    path: str
    kind: Literal["file", "folder"]


def node_path(node: TreeNode | None) -> str | None:
    """
    Concrete path behind a node, None for category pseudo-nodes.
    """
    if node is None or isinstance(node, CategoryNode):
        return None
    if isinstance(node, FavoriteNode):
        return node.entry.path
    if isinstance(node, ResourceNode):
        return node.path
    assert_never(node)

