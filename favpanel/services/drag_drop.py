"""
# services/drag_drop.py
"""

from __future__ import annotations

from collections.abc import Sequence

from favpanel.io.fs_ops import resolve_directory
from favpanel.models.favorites import ClipboardOp
from favpanel.models.host import HostProtocol
from favpanel.models.nodes import DragItem, ResourceNode, TreeNode, node_path
from favpanel.models.report import BatchReport
from favpanel.services.favorites_store import FavoritesStore
from favpanel.services.transfer import transfer_into
from favpanel.utils.logger import LoggerProtocol, ensure_logger


class DragDropController:
    """
    Drag-and-drop moves files on disk; it never reorders the favorites list.

    Only nodes found inside an expanded folder can be dragged. Favorites and categories
    are reordered with move up/down instead.
    """

    def __init__(self, store: FavoritesStore, host: HostProtocol, *, logger: LoggerProtocol | None = None) -> None:
        self.store = store
        self.host = host
        self.logger = ensure_logger(logger, __name__)

    def drag(self, nodes: Sequence[TreeNode]) -> list[DragItem]:
        """
        Payload for a drag start; empty means the drag is refused.
        """
        return [
            DragItem(path=node.path, kind="folder" if node.is_dir else "file")
            for node in nodes
            if isinstance(node, ResourceNode)
        ]

    def drop(self, target: TreeNode | None, payload: Sequence[DragItem]) -> BatchReport:
        report = BatchReport()
        if not payload:
            return report

        target_path = node_path(target)
        if target_path is None:
            self.host.show_warning("Cannot drop here - select a folder as drop target")
            report.rejected = "no drop target"
            return report

        folder = resolve_directory(target_path)
        if folder is None:
            self.host.show_warning("Invalid drop target")
            report.rejected = "invalid drop target"
            return report

        self.logger.debug("[DROP] %d item(s) onto %s", len(payload), folder)
        return transfer_into(
            self.store,
            self.host,
            [item["path"] for item in payload],
            folder,
            ClipboardOp.CUT,
            logger=self.logger,
        )
