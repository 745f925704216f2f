"""
# services/clipboard.py
"""

from __future__ import annotations

from collections.abc import Sequence
import os

from favpanel.io.fs_ops import resolve_directory
from favpanel.models.favorites import ClipboardOp, ClipboardState
from favpanel.models.host import HostProtocol
from favpanel.models.nodes import TreeNode, node_path
from favpanel.models.report import BatchReport
from favpanel.services.favorites_store import FavoritesStore
from favpanel.services.selection import SelectionResolver
from favpanel.services.transfer import transfer_into
from favpanel.utils.logger import LoggerProtocol, ensure_logger


class ClipboardController:
    """
    Cut/copy/paste of files shown in the panel.

    The `ClipboardState` is owned here: replaced by every cut/copy, cleared after a
    cut-paste (one shot), kept after a copy-paste so the same set can be pasted again.
    """

    def __init__(
        self,
        store: FavoritesStore,
        host: HostProtocol,
        state: ClipboardState | None = None,
        *,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.store = store
        self.host = host
        self.state = state if state is not None else ClipboardState()
        self.resolver = SelectionResolver(host)
        self.logger = ensure_logger(logger, __name__)

    def cut(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> list[str]:
        return self._fill(ClipboardOp.CUT, primary, selected)

    def copy(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> list[str]:
        return self._fill(ClipboardOp.COPY, primary, selected)

    def _fill(self, operation: ClipboardOp, primary: TreeNode | None, selected: Sequence[TreeNode] | None) -> list[str]:
        paths = self.resolver.paths(primary, selected)
        if not paths:
            return []
        self.state.set(paths, operation)
        names = ", ".join(os.path.basename(os.path.normpath(p)) for p in paths)
        self.host.show_info(f"{'Cut' if operation is ClipboardOp.CUT else 'Copied'}: {names}")
        self.logger.debug("[CLIPBOARD] %s %d path(s)", operation, len(paths))
        return paths

    def destination(self, target: TreeNode | None = None) -> str | None:
        """
        Directory to paste into.

        Explicit target first (a category has no path and does not count), else the first
        node of the current selection; a file stands for its parent directory. None when
        nothing usable is found.
        """
        explicit = node_path(target)
        if explicit:
            return resolve_directory(explicit)
        selection = self.host.selection()
        if not selection:
            return None
        return resolve_directory(node_path(selection[0]))

    def paste(self, target: TreeNode | None = None) -> BatchReport:
        report = BatchReport()
        if self.state.is_empty:
            return report

        folder = self.destination(target)
        if folder is None:
            self.host.show_warning("Cannot paste here - select a folder as paste target")
            report.rejected = "no paste target"
            return report

        operation = self.state.operation
        assert operation is not None
        report = transfer_into(
            self.store,
            self.host,
            list(self.state.paths),
            folder,
            operation,
            skip_missing=True,
            logger=self.logger,
        )
        if operation is ClipboardOp.CUT:
            self.state.clear()
        return report
