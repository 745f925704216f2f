"""
# services/commands.py

Command handlers of the favorites panel, independent from how they are registered
(menu, keybinding, CLI). Each handler runs to completion before the next one.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum
import os

from favpanel.io.fs_ops import create_file, create_folder, detect_kind, move_path, resolve_directory, trash_path
from favpanel.io.paths import PathNormalizer
from favpanel.models.exceptions import FavPanelError
from favpanel.models.favorites import ClipboardState, SortMode
from favpanel.models.host import HostProtocol
from favpanel.models.nodes import CategoryNode, DragItem, TreeNode, node_path
from favpanel.models.report import BatchReport
from favpanel.services.clipboard import ClipboardController
from favpanel.services.drag_drop import DragDropController
from favpanel.services.favorites_store import FavoritesStore
from favpanel.services.reorder import ReorderController
from favpanel.services.selection import SelectionResolver
from favpanel.services.transfer import check_tracked
from favpanel.utils.logger import LoggerProtocol, ensure_logger


class Bridge(StrEnum):
    """
    Commands of companion extensions; they all receive `{"fsPath": <absolute path>}`.
    """

    TEMPLATED_FOLDER = "FT.createFolderStructure"
    FOLDER_COLOR = "folder-customization.setColor"
    FOLDER_ICON = "folder-customization.setEmojiBadge"
    FOLDER_RESET = "folder-customization.clearCustomization"
    FOCUS_FOLDER = "focusFolder.focusOnFolder"
    REVEAL_IN_SIDEBAR = "revealInExplorer"
    REVEAL_IN_OS = "revealFileInOS"


def _name(path: str) -> str:
    return os.path.basename(os.path.normpath(path))


class FavoritesCommands:
    def __init__(
        self,
        store: FavoritesStore,
        host: HostProtocol,
        normalizer: PathNormalizer,
        *,
        clipboard_state: ClipboardState | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.store = store
        self.host = host
        self.normalizer = normalizer
        self.logger = ensure_logger(logger, __name__)
        self.resolver = SelectionResolver(host)
        self.reorder = ReorderController(store, logger=self.logger)
        self.drag_drop = DragDropController(store, host, logger=self.logger)
        self.clipboard = ClipboardController(store, host, clipboard_state, logger=self.logger)

    # ----------------------------------------------------------- favorites

    def add_to_favorites(self, path: str) -> bool:
        if not path:
            return False
        absolute = os.path.abspath(self.normalizer.to_absolute(path))
        if absolute in self.store:
            self.host.show_info(f"Already in favorites: {_name(absolute)}")
            return False
        return self.store.add(absolute, detect_kind(absolute))

    def remove(self, node: TreeNode | None) -> bool:
        path = node_path(node)
        if not path:
            return False
        return self.store.remove(path)

    def set_sort_order(self, mode: SortMode | str) -> SortMode:
        sort_mode = SortMode.parse(mode, default=self.store.sort_mode)
        self.store.set_sort_mode(sort_mode)
        self.logger.info("[COMMAND] sort order: %s", sort_mode)
        return sort_mode

    # ---------------------------------------------------------- categories

    def new_category(self, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        created = self.store.add_category(name)
        if created:
            self.host.show_info(f'Favorites folder "{name}" created')
        return created

    def rename_category(self, category: CategoryNode | str, new_name: str) -> bool:
        old = category.name if isinstance(category, CategoryNode) else category
        return self.store.rename_category(old, (new_name or "").strip())

    def delete_category(self, category: CategoryNode | str) -> bool:
        name = category.name if isinstance(category, CategoryNode) else category
        return self.store.delete_category(name)

    def move_to_category(self, node: TreeNode | None, name: str) -> bool:
        path = node_path(node)
        name = (name or "").strip()
        if not path or not name:
            return False
        return self.store.move_to_category(path, name)

    def move_to_root(self, node: TreeNode | None) -> bool:
        path = node_path(node)
        if not path:
            return False
        return self.store.move_to_root(path)

    def move_up(self, node: TreeNode | None) -> bool:
        path = node_path(node)
        if not path:
            return False
        return self.reorder.move_up(path)

    def move_down(self, node: TreeNode | None) -> bool:
        path = node_path(node)
        if not path:
            return False
        return self.reorder.move_down(path)

    # --------------------------------------------------------- copy paths

    def copy_path(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> str | None:
        """
        Put the target paths on the system clipboard: one path as-is, several one per line.
        """
        return self._copy_paths(self.resolver.paths(primary, selected), "Path copied", "paths copied")

    def copy_relative_path(
        self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None
    ) -> str | None:
        paths = [self.normalizer.to_display(p) for p in self.resolver.paths(primary, selected)]
        return self._copy_paths(paths, "Relative path copied", "relative paths copied")

    def _copy_paths(self, paths: list[str], single: str, plural: str) -> str | None:
        if not paths:
            return None
        text = paths[0] if len(paths) == 1 else "\n".join(paths)
        self.host.write_clipboard_text(text)
        self.host.show_info(single if len(paths) == 1 else f"{len(paths)} {plural}")
        return text

    # ---------------------------------------------------- file operations

    def new_file(self, node: TreeNode | None, name: str) -> str | None:
        return self._create(node, name, create_file)

    def new_folder(self, node: TreeNode | None, name: str) -> str | None:
        return self._create(node, name, create_folder)

    def _create(self, node: TreeNode | None, name: str, factory: Callable[..., str]) -> str | None:
        directory = resolve_directory(node_path(node))
        name = (name or "").strip()
        if directory is None or not name:
            return None
        try:
            created = factory(directory, name, logger=self.logger)
        except FavPanelError as exc:
            exc.with_context({"step": "create", "directory": directory})
            self.logger.warning("[%s] %s | ctx=%r", exc.code.name, str(exc), exc.ctx)
            self.host.show_error(f"Cannot create {name}: {exc.reason}")
            return None
        self.store.refresh()
        return created

    def rename(self, node: TreeNode | None, new_name: str) -> str | None:
        """
        Rename on disk; a tracked favorite keeps its category and position.
        """
        path = node_path(node)
        new_name = (new_name or "").strip()
        if not path or not new_name or new_name == _name(path):
            return None
        destination = os.path.join(os.path.dirname(os.path.normpath(path)), new_name)
        reason = check_tracked(self.store, destination)
        if reason:
            self.host.show_warning(f"Cannot rename {_name(path)}: {reason}")
            return None
        try:
            move_path(path, destination, logger=self.logger)
        except FavPanelError as exc:
            exc.with_context({"step": "rename", "new_name": new_name})
            self.logger.warning("[%s] %s | ctx=%r", exc.code.name, str(exc), exc.ctx)
            self.host.show_error(f"Failed to rename {_name(path)}: {exc.reason}")
            return None
        if not self.store.relocate(path, destination):
            self.store.refresh()
        return destination

    def delete(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> BatchReport:
        """
        Send the targets to the trash and forget the matching favorites.

        Items are processed one by one; a failure is reported and the batch goes on.
        """
        report = BatchReport()
        paths = self.resolver.paths(primary, selected)
        if not paths:
            return report
        removed = 0
        with self.store.transaction():
            for path in paths:
                try:
                    trash_path(path, logger=self.logger)
                except FavPanelError as exc:
                    exc.with_context({"step": "delete", "batch": len(paths)})
                    self.logger.warning("[%s] %s | ctx=%r", exc.code.name, str(exc), exc.ctx)
                    self.host.show_error(f"Failed to delete {_name(path)}: {exc.reason}")
                    report.failed.append((path, exc.reason))
                    continue
                report.done.append((path, ""))
                removed += int(self.store.remove(path))
        if not removed:
            self.store.refresh()
        return report

    # ----------------------------------------------------- cut/copy/paste

    def cut(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> list[str]:
        return self.clipboard.cut(primary, selected)

    def copy(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> list[str]:
        return self.clipboard.copy(primary, selected)

    def paste(self, target: TreeNode | None = None) -> BatchReport:
        return self.clipboard.paste(target)

    def drag(self, nodes: Sequence[TreeNode]) -> list[DragItem]:
        return self.drag_drop.drag(nodes)

    def drop(self, target: TreeNode | None, payload: Sequence[DragItem]) -> BatchReport:
        return self.drag_drop.drop(target, payload)

    # ------------------------------------------------------------- bridges

    def run_bridge(self, bridge: Bridge, node: TreeNode | None) -> bool:
        path = node_path(node)
        if not path:
            return False
        self.host.execute_command(bridge.value, {"fsPath": os.path.abspath(path)})
        self.logger.debug("[COMMAND] bridge %s → %s", bridge.value, path)
        return True
