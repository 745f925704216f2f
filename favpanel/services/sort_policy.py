"""
# services/sort_policy.py

Ordering of favorites and of folder contents. Pure: no persistence, no mutation of the inputs.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import os

from favpanel.io.fs_ops import get_mtime
from favpanel.models.favorites import FavoriteEntry, SortMode
from favpanel.models.nodes import ResourceNode
from favpanel.models.types import StrOrPath
from favpanel.utils.logger import LoggerProtocol, ensure_logger, with_child_logger

MtimeFn = Callable[[str], float]


def name_key(path: str) -> str:
    return os.path.basename(os.path.normpath(path)).casefold()


def _batch_mtimes(paths: Sequence[str], mtime_fn: MtimeFn) -> dict[str, float]:
    # un seul stat par élément, jamais dans le comparateur
    return {p: mtime_fn(p) for p in paths}


def order_entries(
    entries: Sequence[FavoriteEntry],
    mode: SortMode,
    *,
    mtime_fn: MtimeFn = get_mtime,
) -> list[FavoriteEntry]:
    """
    Order favorites for display.

    MANUAL keeps the stored order, ASC/DESC compare base names case-insensitively,
    MODIFIED puts the most recently modified first (missing paths count as 0).
    """
    if mode is SortMode.MANUAL or not entries:
        return list(entries)
    if mode is SortMode.ASCENDING:
        return sorted(entries, key=lambda e: name_key(e.path))
    if mode is SortMode.DESCENDING:
        return sorted(entries, key=lambda e: name_key(e.path), reverse=True)
    mtimes = _batch_mtimes([e.path for e in entries], mtime_fn)
    return sorted(entries, key=lambda e: mtimes[e.path], reverse=True)


def order_resources(
    resources: Sequence[ResourceNode],
    mode: SortMode,
    *,
    mtime_fn: MtimeFn = get_mtime,
) -> list[ResourceNode]:
    """
    Order folder children: directories first, then `mode` inside each group.

    MANUAL has no meaning on disk and behaves like ASC.
    """
    dirs = [r for r in resources if r.is_dir]
    files = [r for r in resources if not r.is_dir]
    if mode is SortMode.MODIFIED:
        mtimes = _batch_mtimes([r.path for r in resources], mtime_fn)
        return sorted(dirs, key=lambda r: mtimes[r.path], reverse=True) + sorted(
            files, key=lambda r: mtimes[r.path], reverse=True
        )
    reverse = mode is SortMode.DESCENDING
    return sorted(dirs, key=lambda r: name_key(r.path), reverse=reverse) + sorted(
        files, key=lambda r: name_key(r.path), reverse=reverse
    )


@with_child_logger
def list_children(
    directory: StrOrPath,
    mode: SortMode,
    *,
    show_hidden: bool = False,
    logger: LoggerProtocol | None = None,
) -> list[ResourceNode]:
    """
    List and order the contents of a directory.

    Unreadable directory → [] (logged).
    """
    logger = ensure_logger(logger, __name__)
    nodes: list[ResourceNode] = []
    mtimes: dict[str, float] = {}
    try:
        with os.scandir(directory) as it:
            for dirent in it:
                if not show_hidden and dirent.name.startswith("."):
                    continue
                try:
                    is_dir = dirent.is_dir()
                    mtimes[dirent.path] = dirent.stat().st_mtime
                except OSError:
                    is_dir = False
                    mtimes[dirent.path] = 0.0
                nodes.append(ResourceNode(path=dirent.path, is_dir=is_dir))
    except OSError as exc:
        logger.error("[TREE] cannot list %s : %s", directory, exc)
        return []
    return order_resources(nodes, mode, mtime_fn=lambda p: mtimes.get(p, 0.0))
