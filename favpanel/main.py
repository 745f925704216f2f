"""
# main.py - CLI du panneau de favoris.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import TextIO

from favpanel.models.favorites import SortMode
from favpanel.models.nodes import CategoryNode, FavoriteNode, TreeNode
from favpanel.services.session import FavoritesSession
from favpanel.utils.config import ConfigError
from favpanel.utils.logger import get_logger
from favpanel.utils.safe_runner import safe_main
from favpanel.watcher.start import start_watcher

logger = get_logger("FavPanel CLI")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="favpanel", description="Favorites panel for a workspace")
    parser.add_argument("--root", default=None, help="Workspace root (otherwise FAVPANEL_ROOT / cwd)")
    parser.add_argument("--settings", default=None, help="Favorites file (otherwise FAVPANEL_SETTINGS_FILE)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Print the favorites tree")
    p_list.add_argument("--depth", type=int, default=0, help="Folder levels to expand under each favorite")

    sub.add_parser("add", help="Add a file or folder").add_argument("path")
    sub.add_parser("remove", help="Remove a favorite").add_argument("path")

    p_cat = sub.add_parser("category", help="Manage categories")
    cat_sub = p_cat.add_subparsers(dest="action", required=True)
    cat_sub.add_parser("add").add_argument("name")
    p_ren = cat_sub.add_parser("rename")
    p_ren.add_argument("old")
    p_ren.add_argument("new")
    cat_sub.add_parser("delete").add_argument("name")

    p_move = sub.add_parser("move-to", help="Put a favorite in a category (created if needed)")
    p_move.add_argument("path")
    p_move.add_argument("category")
    sub.add_parser("move-root", help="Move a favorite back to root level").add_argument("path")
    sub.add_parser("up", help="Move a favorite up inside its category").add_argument("path")
    sub.add_parser("down", help="Move a favorite down inside its category").add_argument("path")

    p_sort = sub.add_parser("sort", help="Set the display order")
    p_sort.add_argument("mode", choices=[m.value for m in SortMode])

    sub.add_parser("watch", help="Watch favorited folders and print the tree on change")
    return parser.parse_args(argv)


def _label(node: TreeNode) -> str:
    if isinstance(node, FavoriteNode):
        suffix = "/" if node.entry.is_folder else ""
        return f"★ {node.label}{suffix}" + ("  (missing)" if node.missing else "")
    if isinstance(node, CategoryNode):
        return f"▸ {node.name}"
    return node.label + ("/" if node.is_dir else "")


def render_tree(session: FavoritesSession, depth: int = 0, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    rows = session.tree.walk(fs_levels=depth)
    if not rows:
        print("(no favorites)", file=out)
        return
    for level, node in rows:
        print("  " * level + _label(node), file=out)


def _favorite(session: FavoritesSession, path: str) -> FavoriteNode | None:
    # relatif à --root, pas au répertoire courant
    entry = session.store.get(os.path.abspath(session.normalizer.to_absolute(path)))
    if entry is None:
        print(f"Not a favorite: {path}", file=sys.stderr)
        return None
    return FavoriteNode(entry=entry)


def run(args: argparse.Namespace) -> int:
    session = FavoritesSession.open(args.root, args.settings, logger=logger)
    commands = session.commands

    if args.command == "list":
        render_tree(session, args.depth)
        return 0
    if args.command == "add":
        return 0 if commands.add_to_favorites(args.path) else 1
    if args.command in ("remove", "move-root", "up", "down"):
        node = _favorite(session, args.path)
        if node is None:
            return 1
        handler = {
            "remove": commands.remove,
            "move-root": commands.move_to_root,
            "up": commands.move_up,
            "down": commands.move_down,
        }[args.command]
        handler(node)
        return 0
    if args.command == "move-to":
        node = _favorite(session, args.path)
        return 0 if node is not None and commands.move_to_category(node, args.category) else 1
    if args.command == "category":
        if args.action == "add":
            ok = commands.new_category(args.name)
        elif args.action == "rename":
            ok = commands.rename_category(args.old, args.new)
        else:
            ok = commands.delete_category(args.name)
        return 0 if ok else 1
    if args.command == "sort":
        commands.set_sort_order(args.mode)
        return 0
    if args.command == "watch":
        session.store.subscribe(lambda: render_tree(session))
        render_tree(session)
        start_watcher(session.store, logger=logger)
        return 0
    return 2


@safe_main
def main(argv: list[str] | None = None) -> int:
    try:
        return run(parse_args(argv))
    except ConfigError as exc:
        logger.error("Erreur de configuration: %s", exc)
        return 1


if __name__ == "__main__":
    main()
