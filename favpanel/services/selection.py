"""
# services/selection.py

Which entries does a command act on?

The same command can arrive from a multi-select context menu (explicit list), a single-item
context menu (primary target only) or a keyboard shortcut (nothing, fall back on the widget's
current selection). First non-empty tier wins; category nodes are dropped afterwards;
duplicates are removed by path, keeping the first occurrence.
"""

from __future__ import annotations

from collections.abc import Sequence

from favpanel.models.host import HostProtocol
from favpanel.models.nodes import TreeNode, node_path


def resolve_targets(
    primary: TreeNode | None,
    explicit: Sequence[TreeNode] | None,
    current: Sequence[TreeNode] | None,
) -> list[TreeNode]:
    if explicit:
        candidates: Sequence[TreeNode] = explicit
    elif primary is not None:
        candidates = [primary]
    else:
        candidates = current or []

    result: list[TreeNode] = []
    seen: set[str] = set()
    for node in candidates:
        path = node_path(node)
        if not path or path in seen:
            continue
        seen.add(path)
        result.append(node)
    return result


def resolve_paths(
    primary: TreeNode | None,
    explicit: Sequence[TreeNode] | None,
    current: Sequence[TreeNode] | None,
) -> list[str]:
    return [p for p in (node_path(n) for n in resolve_targets(primary, explicit, current)) if p]


class SelectionResolver:
    """
    `resolve_paths` bound to a host's live selection.
    """

    def __init__(self, host: HostProtocol) -> None:
        self.host = host

    def paths(self, primary: TreeNode | None = None, selected: Sequence[TreeNode] | None = None) -> list[str]:
        return resolve_paths(primary, selected, self.host.selection())
