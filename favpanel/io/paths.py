# favpanel/io/paths.py
"""
Helpers chemins relatifs/absolus par rapport au workspace root.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from favpanel.models.types import StrOrPath

SELF_SENTINEL = "."


def is_within(path: StrOrPath, parent: StrOrPath) -> bool:
    """
    True when `path` equals `parent` or lies beneath it (compared per component).
    """
    p = os.path.normpath(os.fspath(path))
    base = os.path.normpath(os.fspath(parent))
    if p == base:
        return True
    prefix = base if base.endswith(os.sep) else base + os.sep
    return p.startswith(prefix)


@dataclass(slots=True, frozen=True)
class PathNormalizer:
    """
    Converts between absolute paths and the root-relative form written to settings.

    Without a root both directions are the identity.
    """

    root: str | None

    def to_persisted(self, absolute_path: StrOrPath) -> str:
        path = os.fspath(absolute_path)
        if not self.root:
            return path
        if not is_within(path, self.root):
            return path
        relative = os.path.relpath(os.path.normpath(path), os.path.normpath(self.root))
        return relative or SELF_SENTINEL

    def to_absolute(self, stored_path: StrOrPath) -> str:
        stored = os.fspath(stored_path)
        if not self.root or os.path.isabs(stored):
            return stored
        return os.path.normpath(os.path.join(self.root, stored))

    def to_display(self, absolute_path: StrOrPath) -> str:
        """
        Relative form used by "copy relative path" (same rule as persistence).
        """
        return self.to_persisted(absolute_path)
