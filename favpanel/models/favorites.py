"""
# models/favorites.py
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EntryKind(StrEnum):
    """
    Valeur du champ `type` persisté.
    """

    FILE = "file"
    FOLDER = "folder"


class SortMode(StrEnum):
    """
    Display order of the panel, persisted as `sortOrder`.
    """

    MANUAL = "MANUAL"
    ASCENDING = "ASC"
    DESCENDING = "DESC"
    MODIFIED = "MODIFIED"

    @classmethod
    def parse(cls, raw: object, default: SortMode | None = None) -> SortMode:
        """
        Tolerant parse of a persisted value; unknown values fall back to `default` (MANUAL).
        """
        try:
            return cls(str(raw).upper())
        except ValueError:
            return default or cls.MANUAL


class ClipboardOp(StrEnum):
    CUT = "cut"
    COPY = "copy"


@dataclass(slots=True, kw_only=True)
class FavoriteEntry:
    """
    A tracked path.

    Attributes:
        path: Absolute path, unique within the store.
        kind: File or folder.
        category: Name of the owning category, None for root level.
    """

    path: str
    kind: EntryKind
    category: str | None = None

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER

    def to_record(self, stored_path: str | None = None) -> dict[str, str]:
        """
        Persisted shape: `{path, type, category?}`.
        """
        record = {"path": stored_path if stored_path is not None else self.path, "type": self.kind.value}
        if self.category:
            record["category"] = self.category
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any], path: str | None = None) -> FavoriteEntry:
        """
        Construit depuis un item persisté; un `type` inconnu retombe sur `file`.
        """
        raw_kind = str(record.get("type", EntryKind.FILE.value)).lower()
        kind = EntryKind.FOLDER if raw_kind == EntryKind.FOLDER.value else EntryKind.FILE
        category = record.get("category") or None
        return cls(
            path=path if path is not None else str(record["path"]),
            kind=kind,
            category=str(category) if category else None,
        )


@dataclass(slots=True)
class ClipboardState:
    """
    Process-wide cut/copy buffer.

    Overwritten by every cut/copy, cleared after a cut-paste, kept after a copy-paste.
    """

    paths: list[str] = field(default_factory=list)
    operation: ClipboardOp | None = None

    @property
    def is_empty(self) -> bool:
        return not self.paths or self.operation is None

    def set(self, paths: list[str], operation: ClipboardOp) -> None:
        self.paths = list(paths)
        self.operation = operation

    def clear(self) -> None:
        self.paths = []
        self.operation = None


@dataclass(slots=True, frozen=True)
class FavoritesSnapshot:
    """
    Immutable copy of the store content, handed to the persistence layer.
    """

    items: tuple[FavoriteEntry, ...]
    categories: tuple[str, ...]
    sort_mode: SortMode
