"""
# io/settings_store.py

Lecture/écriture du fichier de favoris (JSON, ou YAML selon l'extension).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import os
from pathlib import Path
import tempfile
from typing import Any

import yaml

from favpanel.io.paths import PathNormalizer
from favpanel.models.exceptions import ErrCode, FavPanelError
from favpanel.models.favorites import FavoriteEntry, FavoritesSnapshot, SortMode
from favpanel.models.types import StrOrPath
from favpanel.utils.logger import LoggerProtocol, ensure_logger

_YAML_SUFFIXES = {".yml", ".yaml"}


@dataclass(slots=True)
class FavoritesSettings:
    """
    Persisted configuration: `items`, `categories`, `sortOrder`.

    `items` keep the stored (relative-or-absolute) form.
    """

    items: list[dict[str, str]] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    sort_order: SortMode = SortMode.MANUAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [dict(item) for item in self.items],
            "categories": list(self.categories),
            "sortOrder": self.sort_order.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FavoritesSettings:
        """
        Create settings from a loaded mapping; malformed items are dropped.
        """
        items = [
            {k: str(v) for k, v in item.items() if v is not None}
            for item in data.get("items") or []
            if isinstance(item, Mapping) and item.get("path")
        ]
        categories = [str(c) for c in data.get("categories") or [] if c]
        return cls(items=items, categories=categories, sort_order=SortMode.parse(data.get("sortOrder")))

    def entries(self, normalizer: PathNormalizer) -> list[FavoriteEntry]:
        """
        Items with their stored paths turned back into absolute paths.
        """
        return [FavoriteEntry.from_record(item, path=normalizer.to_absolute(item["path"])) for item in self.items]

    @classmethod
    def from_snapshot(cls, snapshot: FavoritesSnapshot, normalizer: PathNormalizer) -> FavoritesSettings:
        return cls(
            items=[entry.to_record(normalizer.to_persisted(entry.path)) for entry in snapshot.items],
            categories=list(snapshot.categories),
            sort_order=snapshot.sort_mode,
        )


class SettingsRepository:
    """
    Charge et sauvegarde les favoris dans un fichier unique.
    """

    def __init__(
        self,
        settings_file: StrOrPath,
        normalizer: PathNormalizer,
        *,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.path = Path(settings_file)
        self.normalizer = normalizer
        self.logger = ensure_logger(logger, __name__)

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in _YAML_SUFFIXES

    def load(self) -> FavoritesSettings:
        """
        Read the settings file; a missing or empty file yields defaults.
        """
        if not self.path.exists():
            self.logger.debug("[SETTINGS] no file at %s, using defaults", self.path)
            return FavoritesSettings()
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = yaml.safe_load(raw) if self.is_yaml else (json.loads(raw) if raw.strip() else {})
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
            raise FavPanelError(
                "settings file unreadable", code=ErrCode.SETTINGS, ctx={"path": str(self.path)}
            ) from exc
        if data is None:
            return FavoritesSettings()
        if not isinstance(data, Mapping):
            raise FavPanelError("settings file is not a mapping", code=ErrCode.SETTINGS, ctx={"path": str(self.path)})
        settings = FavoritesSettings.from_dict(data)
        self.logger.debug(
            "[SETTINGS] loaded %d item(s), %d categorie(s) from %s",
            len(settings.items),
            len(settings.categories),
            self.path,
        )
        return settings

    def save(self, settings: FavoritesSettings) -> Path:
        """
        Atomic write (tmp -> replace).
        """
        payload = settings.to_dict()
        if self.is_yaml:
            content = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        else:
            content = json.dumps(payload, indent=4, ensure_ascii=False) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", encoding="utf-8", dir=self.path.parent, delete=False, suffix=".tmp"
            ) as tmp:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
                tmp_p = Path(tmp.name)
            os.replace(tmp_p, self.path)
        except OSError as exc:
            raise FavPanelError("settings write failed", code=ErrCode.SETTINGS, ctx={"path": str(self.path)}) from exc
        self.logger.debug("[SETTINGS] saved %d item(s) to %s", len(settings.items), self.path)
        return self.path

    def save_snapshot(self, snapshot: FavoritesSnapshot) -> Path:
        return self.save(FavoritesSettings.from_snapshot(snapshot, self.normalizer))
