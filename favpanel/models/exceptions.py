# favpanel/models/exceptions.py
from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class ErrCode(StrEnum):
    SETTINGS = "SETTINGS"  # fichier de favoris illisible / non écrivable
    FILEERROR = "FILEERROR"
    NOFILE = "NOFILE"


class FavPanelError(RuntimeError):
    """
    Failure of a disk or settings operation.

    `reason` is the short text shown to the user next to the item name; `ctx` holds the
    paths involved and is only meant for logs.
    """

    __slots__ = ("code", "ctx")

    def __init__(self, reason: str, *, code: ErrCode, ctx: Mapping[str, Any] | None = None) -> None:
        super().__init__(reason)
        self.code = code
        self.ctx: dict[str, Any] = {**(ctx or {})}

    @property
    def reason(self) -> str:
        return str(self.args[0]) if self.args else self.code.value

    def with_context(self, extra: Mapping[str, Any]) -> FavPanelError:
        """Adds keys missing from `ctx`; existing ones win."""
        self.ctx = {**extra, **self.ctx}
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.reason}"
