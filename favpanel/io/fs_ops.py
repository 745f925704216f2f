"""
# io/fs_ops.py
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil
import stat

from send2trash import send2trash

from favpanel.models.exceptions import ErrCode, FavPanelError
from favpanel.models.favorites import EntryKind
from favpanel.models.types import StrOrPath
from favpanel.utils.logger import LoggerProtocol, ensure_logger, with_child_logger


def detect_kind(path: StrOrPath) -> EntryKind:
    """
    Folder when the path is a directory, file otherwise (also when stat fails).
    """
    try:
        return EntryKind.FOLDER if Path(path).is_dir() else EntryKind.FILE
    except OSError:
        return EntryKind.FILE


def get_mtime(path: StrOrPath) -> float:
    """
    Last-modification timestamp, 0.0 for a vanished or unreadable path.
    """
    try:
        return os.stat(path).st_mtime
    except OSError:
        return 0.0


def resolve_directory(path: StrOrPath | None) -> str | None:
    """
    Directory designated by a drop/paste target: the path itself for a directory, its parent for a file.

    None when the path is empty or cannot be stat'ed.
    """
    if not path:
        return None
    try:
        st = os.stat(path)
    except OSError:
        return None
    p = os.fspath(path)
    return p if stat.S_ISDIR(st.st_mode) else os.path.dirname(p)


def check_move(source: str, destination: str) -> str | None:
    """
    Reason for refusing to put `source` at `destination`, None when allowed.
    """
    src = os.path.normpath(source)
    dst = os.path.normpath(destination)
    if src == dst:
        return "source and destination are the same"
    if dst.startswith(src + os.sep):
        return "cannot move a folder into itself"
    if os.path.lexists(dst):
        return "destination already exists"
    return None


@with_child_logger
def move_path(source: StrOrPath, destination: StrOrPath, *, logger: LoggerProtocol | None = None) -> str:
    """
    Rename/move `source` to `destination` (never overwrites).
    """
    logger = ensure_logger(logger, __name__)
    src, dst = os.fspath(source), os.fspath(destination)
    if os.path.lexists(dst):
        raise FavPanelError("destination already exists", code=ErrCode.FILEERROR, ctx={"destination": dst})
    try:
        shutil.move(src, dst)
    except OSError as exc:
        raise FavPanelError(str(exc), code=ErrCode.FILEERROR, ctx={"source": src, "destination": dst}) from exc
    logger.info("[move] %s → %s", src, dst)
    return dst


@with_child_logger
def copy_path(source: StrOrPath, destination: StrOrPath, *, logger: LoggerProtocol | None = None) -> str:
    """
    Copy a file or a whole directory to `destination` without overwriting.
    """
    logger = ensure_logger(logger, __name__)
    src, dst = os.fspath(source), os.fspath(destination)
    if os.path.lexists(dst):
        raise FavPanelError("destination already exists", code=ErrCode.FILEERROR, ctx={"destination": dst})
    try:
        if os.path.isdir(src):
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst)
    except (OSError, shutil.Error) as exc:
        raise FavPanelError(str(exc), code=ErrCode.FILEERROR, ctx={"source": src, "destination": dst}) from exc
    logger.info("[copy] %s → %s", src, dst)
    return dst


@with_child_logger
def trash_path(path: StrOrPath, *, logger: LoggerProtocol | None = None) -> None:
    """
    Send a file or directory to the OS trash.
    """
    logger = ensure_logger(logger, __name__)
    p = os.fspath(path)
    if not os.path.lexists(p):
        raise FavPanelError("path not found", code=ErrCode.NOFILE, ctx={"path": p})
    try:
        send2trash(p)
    except OSError as exc:
        raise FavPanelError(str(exc), code=ErrCode.FILEERROR, ctx={"path": p}) from exc
    logger.info("🗑️ [FILE] Moved to trash: %s", p)


@with_child_logger
def create_file(directory: StrOrPath, name: str, *, logger: LoggerProtocol | None = None) -> str:
    logger = ensure_logger(logger, __name__)
    target = Path(directory) / name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "x", encoding="utf-8"):
            pass
    except FileExistsError as exc:
        raise FavPanelError("file already exists", code=ErrCode.FILEERROR, ctx={"path": str(target)}) from exc
    except OSError as exc:
        raise FavPanelError(str(exc), code=ErrCode.FILEERROR, ctx={"path": str(target)}) from exc
    logger.info("[FILE] created: %s", target)
    return str(target)


@with_child_logger
def create_folder(directory: StrOrPath, name: str, *, logger: LoggerProtocol | None = None) -> str:
    logger = ensure_logger(logger, __name__)
    target = Path(directory) / name
    try:
        target.mkdir(parents=True, exist_ok=False)
    except FileExistsError as exc:
        raise FavPanelError("folder already exists", code=ErrCode.FILEERROR, ctx={"path": str(target)}) from exc
    except OSError as exc:
        raise FavPanelError(str(exc), code=ErrCode.FILEERROR, ctx={"path": str(target)}) from exc
    logger.info("[FOLDER] created: %s", target)
    return str(target)
