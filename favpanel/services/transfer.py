"""
# services/transfer.py

Per-item move/copy into a directory, shared by drag-and-drop and paste.
"""

from __future__ import annotations

from collections.abc import Sequence
import os

from favpanel.io.fs_ops import check_move, copy_path, move_path
from favpanel.models.exceptions import FavPanelError
from favpanel.models.favorites import ClipboardOp
from favpanel.models.host import HostProtocol
from favpanel.models.report import BatchReport
from favpanel.services.favorites_store import FavoritesStore
from favpanel.utils.logger import LoggerProtocol, ensure_logger, with_child_logger

TRACKED_DESTINATION = "destination is already a favorite"


def check_tracked(store: FavoritesStore, destination: str) -> str | None:
    """
    Reason a move must not land on `destination` while a favorite sits there or beneath it.
    """
    if store.tracked_under(destination):
        return TRACKED_DESTINATION
    return None


@with_child_logger
def transfer_into(
    store: FavoritesStore,
    host: HostProtocol,
    sources: Sequence[str],
    folder: str,
    operation: ClipboardOp,
    *,
    skip_missing: bool = False,
    logger: LoggerProtocol | None = None,
) -> BatchReport:
    """
    Move or copy each source into `folder` under its own base name.

    A failing item is reported to the host and does not stop the batch. For a move, the
    tracked favorite (if any) gets its new path only once the rename succeeded. Store
    changes are grouped so the batch is persisted once, after every item was attempted.
    Callers get exactly one refresh either way.
    """
    logger = ensure_logger(logger, __name__)
    report = BatchReport()
    verb = "move" if operation is ClipboardOp.CUT else "copy"
    relocated = 0

    with store.transaction():
        for source in sources:
            name = os.path.basename(os.path.normpath(source))
            if skip_missing and not os.path.lexists(source):
                logger.debug("[TRANSFER] vanished, skipped: %s", source)
                report.skipped.append((source, "vanished"))
                continue
            destination = os.path.join(folder, name)
            reason = check_move(source, destination)
            if not reason and operation is ClipboardOp.CUT:
                reason = check_tracked(store, destination)
            if reason:
                host.show_warning(f"Cannot {verb} {name}: {reason}")
                report.skipped.append((source, reason))
                continue
            try:
                if operation is ClipboardOp.CUT:
                    move_path(source, destination, logger=logger)
                else:
                    copy_path(source, destination, logger=logger)
            except FavPanelError as exc:
                exc.with_context({"step": "transfer_into", "operation": verb, "folder": folder})
                logger.warning("[%s] %s | ctx=%r", exc.code.name, str(exc), exc.ctx)
                host.show_error(f"Failed to {verb} {name}: {exc.reason}")
                report.failed.append((source, exc.reason))
                continue
            report.done.append((source, destination))
            if operation is ClipboardOp.CUT:
                relocated += store.relocate(source, destination)

    if not relocated:
        store.refresh()
    logger.info(
        "[TRANSFER] %s into %s: %d done, %d skipped, %d failed",
        verb,
        folder,
        len(report.done),
        len(report.skipped),
        len(report.failed),
    )
    return report
