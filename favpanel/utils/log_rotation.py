"""2025-10-18 - purge des vieux logs."""

from __future__ import annotations

from pathlib import Path
import time

SECONDS_PER_DAY = 86400


def rotate_logs(log_dir: str, keep_days: int = 30, logf: str | None = None) -> int:
    """
    Remove the files of `log_dir` last modified more than `keep_days` ago.

    Each removal (or failure) is appended to `logf` when given. Returns the count removed.
    """
    directory = Path(log_dir)
    journal = Path(logf) if logf else None

    def note(line: str) -> None:
        if journal is not None:
            with journal.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")

    if not directory.is_dir():
        note(f"[LOG ROTATION] Log directory not found: {directory}")
        return 0

    cutoff = time.time() - keep_days * SECONDS_PER_DAY
    stale = [p for p in directory.iterdir() if p.is_file() and p.stat().st_mtime < cutoff]
    removed = 0
    for path in stale:
        try:
            path.unlink()
        except OSError as exc:
            note(f"[LOG ROTATION] Could not remove {path}: {exc}")
            continue
        removed += 1
        note(f"[LOG ROTATION] Removed: {path}")
    return removed
