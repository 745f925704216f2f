"""
# models/report.py
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class BatchReport:
    """
    Per-item outcome of a batch filesystem operation (drop, paste, delete).

    Attributes:
        done: (source, destination) pairs that succeeded.
        skipped: (path, reason) pairs rejected before touching the disk.
        failed: (path, reason) pairs whose filesystem step raised.
    """

    done: list[tuple[str, str]] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)
    rejected: str | None = None

    @property
    def ok(self) -> bool:
        return self.rejected is None and not self.failed

    def sources_done(self) -> list[str]:
        return [src for src, _ in self.done]
