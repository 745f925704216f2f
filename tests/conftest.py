"""
Fixtures partagées.
"""

from __future__ import annotations

import os
import tempfile

# Les logs des tests ne doivent pas polluer ./logs; à faire avant tout import favpanel
os.environ.setdefault("LOG_FILE_PATH", tempfile.mkdtemp(prefix="favpanel-logs-"))
os.environ.setdefault("FAVPANEL_ENV_FILE", os.path.join(tempfile.gettempdir(), "favpanel-no-such.env"))

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from favpanel.io.paths import PathNormalizer  # noqa: E402
from favpanel.models.favorites import FavoritesSnapshot  # noqa: E402
from favpanel.models.host import ConsoleHost  # noqa: E402
from favpanel.services.favorites_store import FavoritesStore  # noqa: E402


class Recorder:
    """Counts store notifications and persistence calls."""

    def __init__(self) -> None:
        self.snapshots: list[FavoritesSnapshot] = []
        self.notifications = 0

    def persist(self, snapshot: FavoritesSnapshot) -> None:
        self.snapshots.append(snapshot)

    def notify(self) -> None:
        self.notifications += 1

    @property
    def persisted(self) -> int:
        return len(self.snapshots)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def store(recorder: Recorder) -> FavoritesStore:
    s = FavoritesStore(persist=recorder.persist)
    s.subscribe(recorder.notify)
    return s


@pytest.fixture
def host() -> ConsoleHost:
    return ConsoleHost()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    tmp_path/
      dir1/inner.txt
      dir2/
      a.txt
      b.txt
    """
    (tmp_path / "dir1").mkdir()
    (tmp_path / "dir1" / "inner.txt").write_text("inner", encoding="utf-8")
    (tmp_path / "dir2").mkdir()
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    (tmp_path / "b.txt").write_text("b", encoding="utf-8")
    return tmp_path


@pytest.fixture
def normalizer(workspace: Path) -> PathNormalizer:
    return PathNormalizer(str(workspace))
