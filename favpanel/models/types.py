"""
types.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

StrOrPath = str | Path

Listener = Callable[[], None]
