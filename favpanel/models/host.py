"""
# models/host.py
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from favpanel.models.nodes import TreeNode
from favpanel.utils.logger import LoggerProtocol, get_logger

NoticeLevel = Literal["info", "warning", "error"]


class HostProtocol(Protocol):
    """
    What the surrounding tree widget provides to the core.

    Notices are user-visible messages; `selection` is the widget's current selection snapshot.
    """

    def show_info(self, message: str) -> None:
        ...

    def show_warning(self, message: str) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...

    def selection(self) -> Sequence[TreeNode]:
        ...

    def write_clipboard_text(self, text: str) -> None:
        ...

    def execute_command(self, command_id: str, argument: Mapping[str, Any]) -> None:
        ...


@dataclass
class ConsoleHost:
    """
    Host without a widget: notices go to the logger and are kept in `messages`.

    Used by the CLI and the tests.
    """

    selected: list[TreeNode] = field(default_factory=list)
    messages: list[tuple[NoticeLevel, str]] = field(default_factory=list)
    clipboard_text: str = ""
    executed: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    logger: LoggerProtocol | None = None

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = get_logger("FavPanel Host")

    def _notice(self, level: NoticeLevel, message: str) -> None:
        self.messages.append((level, message))
        assert self.logger is not None
        getattr(self.logger, level)("[HOST] %s", message)

    def show_info(self, message: str) -> None:
        self._notice("info", message)

    def show_warning(self, message: str) -> None:
        self._notice("warning", message)

    def show_error(self, message: str) -> None:
        self._notice("error", message)

    def selection(self) -> Sequence[TreeNode]:
        return list(self.selected)

    def write_clipboard_text(self, text: str) -> None:
        self.clipboard_text = text

    def execute_command(self, command_id: str, argument: Mapping[str, Any]) -> None:
        self.executed.append((command_id, dict(argument)))

    def notices(self, level: NoticeLevel) -> list[str]:
        return [msg for lvl, msg in self.messages if lvl == level]
