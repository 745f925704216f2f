"""2025-10-18 - logger du projet."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import functools
import logging
import logging.handlers
import os
from typing import Any, Optional, ParamSpec, Protocol, TypeVar, cast

from favpanel.utils.config import LOG_FILE_PATH, LOG_LEVEL, LOG_ROTATION_DAYS
from favpanel.utils.log_rotation import rotate_logs

GLOBAL_LOG_NAME = "FavPanel.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"
# fichiers gardés par le handler, en plus de rotate_logs
HANDLER_BACKUPS = 14


class LoggerProtocol(Protocol):
    """
    What every component expects from a logger.

    Same level methods as `logging.Logger`, plus `get_child` which derives a logger
    that writes through the parent's handlers.
    """

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def get_child(self, suffix: str) -> LoggerProtocol: ...


@dataclass(frozen=True)
class FavPanelLogger:
    """
    `LoggerProtocol` over a configured `logging.Logger`.

    Attributes:
        _base: The stdlib logger receiving the records.
    """

    _base: logging.Logger

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None:
        """
        ERROR record with the traceback of the exception being handled.
        """
        self._base.exception(msg, *args, **kwargs)

    def get_child(self, suffix: str) -> LoggerProtocol:
        return FavPanelLogger(self._base.getChild(suffix))


def _midnight_file(path: str, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        backupCount=HANDLER_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def _configure(base: logging.Logger, level: int, log_files: list[str]) -> None:
    """
    Attach console + file handlers the first time a logger name is seen.
    """
    base.setLevel(level)
    if getattr(base, "_favpanel_configured", False):
        return

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    base.addHandler(console)
    for path in dict.fromkeys(log_files):
        base.addHandler(_midnight_file(path, formatter))

    # pas de double affichage via le root logger
    base.propagate = False
    setattr(base, "_favpanel_configured", True)


def _level() -> int:
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.INFO


def get_logger(script_name: str) -> LoggerProtocol:
    """
    Logger named `script_name`, writing to the console, `FavPanel.log` and `<script_name>.log`.

    Old files of the log directory are pruned first (LOG_ROTATION_DAYS).
    """
    os.makedirs(LOG_FILE_PATH, exist_ok=True)
    script_log = os.path.join(LOG_FILE_PATH, f"{script_name}.log")
    base = logging.getLogger(script_name)
    _configure(base, _level(), [os.path.join(LOG_FILE_PATH, GLOBAL_LOG_NAME), script_log])

    logger = FavPanelLogger(base)
    try:
        rotate_logs(LOG_FILE_PATH, LOG_ROTATION_DAYS, logf=script_log)
    except OSError as exc:
        logger.warning("Log rotation failed: %s", exc)
    return logger


def ensure_logger(logger: LoggerProtocol | None, module: str) -> LoggerProtocol:
    """
    `logger` itself, or the module logger when None.
    """
    return logger if logger is not None else get_logger(module)


P = ParamSpec("P")
R = TypeVar("R")


def with_child_logger(func: Callable[P, R]) -> Callable[P, R]:
    """
    Fill a missing `logger=` keyword with a child logger named after the function.

    A logger passed by the caller is used as is.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if cast(Optional[LoggerProtocol], kwargs.get("logger")) is None:
            kwargs["logger"] = _get_or_child(get_logger(func.__module__), func.__name__)
        return func(*args, **kwargs)

    return wrapper


def _get_or_child(logger: LoggerProtocol, suffix: str) -> LoggerProtocol:
    name = cast(logging.Logger, logger._base).name  # type: ignore[attr-defined]
    if name == suffix or name.endswith(f".{suffix}"):
        return logger
    return logger.get_child(suffix)
