"""Opt-in stderr logging for titanic_tree.

Split decisions and pruning candidates are logged at DEBUG, pruning steps and
assessments at INFO. Nothing is written until `enable_logging()` is called. Loguru's default handler is removed on
import so records are never written twice.
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

type LogFormat = Literal["short", "full"]

_LOCATIONS: Final[dict[str, str]] = {
    "short": "<cyan>{function}</cyan>",
    "full": "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>",
}


class LoggingHandle:
    """One stderr sink added by `enable_logging()`.

    Handles are counted across the process: the package logger is disabled
    again only when the last active handle is disabled.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = build_tree(examples, FEATURES)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's sink; silence the package if no handle remains. Idempotent."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Number of handles not yet disabled."""
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Enable titanic_tree logging to stderr.

    Each call adds its own sink and returns an independent handle for it.

    Args:
        level (LogLevel): Minimum log level to display. Defaults to "INFO",
            which shows pruning steps, the selected tree and assessment
            results. Use "DEBUG" to see every split decision and the
            validation risk of each pruning candidate.
        log_format (LogFormat): "short" (default) shows only the function
            name; "full" shows module:function:line.

    Returns:
        LoggingHandle: Handle that removes the sink on `disable()` or context exit.
    """
    logger.enable(PACKAGE_NAME)

    format_str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
        f"{_LOCATIONS[log_format]} - <level>{{message}}</level> {{extra}}"
    )
    return LoggingHandle(logger.add(sys.stderr, level=level, filter=_is_package_record, format=format_str))


def _is_package_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
