# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import functools
import logging

from typing import Any, override

from .loggable_protocol import LoggableProtocol


class Logger(logging.Logger):
    @override
    def isEnabledFor(self, level: int, *, handler: str | None = None) -> bool:
        if handler is None:
            return super().isEnabledFor(level)
        if handler == "tty":
            return self.isEnabledForTty(level)
        if handler == "file":
            return self.isEnabledForFile(level)
        msg = f"Unknown handler: {handler}. Expected 'tty' or 'file'."
        raise ValueError(msg)

    def _is_enabled_for_handler(self, handler: logging.Handler | None, level: int) -> bool:
        if handler is None or handler.level > level:
            return False
        return super().isEnabledFor(level)

    def isEnabledForTty(self, level: int) -> bool:  # noqa: N802 matches isEnabledFor
        from .manager import LoggingManager

        return self._is_enabled_for_handler(LoggingManager().ch, level)

    def isEnabledForFile(self, level: int) -> bool:  # noqa: N802 matches isEnabledFor
        from .manager import LoggingManager

        return self._is_enabled_for_handler(LoggingManager().fh, level)


logging.setLoggerClass(Logger)


original_logging_getLogger = logging.getLogger  # noqa: N816


def _getLogger(obj: object, parent: Any = None, name: str | None = None) -> logging.Logger:  # noqa: N802
    if name is None:
        name = obj if isinstance(obj, str) else type(obj).__name__

    # Children log underneath their parent
    if isinstance(parent, logging.Logger):
        logger = parent.getChild(name)
    elif isinstance(parent, LoggableProtocol):
        logger = parent.log.getChild(name)
    else:
        logger = original_logging_getLogger(name)

    from .manager import LoggingManager

    manager = LoggingManager()
    if manager.initialized:
        manager.apply_logging_level(logger)

    return logger


def getLogger(obj: object, parent: Any = None, name: str | None = None) -> Logger:  # noqa: N802
    """Return the :class:`Logger` for ``obj``, optionally nested underneath ``parent``."""
    logger = _getLogger(obj, parent=parent, name=name)

    if not isinstance(logger, Logger):
        msg = f"Expected a Logger instance, got: {type(logger)}"
        raise TypeError(msg)

    return logger


@functools.wraps(logging.getLogger)
def logging_getLogger_wrapper(name: str | None = None) -> logging.Logger:  # noqa: N802
    if name is None:
        return logging.root
    return _getLogger(name)


logging.getLogger = logging_getLogger_wrapper
