# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Logging configuration for studyplanner.

Configures file and TTY logging, per-logger levels and the exit summary.
"""

from __future__ import annotations

import logging
import re
import sys

from typing import Any, ClassVar, Self

from ..config.models.logging import LoggingConfig
from ..helpers import script_info
from . import exception_handler
from .exit_handler import ExitHandler
from .handlers import ConditionalFormatter, HandlerFilter


######
# MARK: Constants
LOG_FILE_NAME: str = f"{script_info.get_script_name()}.log"


######
# MARK: Logging Manager
class LoggingManager:
    _instance: ClassVar[LoggingManager | None] = None

    initialized: bool
    config: LoggingConfig
    fh: logging.Handler | None
    ch: logging.Handler | None

    def __new__(cls) -> Self:
        if (instance := cls._instance) is None:
            instance = cls._instance = super().__new__(cls)
            instance.initialized = False
            instance.fh = None
            instance.ch = None
        return instance

    def initialize(self, config: LoggingConfig | dict[str, Any]) -> None:
        if not isinstance(config, LoggingConfig):
            config = LoggingConfig.model_validate(config)

        if self.initialized:
            msg = f"Must not initialise {type(self).__name__} twice"
            raise RuntimeError(msg)
        self.initialized = True

        self.config = config
        self.log_file_path = config.dir / LOG_FILE_NAME

        self._configure_root_logger()
        self._configure_file_handler()
        self._configure_tty_handler()
        self._configure_exit_handler()
        self._configure_exception_handler()
        self._configure_custom_logger_levels()

    def _configure_root_logger(self) -> None:
        logging.captureWarnings(capture=True)
        logging.root.setLevel(self.config.levels.root.value)

    def _configure_file_handler(self) -> None:
        self.fh = None
        if self.config.levels.file.value < 0:
            return

        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        self.fh = logging.FileHandler(self.log_file_path, mode="w", encoding="UTF-8")
        self.fh.setLevel(self.config.levels.file.value)
        self.fh.setFormatter(ConditionalFormatter("%(asctime)s [%(levelname)s:%(name)s] %(message)s"))
        self.fh.addFilter(HandlerFilter("file"))
        logging.root.addHandler(self.fh)

    def _configure_tty_handler(self) -> None:
        self.ch = None
        if self.config.levels.tty.value < 0:
            return

        if self.config.rich:
            from .rich_handler import CustomRichHandler

            self.ch = CustomRichHandler()
        else:
            self.ch = logging.StreamHandler(sys.stderr)
            self.ch.setFormatter(ConditionalFormatter("[%(levelname).1s:%(name)s] %(message)s"))

        self.ch.setLevel(self.config.levels.tty.value)
        self.ch.addFilter(HandlerFilter("tty"))

        # pytest captures logging on its own
        if not script_info.is_unit_test():
            logging.root.addHandler(self.ch)

    def _configure_exit_handler(self) -> None:
        if script_info.is_unit_test():
            return

        self.eh = ExitHandler(self)
        logging.root.addHandler(self.eh)

    def _configure_exception_handler(self) -> None:
        if script_info.is_unit_test():
            return

        if self.config.rich:
            from rich.traceback import install

            install(extra_lines=1, show_locals=False, word_wrap=False)
        else:
            exception_handler.install()

    def apply_logging_level(self, logger: logging.Logger) -> None:
        # Explicit levels win
        if logger.level != logging.NOTSET:
            return

        # Apply the longest matching custom level, or the default if none match
        level = self.config.levels.default
        matched_len = 0

        for pattern, custom_level in self.config.levels.custom.items():
            assert isinstance(pattern, re.Pattern), f"Custom logging levels keys must be compiled regex patterns, got {type(pattern)}"
            if (match := pattern.match(logger.name)) is not None and len(match.group(0)) > matched_len:
                level = custom_level
                matched_len = len(match.group(0))

        if level == logging.NOTSET:
            return

        logger.setLevel(logging.CRITICAL + 1 if level.value < 0 else level.value)

    def _configure_custom_logger_levels(self) -> None:
        for logger_name in list(logging.root.manager.loggerDict):
            logger = logging.root.manager.loggerDict[logger_name]
            if isinstance(logger, logging.Logger):
                self.apply_logging_level(logger)
