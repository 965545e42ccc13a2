# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import atexit
import logging
import sys

from typing import TYPE_CHECKING, override

from ..helpers import script_info


if TYPE_CHECKING:
    from .manager import LoggingManager


class ExitHandler(logging.Handler):
    """Count warnings and errors, and print a one-line summary when the process exits."""

    def __init__(self, manager: LoggingManager, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)

        self.manager = manager
        self.in_atexit = False

        self.num_warning = 0
        self.num_error = 0

        self.setLevel(logging.WARNING)
        atexit.register(self.atexit)

    @property
    def success(self) -> bool:
        return self.num_error == 0

    def summary(self) -> str:
        script_name = script_info.get_script_name()
        if not self.success:
            plural = "" if self.num_error == 1 else "s"
            return f"****** {script_name} terminated with {self.num_error} error{plural} and {self.num_warning} warning(s)! ******"
        if self.num_warning > 0:
            plural = "" if self.num_warning == 1 else "s"
            return f"****** {script_name} terminated with {self.num_warning} warning{plural}! ******"
        return f"{script_name} terminated successfully."

    def atexit(self) -> None:
        self.in_atexit = True

        summary = self.summary()
        print(f"\n{summary}", file=sys.stderr)  # noqa: T201 as this is an exit message

        if self.manager.fh is not None:
            logging.log(logging.CRITICAL + 1, summary, extra={"handler": "file", "simple": True})  # noqa: LOG015 as this is an exit message

        logging.shutdown()

    @override
    def emit(self, record: logging.LogRecord) -> None:
        pass

    @override
    def handle(self, record: logging.LogRecord) -> bool:
        if self.in_atexit:
            return False

        if record.levelno >= logging.ERROR:
            self.num_error += 1
        elif record.levelno >= logging.WARNING:
            self.num_warning += 1
        return True
