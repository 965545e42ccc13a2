# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import logging
import sys

from types import TracebackType


# Route uncaught exceptions through logging so they also end up in the log file
def handle_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logging.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))  # noqa: LOG015 as logging may not be configured yet


def install() -> None:
    sys.excepthook = handle_exception
