# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import logging

from typing import override


class HandlerFilter(logging.Filter):
    """Drop records that were explicitly addressed to another handler via ``extra={"handler": ...}``."""

    def __init__(self, handler_name: str) -> None:
        super().__init__()
        self.handler_name = handler_name

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        record_handler = getattr(record, "handler", None)
        return record_handler is None or record_handler == self.handler_name


class ConditionalFormatter(logging.Formatter):
    """Formatter that prints the bare message for records logged with ``extra={"simple": True}``."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "simple", False):
            return record.getMessage()
        return super().format(record)
