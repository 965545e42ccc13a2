# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import logging

from typing import override

from rich.console import Console, ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text


class CustomRichHandler(RichHandler):
    """Rich TTY handler printing ``[L:logger.name] message`` without the time column."""

    def __init__(self, *args, level_color_everything: bool = True, **kwargs) -> None:
        kwargs.setdefault("console", Console(stderr=True))
        kwargs.setdefault("rich_tracebacks", True)
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_level", False)
        kwargs.setdefault("enable_link_path", False)
        super().__init__(*args, **kwargs)

        self.level_color_everything = level_color_everything

    def get_level_style(self, record: logging.LogRecord) -> str:
        return f"logging.level.{record.levelname.lower()}"

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        text = Text()

        if not getattr(record, "simple", False):
            text.append("[", style="dim")
            text.append(record.levelname[0], style=self.get_level_style(record))
            text.append(f":{record.name}", style="dim")
            text.append("] ", style="dim")

        style = self.get_level_style(record) if self.level_color_everything else "log.message"
        text.append(message, style=style)
        return text
