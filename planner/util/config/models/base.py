# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import logging

from reprlib import Repr

from pydantic import Field

from .app_info import AppInfo
from .base_model import BaseConfigModel
from .logging import LoggingConfig


class ConfigLoggingOnly(BaseConfigModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")


class ConfigBase(ConfigLoggingOnly):
    app: AppInfo = Field(description="Application information, automatically gathered at startup")

    def debug(self) -> None:
        """Dump the loaded configuration at DEBUG level, pretty-printed on rich terminals."""
        model_dump = None

        if self.log.isEnabledForTty(logging.DEBUG):
            if self.logging.rich:
                from rich import pretty

                pretty.pprint(self, indent_guides=True, expand_all=True)
            else:
                model_dump = self.model_dump()
                self.log.debug(Repr(indent=4).repr(model_dump), extra={"handler": "tty"})

        if self.log.isEnabledForFile(logging.DEBUG):
            if model_dump is None:
                model_dump = self.model_dump()
            self.log.debug("Configuration: %s", Repr(indent=4).repr(model_dump), extra={"handler": "file"})
