# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from .args import ArgParserBase, DefaultArgParser
from .models import AppInfo, BaseConfigModel, ConfigBase, ConfigFilePath, ConfigLoggingOnly, LoggingConfig, LoggingLevels
from .wrapper import ConfigManager


__all__ = [
    "AppInfo",
    "ArgParserBase",
    "BaseConfigModel",
    "ConfigBase",
    "ConfigFilePath",
    "ConfigLoggingOnly",
    "ConfigManager",
    "DefaultArgParser",
    "LoggingConfig",
    "LoggingLevels",
]
