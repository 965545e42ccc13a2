# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .base_model import BaseConfigModel  # noqa: I001 as the other models depend on it

from .app_info import AppInfo
from .base import ConfigBase, ConfigLoggingOnly
from .config_path import ConfigFilePath
from .logging import LoggingConfig, LoggingLevels


__all__ = [
    "AppInfo",
    "BaseConfigModel",
    "ConfigBase",
    "ConfigFilePath",
    "ConfigLoggingOnly",
    "LoggingConfig",
    "LoggingLevels",
]
