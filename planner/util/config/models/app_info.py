# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from pydantic import DirectoryPath

from .base_model import BaseConfigModel
from .config_path import ConfigFilePath


class PathsInfo(BaseConfigModel):
    config: ConfigFilePath
    home: DirectoryPath


class AppInfo(BaseConfigModel):
    name: str
    exe: str
    paths: PathsInfo
    test: bool
