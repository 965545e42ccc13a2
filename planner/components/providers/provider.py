# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from abc import ABCMeta
from typing import ClassVar

from ..component import Component, ComponentConfig


# MARK: Provider Base Configuration
class ProviderConfig(ComponentConfig, metaclass=ABCMeta):
    PACKAGE_ROOT: ClassVar[str] = "planner.components.providers"


# MARK: Provider Base class
class Provider[C: ProviderConfig](Component[C], metaclass=ABCMeta):
    default_key: ClassVar[str]
