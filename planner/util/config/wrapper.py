# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any

from ..helpers import script_info
from .args import ArgParserBase
from .loader import ConfigFileLoader
from .models import ConfigBase, ConfigFilePath


if TYPE_CHECKING:
    import argparse


class ConfigManager[C: ConfigBase, A: ArgParserBase]:
    """Process-wide access point to the loaded configuration.

    Attribute access is forwarded to the loaded configuration object once :meth:`initialize`,
    :meth:`open` or :meth:`load` has been called.
    """

    def __init__(self, config_class: type[C], argparser_class: type[A]) -> None:
        self.config_class = config_class
        self.argparser_class = argparser_class
        self.config: C | None = None

    @property
    def loaded(self) -> bool:
        return self.config is not None

    def initialize(self) -> C:
        if self.config is not None:
            return self.config
        return self.open(getattr(self.args, "app.paths.config"))

    @cached_property
    def args(self) -> argparse.Namespace:
        parser = self.argparser_class()
        return parser.parse_args()

    def open(self, path: ConfigFilePath | str) -> C:
        loader = ConfigFileLoader(self.config_class, self.args)
        self.config = loader.open(path)
        return self.config

    def load(self, config: str | dict[str, Any] | C) -> C:
        if isinstance(config, self.config_class):
            self.config = config
        elif isinstance(config, (str, dict)):
            loader = ConfigFileLoader(self.config_class, self.args)
            self.config = loader.load(config)
        else:
            msg = f"Expected {self.config_class.__name__}, str or dict, got {type(config).__name__}"
            raise TypeError(msg)
        return self.config

    def reset(self) -> None:
        if not script_info.is_unit_test():
            msg = "Cannot reset configuration outside of unit tests"
            raise RuntimeError(msg)
        self.config = None

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined on the manager itself
        if name.startswith("__") or name in ("config", "config_class", "argparser_class"):
            raise AttributeError(name)
        if (config := self.config) is None:
            msg = f"Configuration not initialized, cannot access '{name}'. Call 'initialize()' first."
            raise RuntimeError(msg)
        return getattr(config, name)
