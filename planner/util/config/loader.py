# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import pathlib
import sys

from typing import TYPE_CHECKING, Any

import yaml

from ..helpers import script_info
from ..mixins import LoggableMixin
from .models import ConfigBase, ConfigLoggingOnly
from .models.config_path import ConfigFilePath
from .yaml_loader import IncludeLoader


if TYPE_CHECKING:
    import argparse


class ConfigFileLoader[C: ConfigBase](LoggableMixin):
    """Build a configuration object from YAML, command-line overrides and the injected ``app`` section."""

    def __init__(self, config_class: type[C], args: argparse.Namespace | None = None) -> None:
        self.config_class = config_class
        self.args = args
        self.config: C | None = None
        self.path: ConfigFilePath | str = "-"
        self.data: dict[str, Any] = {}

    def _merge_args(self) -> None:
        if self.args is None:
            return

        for name, value in vars(self.args).items():
            if value is None:
                continue

            # Key is in the form 'section.key.subkey'
            split = name.split(".")
            if split[0] == "app":
                continue

            d: dict[str, Any] = self.data
            for key in split[:-1]:
                next_d = d.get(key)
                if not isinstance(next_d, dict):
                    next_d = {}
                    d[key] = next_d
                d = next_d

            d[split[-1]] = value

    def open(self, path: ConfigFilePath | pathlib.Path | str) -> C:
        if self.config is not None:
            msg = "Configuration already loaded. Cannot load again."
            raise RuntimeError(msg)

        if not isinstance(path, ConfigFilePath):
            path = ConfigFilePath(str(path))
        self.path = path

        with path.open() as f:
            data = yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader

        # An empty file is a valid (default) configuration
        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"Invalid configuration file format. Expected a dictionary, got {type(data).__name__}"
            raise TypeError(msg)

        return self.load(data)

    def load(self, data: dict[str, Any] | str) -> C:
        if self.config is not None:
            msg = "Configuration already loaded. Cannot load again."
            raise RuntimeError(msg)

        if isinstance(data, str):
            data = yaml.load(data, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader

        if data is None:
            msg = "Configuration is empty"
            raise ValueError(msg)
        if not isinstance(data, dict):
            msg = f"Invalid configuration format. Expected a dictionary, got {type(data).__name__}"
            raise TypeError(msg)
        self.data = data

        self._merge_args()
        self._init_logging_manager()

        # Inject static application information
        if "app" in self.data:
            msg = "Configuration file contains 'app' section. This is reserved for internal use."
            raise ValueError(msg)
        self.data["app"] = {
            "name": script_info.get_script_name(),
            "exe": script_info.get_exe_name(),
            "paths": {"config": str(self.path), "home": script_info.get_script_home()},
            "test": script_info.is_unit_test(),
        }

        if not script_info.is_unit_test():
            self.log.info("****** %s ******", self.data["app"]["name"], extra={"simple": True})
            self.log.debug("Command line: %s", " ".join(sys.argv))

        self.config = self.config_class.model_validate(self.data)

        self.log.info("Configuration loaded successfully")
        if not script_info.is_unit_test():
            self.config.debug()

        return self.config

    def _init_logging_manager(self) -> None:
        # Unit tests initialise logging through a session fixture
        if script_info.is_unit_test():
            return

        from ..logging.manager import LoggingManager

        config = ConfigLoggingOnly(logging=self.data.get("logging", {}))
        self.data["logging"] = config.logging

        manager = LoggingManager()
        if not manager.initialized:
            manager.initialize(config.logging)
